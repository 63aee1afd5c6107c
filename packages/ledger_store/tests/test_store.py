import sqlite3
from unittest.mock import patch

import pytest

from packages.ingestion_engine.models import UNKNOWN, Transaction
from packages.ledger_store import (
    AuthenticationError,
    DuplicateUsernameError,
    IntegrityViolationError,
    LedgerStore,
)


def _count(store, table):
    with sqlite3.connect(store.database_path) as conn:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class TestSchema:
    def test_reopening_existing_database(self, tmp_path, hasher):
        path = str(tmp_path / "ledger.db")
        first = LedgerStore(path, password_hasher=hasher)
        first.create_user("alice", "pw")
        first.close()

        second = LedgerStore(path, password_hasher=hasher)
        assert [u.username for u in second.list_users()] == ["alice"]
        second.close()

    def test_ping(self, store):
        assert store.ping() is True


class TestUsers:
    def test_create_user(self, store):
        user = store.create_user("alice", "s3cret")
        assert user.username == "alice"
        assert len(user.id) == 36
        assert user.created_at.endswith("+00:00")

    def test_password_is_not_stored_in_clear(self, store, user):
        with sqlite3.connect(store.database_path) as conn:
            stored = conn.execute("SELECT password_hash FROM users").fetchone()[0]
        assert stored != "s3cret"
        assert stored.startswith("pbkdf2:sha256")

    def test_duplicate_username(self, store, user):
        with pytest.raises(DuplicateUsernameError, match="Username already exists: alice"):
            store.create_user("alice", "other")
        assert _count(store, "users") == 1

    def test_authenticate(self, store, user):
        authenticated = store.authenticate_user("alice", "s3cret")
        assert authenticated.id == user.id
        assert authenticated.created_at == user.created_at

    def test_wrong_password_and_unknown_user_are_indistinguishable(self, store, user):
        with pytest.raises(AuthenticationError) as wrong_password:
            store.authenticate_user("alice", "nope")
        with pytest.raises(AuthenticationError) as unknown_user:
            store.authenticate_user("bob", "s3cret")
        assert str(wrong_password.value) == str(unknown_user.value) == "Authentication failed"

    @pytest.mark.parametrize("attempt", ["s3creT", "S3cret", "s3cre", "s3cret!", "x3cret"])
    def test_single_character_change_fails_generically(self, store, user, attempt):
        with pytest.raises(AuthenticationError) as wrong_password:
            store.authenticate_user("alice", attempt)
        with pytest.raises(AuthenticationError) as unknown_user:
            store.authenticate_user("mallory", attempt)
        assert str(wrong_password.value) == str(unknown_user.value) == "Authentication failed"

    def test_unknown_user_still_runs_a_verification(self, store):
        with patch.object(store.hasher, "burn") as burn:
            with pytest.raises(AuthenticationError):
                store.authenticate_user("ghost", "pw")
        burn.assert_called_once_with("pw")

    def test_list_users_newest_first(self, store):
        store.create_user("first", "pw")
        store.create_user("second", "pw")
        store.create_user("third", "pw")
        assert [u.username for u in store.list_users()] == ["third", "second", "first"]


class TestDocuments:
    def test_store_and_list(self, store, user):
        first = store.store_document(user.id, "/data/march.pdf")
        second = store.store_document(user.id, "/data/april.csv", filename="April export")

        assert first.filename == "march.pdf"
        assert second.filename == "April export"
        docs = store.get_user_documents(user.id)
        assert [d.id for d in docs] == [second.id, first.id]
        assert docs[1].file_path == "/data/march.pdf"

    def test_unknown_user_is_rejected(self, store):
        with pytest.raises(IntegrityViolationError):
            store.store_document("no-such-user", "/data/x.pdf")

    def test_documents_are_per_user(self, store, user):
        bob = store.create_user("bob", "pw")
        store.store_document(bob.id, "/data/bob.pdf")
        assert store.get_user_documents(user.id) == []


class TestStatements:
    def test_store_statement_creates_document(self, store, user):
        statement_id = store.store_statement(user.id, "/data/march.pdf", "01/03/2024", "31/03/2024")

        statements = store.get_user_statements(user.id)
        assert len(statements) == 1
        statement = statements[0]
        assert statement.id == statement_id
        assert statement.start_date == "01/03/2024"
        assert statement.end_date == "31/03/2024"
        assert statement.filename == "march.pdf"
        assert statement.file_path == "/data/march.pdf"
        assert [d.id for d in store.get_user_documents(user.id)] == [statement.document_id]

    def test_statements_newest_first(self, store, user):
        older = store.store_statement(user.id, "/a.pdf", "01/01/2024", "31/01/2024")
        newer = store.store_statement(user.id, "/b.pdf", "01/02/2024", "29/02/2024")
        assert [s.id for s in store.get_user_statements(user.id)] == [newer, older]

    def test_store_transactions(self, store, user, sample_transactions):
        statement_id = store.store_statement(user.id, "/a.pdf", "01/03/2024", "31/03/2024")
        store.store_transactions(statement_id, sample_transactions)
        assert _count(store, "transactions") == 3

    def test_store_transactions_unknown_statement(self, store, sample_transactions):
        with pytest.raises(IntegrityViolationError):
            store.store_transactions("missing", sample_transactions)
        assert _count(store, "transactions") == 0

    def test_store_transactions_is_all_or_nothing(self, store, user, sample_transactions):
        statement_id = store.store_statement(user.id, "/a.pdf", "01/03/2024", "31/03/2024")
        broken = Transaction(
            posting_date="02/03/2024",
            transaction_date="02/03/2024",
            description=None,
            balance=0.0,
        )
        with pytest.raises(IntegrityViolationError):
            store.store_transactions(statement_id, sample_transactions + [broken])
        assert _count(store, "transactions") == 0

    def test_empty_batch(self, store, user):
        statement_id = store.store_statement(user.id, "/a.pdf", "", "")
        store.store_transactions(statement_id, [])
        assert store.get_statement_transactions(statement_id) == []


class TestStoreStatementData:
    def test_persists_everything(self, store, user, sample_transactions):
        statement_id = store.store_statement_data(
            user.id, "/data/march.pdf", "01/03/2024", "31/03/2024", sample_transactions
        )

        assert [s.id for s in store.get_user_statements(user.id)] == [statement_id]
        stored = store.get_statement_transactions(statement_id)
        assert [t.description for t in stored] == ["Salary", "Grocery Store", "Opening Deposit"]
        assert all(t.statement_id == statement_id for t in stored)

    def test_round_trips_fields(self, store, user, sample_transactions):
        statement_id = store.store_statement_data(
            user.id, "/a.pdf", "01/03/2024", "31/03/2024", sample_transactions
        )
        grocery = store.get_statement_transactions(statement_id)[1]

        assert grocery.posting_date == "05/03/2024"
        assert grocery.transaction_date == "04/03/2024"
        assert grocery.money_in is None
        assert grocery.money_out == 150.0
        assert grocery.balance == 850.0
        assert grocery.category == "FOOD"
        assert grocery.transaction_type == "debit"
        assert grocery.id is not None

    def test_missing_category_stays_absent(self, store, user):
        entry = Transaction(
            posting_date="01/03/2024",
            transaction_date="01/03/2024",
            description="Coffee",
            money_in=45.0,
            balance=100.0,
        )
        statement_id = store.store_statement_data(user.id, "/a.csv", "", "", [entry])
        stored = store.get_statement_transactions(statement_id)[0]
        assert stored.category is None
        assert stored.transaction_type == UNKNOWN

    def test_failure_leaves_no_partial_statement(self, store, user, sample_transactions):
        broken = Transaction(
            posting_date="02/03/2024",
            transaction_date="02/03/2024",
            description=None,
        )
        with pytest.raises(IntegrityViolationError):
            store.store_statement_data(
                user.id, "/a.pdf", "01/03/2024", "31/03/2024", sample_transactions + [broken]
            )

        assert store.get_user_statements(user.id) == []
        assert store.get_user_documents(user.id) == []
        assert _count(store, "transactions") == 0

    def test_unknown_user(self, store, sample_transactions):
        with pytest.raises(IntegrityViolationError):
            store.store_statement_data("ghost", "/a.pdf", "", "", sample_transactions)
        assert _count(store, "documents") == 0


class TestTransactionQueries:
    def test_statement_transactions_sort_by_calendar_date(self, store, user):
        entries = [
            Transaction(posting_date=d, transaction_date=d, description=d, balance=0.0)
            for d in ["02/03/2024", "15/01/2024", "01/12/2023", "30/01/2024"]
        ]
        statement_id = store.store_statement_data(user.id, "/a.pdf", "", "", entries)

        ordered = [t.posting_date for t in store.get_statement_transactions(statement_id)]
        assert ordered == ["02/03/2024", "30/01/2024", "15/01/2024", "01/12/2023"]

    def test_unknown_statement_is_empty(self, store):
        assert store.get_statement_transactions("missing") == []

    def test_user_transactions_span_statements(self, store, user, sample_transactions):
        store.store_statement_data(user.id, "/a.pdf", "", "", sample_transactions[:1])
        store.store_statement_data(user.id, "/b.pdf", "", "", sample_transactions[1:])
        bob = store.create_user("bob", "pw")
        store.store_statement_data(bob.id, "/c.pdf", "", "", sample_transactions)

        assert len(store.get_user_transactions(user.id)) == 3
        assert len(store.get_user_transactions(bob.id)) == 3
        assert store.get_user_transactions("nobody") == []

    def test_iso_date_range_is_inclusive(self, store, user):
        entries = [
            Transaction(posting_date=d, transaction_date=d, description=d, balance=0.0)
            for d in ["2024-02-28", "2024-03-01", "2024-03-15", "2024-03-31", "2024-04-01"]
        ]
        store.store_statement_data(user.id, "/a.csv", "", "", entries)

        found = store.get_user_transactions(user.id, "2024-03-01", "2024-03-31")
        assert [t.transaction_date for t in found] == ["2024-03-31", "2024-03-15", "2024-03-01"]

    def test_open_ended_bounds(self, store, user):
        entries = [
            Transaction(posting_date=d, transaction_date=d, description=d, balance=0.0)
            for d in ["2024-01-01", "2024-06-01"]
        ]
        store.store_statement_data(user.id, "/a.csv", "", "", entries)

        assert [t.transaction_date for t in store.get_user_transactions(user.id, start_date="2024-02-01")] == [
            "2024-06-01"
        ]
        assert [t.transaction_date for t in store.get_user_transactions(user.id, end_date="2024-02-01")] == [
            "2024-01-01"
        ]

    def test_day_first_dates_compare_as_text(self, store, user):
        """Stored dates are kept verbatim, so DD/MM/YYYY bounds compare lexically."""
        entries = [
            Transaction(posting_date=d, transaction_date=d, description=d, balance=0.0)
            for d in ["05/01/2024", "20/12/2023"]
        ]
        store.store_statement_data(user.id, "/a.pdf", "", "", entries)

        found = store.get_user_transactions(user.id, "01/01/2024", "10/01/2024")
        assert [t.transaction_date for t in found] == ["05/01/2024"]
