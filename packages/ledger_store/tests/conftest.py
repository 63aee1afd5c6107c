import pytest

from packages.ingestion_engine.models import CREDIT, DEBIT, Transaction
from packages.ledger_store import LedgerStore, PasswordHasher

# Low iteration count keeps the suite fast; production uses scrypt.
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture
def hasher():
    return PasswordHasher(FAST_HASH_METHOD)


@pytest.fixture
def store(tmp_path, hasher):
    ledger = LedgerStore(str(tmp_path / "ledger.db"), pool_size=2, password_hasher=hasher)
    yield ledger
    ledger.close()


@pytest.fixture
def user(store):
    return store.create_user("alice", "s3cret")


@pytest.fixture
def sample_transactions():
    return [
        Transaction(
            posting_date="10/03/2024",
            transaction_date="10/03/2024",
            description="Salary",
            money_in=2500.0,
            balance=3350.0,
            transaction_type=CREDIT,
        ),
        Transaction(
            posting_date="05/03/2024",
            transaction_date="04/03/2024",
            description="Grocery Store",
            money_out=150.0,
            balance=850.0,
            category="FOOD",
            transaction_type=DEBIT,
        ),
        Transaction(
            posting_date="01/03/2024",
            transaction_date="01/03/2024",
            description="Opening Deposit",
            money_in=1000.0,
            balance=1000.0,
            transaction_type=CREDIT,
        ),
    ]
