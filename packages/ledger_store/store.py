"""
Ledger Store - durable, per-user storage of parsed statements.

Holds a bounded SQLAlchemy connection pool over one SQLite file plus a
process-wide ReadWriteLock. Every public method is one atomic operation:

    writes (exclusive lock): create_user, store_document, store_statement,
                             store_transactions, store_statement_data
    reads  (shared lock):    authenticate_user, list_users, get_user_documents,
                             get_user_transactions, get_user_statements,
                             get_statement_transactions, ping

Multi-row writes run inside a single database transaction; a failure on any
row rolls back every row written by that call.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import (
    String,
    case,
    create_engine,
    event,
    func,
    literal_column,
    select,
    type_coerce,
)
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import QueuePool

from packages.ingestion_engine.models import Transaction

from .errors import (
    AuthenticationError,
    DuplicateUsernameError,
    IntegrityViolationError,
    StoreUnavailableError,
)
from .locking import ReadWriteLock
from .records import Document, Statement, User
from .schema import documents, metadata, statements, transactions, users
from .security import PasswordHasher

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        raise IntegrityViolationError(f"Database error: {e.orig}") from e
    except SQLAlchemyError as e:
        raise StoreUnavailableError(f"Database error: {e}") from e


def _exclusive(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock.write_locked(), _translate_errors():
            return method(self, *args, **kwargs)

    return wrapper


def _shared(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock.read_locked(), _translate_errors():
            return method(self, *args, **kwargs)

    return wrapper


def _day_first_as_iso(column):
    """SQL expression turning DD/MM/YYYY into YYYY-MM-DD; other values pass through."""
    year = type_coerce(func.substr(column, 7, 4), String)
    month = func.substr(column, 4, 2)
    day = func.substr(column, 1, 2)
    return case(
        (column.like("__/__/____"), year + "-" + month + "-" + day),
        else_=column,
    )


def _row_to_transaction(row) -> Transaction:
    return Transaction(
        id=row.id,
        statement_id=row.statement_id,
        posting_date=row.posting_date,
        transaction_date=row.transaction_date,
        description=row.description,
        money_in=row.money_in,
        money_out=row.money_out,
        balance=row.balance,
        category=row.category,
        transaction_type=row.transaction_type,
    )


class LedgerStore:
    """Store service owning the connection pool and the store-wide lock."""

    def __init__(
        self,
        database_path: str,
        pool_size: int = 5,
        password_hasher: Optional[PasswordHasher] = None,
        lock: Optional[ReadWriteLock] = None,
    ):
        self.database_path = str(database_path)
        self.hasher = password_hasher or PasswordHasher()
        self._lock = lock or ReadWriteLock()

        try:
            self._engine = create_engine(
                f"sqlite:///{self.database_path}",
                poolclass=QueuePool,
                pool_size=pool_size,
                max_overflow=0,
                connect_args={"check_same_thread": False},
            )
            event.listen(self._engine, "connect", _enable_foreign_keys)
            self.create_schema()
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Failed to initialize database: {e}") from e

        logger.info(f"Ledger store ready at {self.database_path} (pool_size={pool_size})")

    @_exclusive
    def create_schema(self) -> None:
        # create_all checks for existing tables first, so this is idempotent.
        metadata.create_all(self._engine)

    def close(self) -> None:
        self._engine.dispose()

    @_shared
    def ping(self) -> bool:
        with self._engine.connect() as conn:
            return conn.execute(select(1)).scalar() == 1

    # ------------------------------------------------------------------ users

    @_exclusive
    def create_user(self, username: str, password: str) -> User:
        user = User(id=_new_id(), username=username, created_at=_now())
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    users.insert().values(
                        id=user.id,
                        username=username,
                        password_hash=self.hasher.hash(password),
                        created_at=user.created_at,
                    )
                )
        except IntegrityError as e:
            if "users.username" in str(e.orig):
                raise DuplicateUsernameError(username) from e
            raise
        logger.info(f"Created user {user.id}")
        return user

    @_shared
    def authenticate_user(self, username: str, password: str) -> User:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(users.c.id, users.c.password_hash, users.c.created_at).where(
                    users.c.username == username
                )
            ).first()

        if row is None:
            self.hasher.burn(password)
            raise AuthenticationError()
        if not self.hasher.verify(row.password_hash, password):
            raise AuthenticationError()
        return User(id=row.id, username=username, created_at=row.created_at)

    @_shared
    def list_users(self) -> List[User]:
        query = select(users.c.id, users.c.username, users.c.created_at).order_by(
            users.c.created_at.desc(), literal_column("users.rowid").desc()
        )
        with self._engine.connect() as conn:
            return [User(id=r.id, username=r.username, created_at=r.created_at) for r in conn.execute(query)]

    # -------------------------------------------------------------- documents

    def _insert_document(
        self, conn: Connection, user_id: str, file_path: str, filename: Optional[str] = None
    ) -> Document:
        document = Document(
            id=_new_id(),
            user_id=user_id,
            filename=filename or Path(file_path).name or "unknown",
            file_path=file_path,
            uploaded_at=_now(),
        )
        conn.execute(documents.insert().values(**document.to_dict()))
        return document

    @_exclusive
    def store_document(
        self, user_id: str, file_path: str, filename: Optional[str] = None
    ) -> Document:
        with self._engine.begin() as conn:
            return self._insert_document(conn, user_id, file_path, filename)

    @_shared
    def get_user_documents(self, user_id: str) -> List[Document]:
        query = (
            select(documents)
            .where(documents.c.user_id == user_id)
            .order_by(documents.c.uploaded_at.desc(), literal_column("documents.rowid").desc())
        )
        with self._engine.connect() as conn:
            return [Document(**row._asdict()) for row in conn.execute(query)]

    # ------------------------------------------------------------- statements

    def _insert_statement(
        self, conn: Connection, user_id: str, file_path: str, start_date: str, end_date: str
    ) -> str:
        document = self._insert_document(conn, user_id, file_path)
        statement_id = _new_id()
        conn.execute(
            statements.insert().values(
                id=statement_id,
                user_id=user_id,
                document_id=document.id,
                start_date=start_date,
                end_date=end_date,
                uploaded_at=_now(),
            )
        )
        return statement_id

    def _insert_transactions(
        self, conn: Connection, statement_id: str, entries: Iterable[Transaction]
    ) -> int:
        rows = [
            {
                "id": _new_id(),
                "statement_id": statement_id,
                "posting_date": t.posting_date,
                "transaction_date": t.transaction_date,
                "description": t.description,
                "money_in": t.money_in,
                "money_out": t.money_out,
                "balance": t.balance,
                "category": t.category,
                "transaction_type": t.transaction_type,
            }
            for t in entries
        ]
        if rows:
            # One prepared INSERT executed for the whole batch.
            conn.execute(transactions.insert(), rows)
        return len(rows)

    @_exclusive
    def store_statement(
        self, user_id: str, file_path: str, start_date: str, end_date: str
    ) -> str:
        """Insert a Document and its Statement as one unit; returns the statement id."""
        with self._engine.begin() as conn:
            return self._insert_statement(conn, user_id, file_path, start_date, end_date)

    @_exclusive
    def store_transactions(self, statement_id: str, entries: Iterable[Transaction]) -> None:
        """Insert every row of one statement, or none of them."""
        with self._engine.begin() as conn:
            count = self._insert_transactions(conn, statement_id, entries)
        logger.info(f"Stored {count} transactions for statement {statement_id}")

    @_exclusive
    def store_statement_data(
        self,
        user_id: str,
        file_path: str,
        start_date: str,
        end_date: str,
        entries: Iterable[Transaction],
    ) -> str:
        """Persist document, statement and transactions in a single transaction."""
        with self._engine.begin() as conn:
            statement_id = self._insert_statement(conn, user_id, file_path, start_date, end_date)
            count = self._insert_transactions(conn, statement_id, entries)
        logger.info(f"Stored statement {statement_id} with {count} transactions")
        return statement_id

    @_shared
    def get_user_statements(self, user_id: str) -> List[Statement]:
        query = (
            select(
                statements,
                documents.c.filename,
                documents.c.file_path,
            )
            .join(documents, statements.c.document_id == documents.c.id)
            .where(statements.c.user_id == user_id)
            .order_by(statements.c.uploaded_at.desc(), literal_column("statements.rowid").desc())
        )
        with self._engine.connect() as conn:
            return [Statement(**row._asdict()) for row in conn.execute(query)]

    # ----------------------------------------------------------- transactions

    @_shared
    def get_user_transactions(
        self,
        user_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Transaction]:
        """All of a user's transactions, optionally bounded by transaction date.

        Bounds are compared as text against the first 10 characters of
        transaction_date and results are sorted the same way, so both are only
        calendar-correct when stored dates are YYYY-MM-DD.
        """
        date_part = func.substr(transactions.c.transaction_date, 1, 10)
        query = (
            select(transactions)
            .join(statements, transactions.c.statement_id == statements.c.id)
            .where(statements.c.user_id == user_id)
        )
        if start_date:
            query = query.where(date_part >= start_date)
        if end_date:
            query = query.where(date_part <= end_date)
        query = query.order_by(
            date_part.desc(), func.substr(transactions.c.transaction_date, 12).desc()
        )

        logger.debug(f"Transactions query for user {user_id}: start={start_date} end={end_date}")
        with self._engine.connect() as conn:
            return [_row_to_transaction(row) for row in conn.execute(query)]

    @_shared
    def get_statement_transactions(self, statement_id: str) -> List[Transaction]:
        """One statement's transactions, most recent posting date first."""
        query = (
            select(transactions)
            .where(transactions.c.statement_id == statement_id)
            .order_by(_day_first_as_iso(transactions.c.posting_date).desc())
        )
        with self._engine.connect() as conn:
            return [_row_to_transaction(row) for row in conn.execute(query)]
