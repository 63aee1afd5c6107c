"""
Statement Ledger Store

Transactional persistence of users, documents, statements and transactions.
"""

from .errors import (
    AuthenticationError,
    DuplicateUsernameError,
    IntegrityViolationError,
    LedgerError,
    StoreUnavailableError,
)
from .locking import ReadWriteLock
from .records import Document, Statement, User
from .security import PasswordHasher
from .store import LedgerStore

__all__ = [
    "LedgerStore",
    "ReadWriteLock",
    "PasswordHasher",
    "User",
    "Document",
    "Statement",
    "LedgerError",
    "AuthenticationError",
    "DuplicateUsernameError",
    "IntegrityViolationError",
    "StoreUnavailableError",
]
