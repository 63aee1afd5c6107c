"""Error taxonomy for the ledger store."""


class LedgerError(Exception):
    """Base store error."""


class AuthenticationError(LedgerError):
    """Unknown user or bad credential.

    Both cases share this one message so callers cannot tell them apart.
    """

    def __init__(self):
        super().__init__("Authentication failed")


class DuplicateUsernameError(LedgerError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class IntegrityViolationError(LedgerError):
    """A row broke a foreign-key or NOT NULL constraint; the write was rolled back."""


class StoreUnavailableError(LedgerError):
    """The database engine or connection pool failed."""
