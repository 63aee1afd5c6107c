"""FastAPI dependencies.

The LedgerStore is created once in the application lifespan and shared by
every request; tests swap it out through ``app.dependency_overrides``.
"""
from fastapi import Request

from apps.api.core.config import Settings
from packages.ledger_store import LedgerStore, PasswordHasher


def open_store(settings: Settings) -> LedgerStore:
    """Open the store at the configured application-data path."""
    settings.ensure_data_dir()
    return LedgerStore(
        settings.database_path,
        pool_size=settings.DB_POOL_SIZE,
        password_hasher=PasswordHasher(settings.PASSWORD_HASH_METHOD),
    )


def get_store(request: Request) -> LedgerStore:
    """Provide the process-wide LedgerStore."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
