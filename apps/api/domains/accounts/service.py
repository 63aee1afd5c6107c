"""Accounts service — registration, login and document records."""

import structlog

from apps.api.core.errors import CommandResponse, run_command
from packages.ledger_store import LedgerStore

logger = structlog.get_logger()


def register(store: LedgerStore, username: str, password: str) -> CommandResponse:
    response = run_command("register", store.create_user, username, password)
    if response.success:
        logger.info("user_registered", user_id=response.data["id"])
    return response


def login(store: LedgerStore, username: str, password: str) -> CommandResponse:
    # Unknown user and wrong password produce the same error on purpose.
    return run_command("login", store.authenticate_user, username, password)


def list_users(store: LedgerStore) -> CommandResponse:
    return run_command("list_users", store.list_users)


def store_document(store: LedgerStore, user_id: str, file_path: str) -> CommandResponse:
    return run_command("store_document", store.store_document, user_id, file_path)


def get_user_documents(store: LedgerStore, user_id: str) -> CommandResponse:
    return run_command("get_user_documents", store.get_user_documents, user_id)
