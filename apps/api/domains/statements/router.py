"""Statements router — statement processing and ledger queries."""

from typing import Optional

from fastapi import APIRouter, Depends

from apps.api.core.config import Settings
from apps.api.core.errors import CommandResponse
from apps.api.deps import get_app_settings, get_store
from apps.api.domains.statements import service
from apps.api.domains.statements.schemas import ProcessStatementRequest, StoreStatementRequest
from packages.ledger_store import LedgerStore

router = APIRouter(prefix="/statements", tags=["statements"])


@router.post("/process", response_model=CommandResponse)
def process_statement(
    request: ProcessStatementRequest,
    settings: Settings = Depends(get_app_settings),
):
    """Parse a statement file already on disk. Nothing is stored."""
    return service.process_statement(request.file_path, csv_has_header=settings.CSV_HAS_HEADER)


@router.post("", response_model=CommandResponse)
def store_statement_data(
    request: StoreStatementRequest,
    store: LedgerStore = Depends(get_store),
):
    return service.store_statement_data(store, request)


@router.get("/user/{user_id}", response_model=CommandResponse)
def get_user_statements(user_id: str, store: LedgerStore = Depends(get_store)):
    return service.get_user_statements(store, user_id)


@router.get("/user/{user_id}/transactions", response_model=CommandResponse)
def get_user_transactions(
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    store: LedgerStore = Depends(get_store),
):
    """List a user's transactions, optionally bounded by YYYY-MM-DD dates."""
    return service.get_user_transactions(store, user_id, start_date, end_date)


@router.get("/{statement_id}/transactions", response_model=CommandResponse)
def get_statement_transactions(statement_id: str, store: LedgerStore = Depends(get_store)):
    return service.get_statement_transactions(store, statement_id)
