"""Accounts router — users, login and uploaded documents."""

from fastapi import APIRouter, Depends

from apps.api.core.errors import CommandResponse
from apps.api.deps import get_store
from apps.api.domains.accounts import service
from apps.api.domains.accounts.schemas import CredentialsRequest, StoreDocumentRequest
from packages.ledger_store import LedgerStore

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/register", response_model=CommandResponse)
def register(request: CredentialsRequest, store: LedgerStore = Depends(get_store)):
    return service.register(store, request.username, request.password)


@router.post("/login", response_model=CommandResponse)
def login(request: CredentialsRequest, store: LedgerStore = Depends(get_store)):
    return service.login(store, request.username, request.password)


@router.get("/users", response_model=CommandResponse)
def list_users(store: LedgerStore = Depends(get_store)):
    return service.list_users(store)


@router.post("/documents", response_model=CommandResponse)
def store_document(request: StoreDocumentRequest, store: LedgerStore = Depends(get_store)):
    """Record an uploaded file for a user. The file itself is not read."""
    return service.store_document(store, request.user_id, request.file_path)


@router.get("/{user_id}/documents", response_model=CommandResponse)
def get_user_documents(user_id: str, store: LedgerStore = Depends(get_store)):
    return service.get_user_documents(store, user_id)
