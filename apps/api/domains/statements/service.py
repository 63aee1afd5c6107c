"""Statements service — parse uploads and read/write the ledger.

Each function is one boundary command and always returns a CommandResponse.
"""

from typing import Optional

import structlog

from apps.api.core.errors import CommandResponse, run_command
from packages.ingestion_engine import parse_bank_statement
from packages.ledger_store import LedgerStore

from .schemas import StoreStatementRequest

logger = structlog.get_logger()


def process_statement(file_path: str, csv_has_header: bool = True) -> CommandResponse:
    """Parse a PDF or CSV statement into StatementData without storing it."""
    response = run_command(
        "process_statement", parse_bank_statement, file_path, csv_has_header=csv_has_header
    )
    if response.success:
        diagnostics = response.data["diagnostics"]
        logger.info(
            "statement_processed",
            transactions=len(response.data["transactions"]),
            skipped=diagnostics["skipped"],
            defaulted_fields=diagnostics["defaulted_fields"],
            dual_amounts=diagnostics["dual_amounts"],
        )
    return response


def store_statement_data(store: LedgerStore, request: StoreStatementRequest) -> CommandResponse:
    """Persist document, statement and transactions as one atomic unit."""
    entries = [t.to_transaction() for t in request.transactions]
    response = run_command(
        "store_statement_data",
        store.store_statement_data,
        request.user_id,
        request.file_path,
        request.start_date,
        request.end_date,
        entries,
    )
    if response.success:
        response.data = {"statement_id": response.data}
        logger.info("statement_stored", user_id=request.user_id, transactions=len(entries))
    return response


def get_user_transactions(
    store: LedgerStore,
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> CommandResponse:
    return run_command(
        "get_user_transactions", store.get_user_transactions, user_id, start_date, end_date
    )


def get_user_statements(store: LedgerStore, user_id: str) -> CommandResponse:
    return run_command("get_user_statements", store.get_user_statements, user_id)


def get_statement_transactions(store: LedgerStore, statement_id: str) -> CommandResponse:
    return run_command(
        "get_statement_transactions", store.get_statement_transactions, statement_id
    )
