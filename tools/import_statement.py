import argparse
import os
import sys
from typing import List, Optional

from tabulate import tabulate

from apps.api.core.config import get_settings
from apps.api.deps import open_store
from packages.ingestion_engine import StatementData, StatementParseError, parse_bank_statement
from packages.ledger_store import LedgerError, LedgerStore


def _amount(value: Optional[float]) -> str:
    return "" if value is None else f"{value:,.2f}"


def print_statement(data: StatementData, limit: int = 20) -> None:
    summary = data.summary
    diagnostics = data.diagnostics
    print(f"📄 Account: {data.account_number}")
    print(f"   Period: {summary.start_date} → {summary.end_date}")
    print(f"   Income: {summary.total_income:,.2f}  Expenses: {summary.total_expenses:,.2f}  "
          f"Balance: {summary.balance:,.2f}")
    print(f"   Lines: {diagnostics.lines_scanned} scanned, {diagnostics.matched} matched, "
          f"{diagnostics.skipped} skipped, {diagnostics.defaulted_fields} defaulted fields, "
          f"{diagnostics.dual_amounts} dual-amount rows")

    rows = [
        [t.posting_date, t.transaction_date, t.description[:40],
         _amount(t.money_in), _amount(t.money_out), _amount(t.balance), t.transaction_type]
        for t in data.transactions[:limit]
    ]
    print(tabulate(
        rows,
        headers=["Posted", "Date", "Description", "In", "Out", "Balance", "Type"],
        tablefmt="simple",
    ))
    if len(data.transactions) > limit:
        print(f"   ... {len(data.transactions) - limit} more")


def store_for_user(store: LedgerStore, data: StatementData, file_path: str,
                   username: str, password: str) -> str:
    user = store.authenticate_user(username, password)
    print(f"🚀 Storing {len(data.transactions)} transactions for {user.username}...")
    statement_id = store.store_statement_data(
        user.id,
        os.path.abspath(file_path),
        data.summary.start_date,
        data.summary.end_date,
        data.transactions,
    )
    print(f"   Stored statement {statement_id}")
    return statement_id


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse a bank statement and optionally store it")
    parser.add_argument("file", help="Path to PDF or CSV statement")
    parser.add_argument("--username", help="Store the ledger for this user")
    parser.add_argument("--password", help="Password for --username")
    parser.add_argument("--limit", type=int, default=20, help="Rows to print")
    parser.add_argument("--no-header", action="store_true", help="CSV has no header row")

    args = parser.parse_args(argv)

    if not os.path.exists(args.file):
        print(f"❌ File not found: {args.file}")
        return 1
    if args.username and not args.password:
        print("❌ --password is required with --username")
        return 1

    try:
        data = parse_bank_statement(args.file, csv_has_header=not args.no_header)
    except StatementParseError as e:
        print(f"❌ {e}")
        return 1

    print_statement(data, limit=args.limit)

    if args.username:
        store = open_store(get_settings())
        try:
            store_for_user(store, data, args.file, args.username, args.password)
        except LedgerError as e:
            print(f"❌ {e}")
            return 1
        finally:
            store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
