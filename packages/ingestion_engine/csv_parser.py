"""
CSV Statement Parser - fixed-position reader for bank-exported CSV files.

The export has no stable header names, so columns are read by position.
Rows are allowed to vary in width; short rows are ignored rather than
reported. Individual numeric fields that fail to parse degrade to absent
(amounts) or zero (balance) and are counted in the import diagnostics.
Each amount column keeps its own side; rows that fill both are kept as
written and counted as dual-amount rows.
"""

import csv
import io
import logging
from typing import List, Optional

from .dates import try_parse_date
from .errors import ExtractionError
from .models import (
    UNKNOWN,
    FieldValue,
    ParseDiagnostics,
    StatementData,
    StatementPeriod,
    Transaction,
)
from .summary import summarize

logger = logging.getLogger(__name__)

CSV_ACCOUNT_NUMBER = "CSV-IMPORT"


class CsvStatementParser:
    """Turns a flexible-width CSV export into transaction records."""

    MIN_FIELDS = 8

    # 0-indexed column positions in the export
    COLUMNS = {
        "posting_date": 2,
        "transaction_date": 3,
        "description": 4,
        "category": 6,
        "money_in": 7,
        "money_out": 8,
        "balance": 10,
    }

    ENCODINGS = ["utf-8-sig", "cp1252", "latin-1"]

    def __init__(self, has_header: bool = True):
        self.has_header = has_header

    def parse_file(self, file_path: str) -> StatementData:
        try:
            with open(file_path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise ExtractionError(f"Failed to open CSV file: {e}") from e
        return self.parse_text(self._decode(content))

    def _decode(self, content: bytes) -> str:
        for encoding in self.ENCODINGS:
            try:
                return content.decode(encoding)
            except UnicodeDecodeError:
                continue
        raise ExtractionError("Could not decode CSV file with any known encoding")

    def _read_records(self, text: str) -> List[List[str]]:
        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        try:
            records = [[value.strip() for value in row] for row in reader]
        except csv.Error as e:
            raise ExtractionError(f"Failed to read CSV record: {e}") from e

        if self.has_header and records:
            records = records[1:]
        return records

    @staticmethod
    def _field(record: List[str], index: int) -> str:
        return record[index] if index < len(record) else ""

    def _build_transaction(
        self, record: List[str], diagnostics: ParseDiagnostics
    ) -> Transaction:
        col = self.COLUMNS
        money_in = FieldValue.parse_amount(self._field(record, col["money_in"]))
        money_out = FieldValue.parse_amount(self._field(record, col["money_out"]))
        balance = FieldValue.parse_amount(self._field(record, col["balance"]), default=0.0)
        diagnostics.defaulted_fields += sum(
            f.defaulted for f in (money_in, money_out, balance)
        )

        if money_in.value is not None and money_out.value is not None:
            diagnostics.dual_amounts += 1
        category = self._field(record, col["category"]) or None

        return Transaction(
            posting_date=self._field(record, col["posting_date"]),
            transaction_date=self._field(record, col["transaction_date"]),
            description=self._field(record, col["description"]),
            money_in=_magnitude(money_in.value),
            money_out=_magnitude(money_out.value),
            balance=balance.value,
            category=category,
            transaction_type=UNKNOWN,
        )

    def parse_text(self, text: str) -> StatementData:
        diagnostics = ParseDiagnostics(source_format="csv")
        transactions: List[Transaction] = []
        earliest: Optional[str] = None
        latest: Optional[str] = None

        for record in self._read_records(text):
            diagnostics.lines_scanned += 1
            if len(record) < self.MIN_FIELDS:
                diagnostics.record_skip("too_few_fields")
                continue

            txn = self._build_transaction(record, diagnostics)
            transactions.append(txn)

            # Streaming min/max; on ties the first occurrence is kept.
            posted = try_parse_date(txn.posting_date)
            if posted is not None:
                if earliest is None or posted < try_parse_date(earliest):
                    earliest = txn.posting_date
                if latest is None or posted > try_parse_date(latest):
                    latest = txn.posting_date

        diagnostics.matched = len(transactions)
        logger.info(
            f"Parsed {diagnostics.matched} CSV rows "
            f"({diagnostics.skipped} skipped, {diagnostics.defaulted_fields} defaulted fields)"
        )

        start_date = earliest or ""
        end_date = latest or ""
        return StatementData(
            transactions=transactions,
            summary=summarize(transactions, start_date, end_date),
            account_number=CSV_ACCOUNT_NUMBER,
            statement_period=StatementPeriod(
                from_date=start_date, to_date=end_date, print_date=end_date
            ),
            diagnostics=diagnostics,
        )


def _magnitude(value: Optional[float]) -> Optional[float]:
    # The column decides the side; a sign in the export is dropped.
    return None if value is None else abs(value)


def parse_csv_statement(file_path: str, has_header: bool = True) -> StatementData:
    return CsvStatementParser(has_header=has_header).parse_file(file_path)
