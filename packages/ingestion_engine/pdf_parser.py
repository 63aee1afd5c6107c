"""
PDF Statement Parser - pattern-based recognition over extracted statement text.

The text is produced by an upstream PDF-to-text step and is only loosely
structured: headers can wrap, columns collapse into single spaces and
balances may carry space or comma thousands separators. Three independent
extractions run over the same blob:

    account number    Account Number: <digits>
    statement period  From Date: .. To Date: .. Print Date: ..
    transactions      one per line, classified by classify_line()

Header extractions are strict (missing = hard failure). Line classification
is lenient: a line that does not look like a transaction is reported as
skipped, never as an error.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from .dates import sort_key_or_epoch
from .errors import EmptyStatementError, PatternNotFoundError
from .models import (
    CREDIT,
    DEBIT,
    FieldValue,
    ParseDiagnostics,
    StatementData,
    StatementPeriod,
    Transaction,
)
from .summary import summarize

logger = logging.getLogger(__name__)

DATE = r"\d{2}/\d{2}/\d{4}"

ACCOUNT_NUMBER_RE = re.compile(r"Account\s*Number:\s*(\d+)")

# Arbitrary text between the fields, but each field on the same line.
PERIOD_LOOSE_RE = re.compile(
    rf"From Date:\s*({DATE}).*?To Date:\s*({DATE}).*?Print Date:\s*({DATE})"
)
# Fields adjacent to each other, possibly spread across lines.
PERIOD_LABELED_RE = re.compile(
    rf"From\s+Date:\s*({DATE})\s*To\s+Date:\s*({DATE})\s*Print\s+Date:\s*({DATE})"
)

TRANSACTION_RE = re.compile(
    rf"({DATE})\s+"  # posting date
    rf"(?:({DATE})\s+)?"  # optional transaction date
    r"([^0-9\n].*?)\s+"  # description, never starting with a digit
    r"(-?\d{1,3}(?:,\d{3})+\.\d{2}|-?\d+\.\d{2})\s+"  # signed amount
    r"(\d+(?:[\s,]\d{3})*\.\d{2})"  # balance
)

NOISE_PREFIXES = ("*", "Available Balance:")


@dataclass
class TransactionLine:
    record: Transaction
    defaulted_fields: int = 0


@dataclass
class SkippedLine:
    line: str
    reason: str = "no_match"


@dataclass
class NoiseLine:
    line: str


LineResult = Union[TransactionLine, SkippedLine, NoiseLine]


def extract_account_number(text: str) -> str:
    match = ACCOUNT_NUMBER_RE.search(text)
    if not match:
        raise PatternNotFoundError("Could not find account number")
    return match.group(1)


def extract_statement_period(text: str) -> StatementPeriod:
    match = PERIOD_LOOSE_RE.search(text) or PERIOD_LABELED_RE.search(text)
    if not match:
        raise PatternNotFoundError("Could not find statement period in expected format")
    from_date, to_date, print_date = match.groups()
    return StatementPeriod(from_date=from_date, to_date=to_date, print_date=print_date)


def classify_line(line: str) -> LineResult:
    """Classify one line of statement text."""
    trimmed = line.strip()
    if not trimmed or trimmed.startswith(NOISE_PREFIXES):
        return NoiseLine(trimmed)

    match = TRANSACTION_RE.search(trimmed)
    if not match:
        return SkippedLine(trimmed)

    posting_date, transaction_date, description, raw_amount, raw_balance = match.groups()
    amount = FieldValue.parse_amount(raw_amount, default=0.0, strip=",")
    balance = FieldValue.parse_amount(raw_balance, default=0.0, strip=", ")

    value = amount.value
    record = Transaction(
        posting_date=posting_date,
        transaction_date=transaction_date or posting_date,
        description=description.strip(),
        money_in=value if value > 0 else None,
        money_out=-value if value < 0 else None,
        balance=balance.value,
        category=None,
        transaction_type=CREDIT if value > 0 else DEBIT,
    )
    return TransactionLine(record, defaulted_fields=amount.defaulted + balance.defaulted)


def parse_transactions(
    text: str, diagnostics: Optional[ParseDiagnostics] = None
) -> List[Transaction]:
    """Extract transactions, most recent posting date first.

    Raises:
        EmptyStatementError: if no line in the text is a transaction.
    """
    if diagnostics is None:
        diagnostics = ParseDiagnostics(source_format="pdf")

    transactions = []
    for line in text.splitlines():
        diagnostics.lines_scanned += 1
        result = classify_line(line)
        if isinstance(result, TransactionLine):
            transactions.append(result.record)
            diagnostics.defaulted_fields += result.defaulted_fields
        elif isinstance(result, SkippedLine):
            diagnostics.record_skip(result.reason)
            logger.debug(f"Skipped line: {result.line!r}")
        else:
            diagnostics.noise += 1

    diagnostics.matched = len(transactions)
    if not transactions:
        raise EmptyStatementError()

    transactions.sort(key=lambda t: sort_key_or_epoch(t.posting_date), reverse=True)
    return transactions


class PdfTextParser:
    """Parses the text of one statement into StatementData."""

    def parse(self, text: str) -> StatementData:
        account_number = extract_account_number(text)
        period = extract_statement_period(text)

        diagnostics = ParseDiagnostics(source_format="pdf")
        transactions = parse_transactions(text, diagnostics)
        logger.info(
            f"Matched {diagnostics.matched} of {diagnostics.lines_scanned} lines "
            f"({diagnostics.skipped} skipped, {diagnostics.noise} noise)"
        )

        return StatementData(
            transactions=transactions,
            summary=summarize(transactions, period.from_date, period.to_date),
            account_number=account_number,
            statement_period=period,
            diagnostics=diagnostics,
        )
