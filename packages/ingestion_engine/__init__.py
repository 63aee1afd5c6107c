"""
Statement Ledger Ingestion Engine

Bank statement parsing (PDF text and CSV) into normalized transactions.
"""

__version__ = "0.1.0"

from .detector import StatementFormat, detect_format
from .errors import (
    DateParseError,
    EmptyStatementError,
    ExtractionError,
    PatternNotFoundError,
    StatementParseError,
    UnsupportedFormatError,
)
from .models import (
    ParseDiagnostics,
    StatementData,
    StatementPeriod,
    StatementSummary,
    Transaction,
)
from .parser import BankStatementParser, parse_bank_statement

__all__ = [
    "BankStatementParser",
    "parse_bank_statement",
    "detect_format",
    "StatementFormat",
    "Transaction",
    "StatementData",
    "StatementPeriod",
    "StatementSummary",
    "ParseDiagnostics",
    "StatementParseError",
    "UnsupportedFormatError",
    "ExtractionError",
    "PatternNotFoundError",
    "EmptyStatementError",
    "DateParseError",
]
