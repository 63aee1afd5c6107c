"""Standardized records produced by the ingestion pipeline."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

CREDIT = "credit"
DEBIT = "debit"
# CSV exports carry no sign indicator beyond the two amount columns.
UNKNOWN = "UNKNOWN"

TRANSACTION_TYPES = (CREDIT, DEBIT, UNKNOWN)


@dataclass
class FieldValue:
    """Result of coercing one raw field: either parsed, or replaced by a default."""

    value: Optional[float]
    defaulted: bool = False

    @classmethod
    def parse_amount(
        cls, raw: Optional[str], default: Optional[float] = None, strip: str = ""
    ) -> "FieldValue":
        """Parse a numeric field, removing the characters in ``strip`` first.

        Blank input is not counted as defaulted; only non-empty text that fails
        to parse is.
        """
        text = (raw or "").strip()
        for ch in strip:
            text = text.replace(ch, "")
        if not text:
            return cls(default)
        try:
            return cls(float(text))
        except ValueError:
            return cls(default, defaulted=True)


@dataclass
class Transaction:
    """One ledger entry.

    ``id`` and ``statement_id`` are only set on rows read back from the store.
    """

    posting_date: str
    transaction_date: str
    description: str
    money_in: Optional[float] = None
    money_out: Optional[float] = None
    balance: float = 0.0
    category: Optional[str] = None
    transaction_type: str = UNKNOWN
    id: Optional[str] = None
    statement_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class StatementPeriod:
    from_date: str = ""
    to_date: str = ""
    print_date: str = ""


@dataclass
class StatementSummary:
    total_income: float = 0.0
    total_expenses: float = 0.0
    balance: float = 0.0
    start_date: str = ""
    end_date: str = ""


@dataclass
class ParseDiagnostics:
    """Per-import counters describing how lenient the parse had to be."""

    source_format: str = ""
    lines_scanned: int = 0
    matched: int = 0
    noise: int = 0
    skipped: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)
    defaulted_fields: int = 0
    dual_amounts: int = 0

    def record_skip(self, reason: str) -> None:
        self.skipped += 1
        self.skip_reasons[reason] = self.skip_reasons.get(reason, 0) + 1


@dataclass
class StatementData:
    """Parser output, consumed immediately to build Statement + Transaction rows."""

    transactions: List[Transaction]
    summary: StatementSummary
    account_number: str
    statement_period: StatementPeriod
    diagnostics: ParseDiagnostics = field(default_factory=ParseDiagnostics)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
