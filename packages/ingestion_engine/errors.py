"""Error taxonomy for statement ingestion.

Every failure raised by the pipeline derives from StatementParseError so the
boundary layer can map it to a readable message with a single except clause.
"""


class StatementParseError(ValueError):
    """Base class for ingestion failures."""


class UnsupportedFormatError(StatementParseError):
    """File extension is not one of the supported statement formats."""

    def __init__(self, detail: str = "Unsupported file format. Please upload a PDF or CSV file."):
        super().__init__(detail)


class ExtractionError(StatementParseError):
    """The raw document could not be turned into text or rows."""


class PatternNotFoundError(StatementParseError):
    """A required header (account number, statement period) is missing."""


class EmptyStatementError(StatementParseError):
    """No transaction lines were recognized in the document."""

    def __init__(self, detail: str = "No transactions found in the statement"):
        super().__init__(detail)


class DateParseError(StatementParseError):
    """A date string matched none of the accepted formats."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unrecognized date: {value!r}")
