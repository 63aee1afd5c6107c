from enum import Enum
from pathlib import Path

from .errors import UnsupportedFormatError


class StatementFormat(str, Enum):
    PDF = "pdf"
    CSV = "csv"


def detect_format(file_path: str) -> StatementFormat:
    """Choose a parsing strategy from the file extension alone.

    No content sniffing is done. Unknown extensions raise
    UnsupportedFormatError rather than falling back to a guess.
    """
    extension = Path(file_path).suffix.lower().lstrip(".")
    try:
        return StatementFormat(extension)
    except ValueError:
        raise UnsupportedFormatError() from None
