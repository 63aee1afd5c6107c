"""
Bank Statement Parser - entry point of the ingestion engine.

Supports: PDF statements (via extracted text) and bank-exported CSV.
Flow: format detection -> text/row extraction -> pattern-based recognition
      -> date normalization -> summary aggregation.
"""

import logging
from typing import Callable, Optional

from .csv_parser import CsvStatementParser
from .detector import StatementFormat, detect_format
from .extractor import extract_pdf_text
from .models import StatementData
from .pdf_parser import PdfTextParser

logger = logging.getLogger(__name__)


class BankStatementParser:
    """
    Main parser class for bank statements.

    The strategy is chosen from the file extension only; see detect_format.
    """

    def __init__(
        self,
        file_path: str,
        csv_has_header: bool = True,
        text_extractor: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize parser.

        Args:
            file_path: Path to the statement file (.pdf or .csv)
            csv_has_header: Treat the first CSV record as a header row
            text_extractor: PDF-to-text function, defaults to pdfplumber
        """
        if not file_path:
            raise ValueError("file_path must be provided")

        self.file_path = file_path
        self.csv_has_header = csv_has_header
        self.text_extractor = text_extractor or extract_pdf_text

    def detect_format(self) -> StatementFormat:
        return detect_format(self.file_path)

    def parse(self) -> StatementData:
        """
        Parse the statement.

        Raises:
            StatementParseError: on unsupported format, extraction failure,
                missing header patterns or an empty PDF statement.
        """
        statement_format = self.detect_format()
        logger.info(f"Processing {statement_format.value} statement: {self.file_path}")

        if statement_format is StatementFormat.PDF:
            text = self.text_extractor(self.file_path)
            data = PdfTextParser().parse(text)
        else:
            data = CsvStatementParser(has_header=self.csv_has_header).parse_file(self.file_path)

        logger.info(
            f"Successfully parsed {len(data.transactions)} transactions "
            f"for account {data.account_number}"
        )
        return data


def parse_bank_statement(
    file_path: str,
    csv_has_header: bool = True,
    text_extractor: Optional[Callable[[str], str]] = None,
) -> StatementData:
    """
    Convenience function to parse a bank statement.

    Args:
        file_path: Path to the file
        csv_has_header: Treat the first CSV record as a header row
        text_extractor: PDF-to-text function override

    Returns:
        StatementData with transactions, summary, account number and period
    """
    parser = BankStatementParser(
        file_path=file_path,
        csv_has_header=csv_has_header,
        text_extractor=text_extractor,
    )
    return parser.parse()
