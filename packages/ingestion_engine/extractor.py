import logging

import pdfplumber

from .errors import ExtractionError

logger = logging.getLogger(__name__)


def extract_pdf_text(file_path: str) -> str:
    """Extract all page text from a PDF as one newline-delimited blob."""
    try:
        with pdfplumber.open(file_path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from PDF: {e}") from e

    logger.info(f"Extracted text from {len(pages)} page(s)")
    return "\n".join(pages)
