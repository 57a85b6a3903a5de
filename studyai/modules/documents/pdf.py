"""PDF text extraction for uploaded study documents."""

from __future__ import annotations

import io

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from studyai.core.logging import get_logger


logger = get_logger(__name__)


class PdfExtractionError(ValueError):
    """The upload is not a readable PDF."""


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Concatenate the text of every page, one page per paragraph."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except PdfReadError as e:
        raise PdfExtractionError(f"PDF parsing failed: {e}") from e
    text = "\n\n".join(p for p in pages if p)
    logger.info("Extracted %d characters from %d pages", len(text), len(pages))
    return text
