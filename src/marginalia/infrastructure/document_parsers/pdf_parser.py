"""Parser for PDF."""

import io
import logging
import re
from pathlib import Path

from pypdf import PdfReader

from marginalia.domain.exceptions import UnreadableDocument
from marginalia.infrastructure.document_parsers.base import ParseResult
from marginalia.infrastructure.document_parsers.garbled import is_garbled

logger = logging.getLogger(__name__)

_WHITESPACE_RUNS = re.compile(r"\s+")

GARBLED_PDF_MESSAGE = (
    "This PDF appears to be scanned or uses custom fonts that cannot be read. "
    "Please try: (1) Using a PDF with selectable text, or (2) Copy the text content "
    "into a .txt file and upload that instead."
)


def parse_pdf(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text from PDF bytes with whitespace collapsed to single spaces.

    Raises UnreadableDocument when the extracted text looks garbled.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
    except Exception as e:
        raise ValueError(f"Invalid or corrupted PDF: {e}") from e
    parts: list[str] = []
    for page in reader.pages:
        t = page.extract_text()
        if t:
            parts.append(t)
    text = _WHITESPACE_RUNS.sub(" ", " ".join(parts)).strip()
    if is_garbled(text):
        logger.warning("Rejected garbled PDF extraction: %s", filename or "<unnamed>")
        raise UnreadableDocument(GARBLED_PDF_MESSAGE)

    properties = {"page_count": str(len(reader.pages))}
    meta = reader.metadata
    if meta and meta.title:
        properties["title"] = str(meta.title)
    if filename:
        properties["source_file_name"] = Path(filename).name
    return ParseResult(text=text, source_type="pdf", properties=properties)
