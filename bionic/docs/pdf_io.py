from __future__ import annotations

import io
import logging
from typing import Iterator, List

from pypdf import PdfReader

from bionic.errors import FatalParseError, PageExtractionError

from .model import ExtractedPage, PageOutcome, PageSkip

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-"


def open_pdf(data: bytes) -> PdfReader:
    """Parse PDF bytes held in memory.

    Args:
        data: Raw PDF file content.

    Returns:
        A pypdf reader with its page tree loaded.

    Raises:
        FatalParseError: when the bytes cannot be opened as a PDF.
    """
    if not data:
        raise FatalParseError("Unable to open PDF: input is empty")
    if PDF_HEADER not in data[:1024]:
        raise FatalParseError("Unable to open PDF: missing %PDF- header")
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            reader.decrypt("")
        _ = len(reader.pages)
    except Exception as exc:
        raise FatalParseError(f"Unable to open PDF: {exc}") from exc
    return reader


def _extract_page(reader, page_number: int) -> ExtractedPage | None:
    """Text of one page, or None when the page has no content stream."""
    try:
        page = reader.pages[page_number - 1]
        if page.get_contents() is None:
            return None
        text = page.extract_text()
    except Exception as exc:
        raise PageExtractionError(page_number, exc) from exc
    return ExtractedPage(page_number=page_number, text=text or "")


def iter_pages(reader) -> Iterator[PageOutcome]:
    """Yield one outcome per page with content, in ascending page order.

    Pages without a content stream are skipped silently. Pages whose text
    extraction raises are logged and yielded as PageSkip; they never stop
    the iteration.
    """
    total = len(reader.pages)
    for page_number in range(1, total + 1):
        try:
            extracted = _extract_page(reader, page_number)
        except PageExtractionError as exc:
            logger.warning("Error on page num %d, %s", page_number, exc.cause)
            yield PageSkip(page_number=page_number, stage="extract", reason=str(exc))
            continue
        if extracted is not None:
            yield extracted


def extract_pages(reader) -> List[PageOutcome]:
    return list(iter_pages(reader))
