from __future__ import annotations

import json
import logging
import os
import shutil
import uuid
from typing import Dict, Iterable, List, Optional

from bionic.config import MAX_INPUT_BYTES, OUTPUT_FILENAME
from bionic.errors import EncodingError, InputTooLargeError
from bionic.logging_config import run_id_var
from bionic.render.fonts import FontResources
from bionic.render.reflow import Layout, ReflowRenderer
from bionic.text.aggregate import aggregate
from bionic.text.encoding import to_utf8
from bionic.text.whitespace import normalize_spaces

from .buffer import BufferManager
from .docx_io import render_docx
from .model import (
    AggregatedBuffer,
    ConversionReport,
    ConversionResult,
    ExtractedPage,
    NormalizedPage,
    PageOutcome,
    PageSkip,
)
from .pdf_io import iter_pages, open_pdf
from .txt import render_txt

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: Dict[str, str] = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain; charset=utf-8",
}


def normalize_page(page: ExtractedPage) -> NormalizedPage:
    """Repair encoding and collapse whitespace for one page. Raises EncodingError."""
    return NormalizedPage(page_number=page.page_number, text=normalize_spaces(to_utf8(page.text)))


def normalize_pages(outcomes: Iterable[PageOutcome], report: ConversionReport) -> List[NormalizedPage]:
    """Keep successfully normalized pages; record every skip in `report`."""
    pages: List[NormalizedPage] = []
    for outcome in outcomes:
        report.pages_total += 1
        if isinstance(outcome, PageSkip):
            report.page_skips.append(outcome)
            continue
        try:
            pages.append(normalize_page(outcome))
        except EncodingError as exc:
            logger.warning("Error converting to UTF-8 on page %d: %s", outcome.page_number, exc)
            report.page_skips.append(PageSkip(outcome.page_number, "encoding", str(exc)))
    return pages


def build_buffer(reader, report: ConversionReport) -> AggregatedBuffer:
    """Extract → normalize → aggregate for one document, into a fresh buffer."""
    buffer = aggregate(normalize_pages(iter_pages(reader), report))
    report.pages_rendered = len(buffer.page_numbers)
    return buffer


def _output_filename(out_format: str) -> str:
    stem = os.path.splitext(OUTPUT_FILENAME)[0]
    return f"{stem}.{out_format}"


def convert_pdf_bytes(
    data: bytes,
    fonts: Optional[FontResources] = None,
    out_format: str = "pdf",
    max_input_bytes: int = MAX_INPUT_BYTES,
    layout: Optional[Layout] = None,
) -> ConversionResult:
    """Run one full conversion over in-memory PDF bytes.

    Args:
        data: The uploaded PDF.
        fonts: Font handle from `load_fonts`; required for PDF output.
        out_format: One of "pdf", "docx", "txt".
        max_input_bytes: Inputs larger than this are rejected before parsing.
        layout: Page geometry override for the PDF renderer.

    Returns:
        ConversionResult with the output bytes, serving headers and the
        per-page/per-word skip report.

    Raises:
        InputTooLargeError, FatalParseError, RenderError, ValueError
    """
    out_format = out_format.lower()
    if out_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {out_format}")
    if out_format == "pdf" and fonts is None:
        raise ValueError("PDF output requires loaded fonts")
    if len(data) > max_input_bytes:
        raise InputTooLargeError(len(data), max_input_bytes)

    token = run_id_var.set(uuid.uuid4().hex[:8])
    try:
        report = ConversionReport()
        reader = open_pdf(data)
        buffer = build_buffer(reader, report)

        if out_format == "pdf":
            rendered = ReflowRenderer(fonts, layout).render(buffer)
            report.word_skips.extend(rendered.skipped_words)
            out = rendered.data
        elif out_format == "docx":
            size = fonts.size if fonts is not None else 12
            out = render_docx(buffer, font_size=size, skipped=report.word_skips)
        else:
            out = render_txt(buffer)

        logger.info(
            "Converted %d/%d pages to %s (%d bytes, %d words dropped)",
            report.pages_rendered,
            report.pages_total,
            out_format,
            len(out),
            len(report.word_skips),
        )
        return ConversionResult(
            data=out,
            out_format=out_format,
            filename=_output_filename(out_format),
            content_type=OUTPUT_FORMATS[out_format],
            buffer=buffer,
            report=report,
        )
    finally:
        run_id_var.reset(token)


def process_document(
    file_path: str,
    fonts: Optional[FontResources] = None,
    out_format: str = "pdf",
    out_path: Optional[str] = None,
    debug_buffer: bool = False,
    buffer_dir: Optional[str] = None,
    max_input_bytes: int = MAX_INPUT_BYTES,
) -> Dict[str, str]:
    """Convert a PDF on disk and write the result next to it (or to `out_path`).

    The output is staged in a per-run buffer directory and moved into place
    only once complete. With `debug_buffer` the directory is kept along with
    the aggregated text and the skip report.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    if os.path.getsize(file_path) > max_input_bytes:
        raise InputTooLargeError(os.path.getsize(file_path), max_input_bytes)

    with open(file_path, "rb") as f:
        data = f.read()

    result = convert_pdf_bytes(data, fonts=fonts, out_format=out_format, max_input_bytes=max_input_bytes)

    if out_path is None:
        base_dir = os.path.dirname(os.path.abspath(file_path))
        base_name = os.path.splitext(os.path.basename(file_path))[0]
        out_path = os.path.join(base_dir, f"{base_name}.bionic.{result.out_format}")

    out: Dict[str, str] = {}
    with BufferManager(base_dir=buffer_dir, debug=debug_buffer) as buffer:
        staged = buffer.write_bytes(result.filename, result.data)
        if debug_buffer:
            out["buffer"] = buffer.base_dir
            out["aggregated"] = buffer.write_text("aggregated.txt", result.buffer.text)
            out["report"] = buffer.write_text("report.json", json.dumps(result.report.to_dict(), indent=2, ensure_ascii=False))
            shutil.copyfile(staged, out_path)
        else:
            shutil.move(staged, out_path)
    out[result.out_format] = out_path
    out["pages"] = f"{result.report.pages_rendered}/{result.report.pages_total}"
    out["skipped_pages"] = str(len(result.report.page_skips))
    out["skipped_words"] = str(len(result.report.word_skips))
    return out
