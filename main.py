"""
Entry point and facade for the PDF → bold-first-letter reflow pipeline.

Packages:
- bionic.text: Encoding repair, whitespace collapsing, page aggregation, tokenization
- bionic.render: Font resources and the reportlab reflow renderer
- bionic.docs: PDF reading, run data model, DOCX/TXT writers and orchestration
"""

from __future__ import annotations

import logging

from bionic.config import Settings, configure_dependencies, UPLOAD_FIELD
from bionic.errors import BionicError
from bionic.logging_config import setup_logging
from bionic.render import load_fonts, ReflowRenderer, Layout, PageBreakPolicy
from bionic.text import to_utf8, normalize_spaces, aggregate
from bionic.docs.pdf_io import open_pdf, extract_pages
from bionic.docs.pipeline import convert_pdf_bytes, process_document

__all__ = [
    # config
    "Settings",
    "configure_dependencies",
    "UPLOAD_FIELD",
    # stages
    "open_pdf",
    "extract_pages",
    "to_utf8",
    "normalize_spaces",
    "aggregate",
    # rendering
    "load_fonts",
    "ReflowRenderer",
    "Layout",
    "PageBreakPolicy",
    # pipeline
    "convert_pdf_bytes",
    "process_document",
]

logger = logging.getLogger("bionic")


def _cli() -> None:
    """CLI for PDF conversion.

    --file / -f: Path to input PDF
    --out / -o: Output path (default: <input>.bionic.<format> next to the input)
    --out-format: pdf|docx|txt (default: pdf)
    --config: Path to dependencies.json (default: config/dependencies.json)
    --debug-buffer: Keep the run buffer under config/buffer (default: False)
    --log-level: Logging level (default: from config, else INFO)
    """
    import argparse

    parser = argparse.ArgumentParser(description="Re-typeset a PDF's text with the first letter of every word in bold.")
    parser.add_argument("--file", "-f", type=str, help="Path to input PDF")
    parser.add_argument("--out", "-o", type=str, default=None, help="Output path (default: next to the input)")
    parser.add_argument("--out-format", type=str, default="pdf", choices=["pdf", "docx", "txt"], help="Output format (default: pdf)")
    parser.add_argument("--config", type=str, default=None, help="Path to dependencies.json")
    parser.add_argument("--debug-buffer", action="store_true", help="Keep buffer directory under config/buffer")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level, e.g. DEBUG or WARNING")

    args = parser.parse_args()

    settings = configure_dependencies(args.config)
    log_level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        parser.error(f"unknown log level: {log_level}")
    setup_logging(log_level)

    if not args.file:
        print("Please provide --file path to the PDF to convert.")
        print("Example:\n  python main.py --file path/to/book.pdf --out-format pdf")
        raise SystemExit(2)

    fonts = None
    if args.out_format == "pdf":
        try:
            fonts = load_fonts(settings.font_regular, settings.font_bold, settings.font_size)
        except BionicError as e:
            logger.critical("%s", e)
            raise SystemExit(1)

    try:
        result = process_document(
            file_path=args.file,
            fonts=fonts,
            out_format=args.out_format,
            out_path=args.out,
            debug_buffer=bool(args.debug_buffer),
            buffer_dir=settings.buffer_dir,
            max_input_bytes=settings.max_input_bytes,
        )
    except (BionicError, FileNotFoundError) as e:
        logger.error("%s", e)
        raise SystemExit(1)

    for k, v in result.items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    _cli()
