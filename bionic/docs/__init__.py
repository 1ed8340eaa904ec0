"""Document layer: reading PDFs, the run data model and output writers.

Exposes:
- Data model: ExtractedPage, NormalizedPage, PageSkip, AggregatedBuffer, ...
- Buffer manager: BufferManager (per-run scratch directory under config/buffer)
- Reader: pdf (text per page via pypdf)
- Writers: pdf (reflow renderer), docx, txt
"""

from .model import (
    AggregatedBuffer,
    ConversionReport,
    ConversionResult,
    ExtractedPage,
    NormalizedPage,
    PageSkip,
    PlacedRun,
    RenderedDocument,
    WordParts,
    WordSkip,
)
from .buffer import BufferManager

__all__ = [
    "AggregatedBuffer",
    "ConversionReport",
    "ConversionResult",
    "ExtractedPage",
    "NormalizedPage",
    "PageSkip",
    "PlacedRun",
    "RenderedDocument",
    "WordParts",
    "WordSkip",
    "BufferManager",
]
