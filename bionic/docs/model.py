from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union


@dataclass(frozen=True)
class ExtractedPage:
    page_number: int
    text: Union[str, bytes]


@dataclass(frozen=True)
class NormalizedPage:
    page_number: int
    text: str


@dataclass(frozen=True)
class PageSkip:
    page_number: int
    stage: str  # "extract" | "encoding"
    reason: str


PageOutcome = Union[ExtractedPage, PageSkip]


@dataclass(frozen=True)
class WordParts:
    first: str
    rest: str


@dataclass(frozen=True)
class WordSkip:
    token: str
    reason: str


@dataclass(frozen=True)
class AggregatedBuffer:
    """Ordered page blocks of one run. Never mutated; appending returns a new buffer."""

    text: str = ""
    page_numbers: Tuple[int, ...] = ()

    def is_empty(self) -> bool:
        return not self.page_numbers


@dataclass(frozen=True)
class PlacedRun:
    """A piece of text drawn at a fixed position (points, origin bottom-left)."""

    page: int
    x: float
    y: float
    face: str  # "regular" | "bold"
    text: str


@dataclass
class RenderedDocument:
    data: bytes
    page_count: int
    runs: List[PlacedRun] = field(default_factory=list)  # filled only when tracing
    skipped_words: List[WordSkip] = field(default_factory=list)


@dataclass
class ConversionReport:
    page_skips: List[PageSkip] = field(default_factory=list)
    word_skips: List[WordSkip] = field(default_factory=list)
    pages_total: int = 0
    pages_rendered: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "pages_total": self.pages_total,
            "pages_rendered": self.pages_rendered,
            "page_skips": [
                {"page": s.page_number, "stage": s.stage, "reason": s.reason} for s in self.page_skips
            ],
            "word_skips": [{"token": s.token, "reason": s.reason} for s in self.word_skips],
        }


@dataclass
class ConversionResult:
    data: bytes
    out_format: str
    filename: str
    content_type: str
    buffer: AggregatedBuffer
    report: ConversionReport

    def headers(self) -> Dict[str, str]:
        """Response headers for serving `data` as a download."""
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": f'attachment; filename="{self.filename}"',
            "Content-Length": str(len(self.data)),
        }
