"""Reflow an aggregated text buffer into a PDF with the first letter of each word in bold.

Text flows like a typewriter: words are placed left to right, wrapped at the
right margin, and a new page is started whenever the next line would cross
the bottom margin. Each page starts from the state described by the
`PageBreakPolicy` (cursor at the top-left margin, regular face active).
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from reportlab.lib.pagesizes import A4, portrait
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as pdf_canvas

from bionic.docs.model import AggregatedBuffer, PlacedRun, RenderedDocument, WordParts, WordSkip
from bionic.errors import BionicError, RenderError
from bionic.render.fonts import FontResources
from bionic.text.tokens import iter_layout

logger = logging.getLogger(__name__)

REGULAR = "regular"
BOLD = "bold"


@dataclass(frozen=True)
class Layout:
    page_size: Tuple[float, float] = portrait(A4)
    margin: float = 20 * mm
    line_height: float = 5 * mm
    paragraph_gap: float = 10 * mm

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.page_size[0] - self.margin

    @property
    def top(self) -> float:
        return self.page_size[1] - self.margin

    @property
    def bottom(self) -> float:
        return self.margin


@dataclass(frozen=True)
class CursorState:
    page: int
    x: float
    y: float  # top edge of the current line
    face: str


@dataclass(frozen=True)
class PageBreakPolicy:
    """State every new page starts from."""

    face: str = REGULAR

    def reset(self, layout: Layout, page: int) -> CursorState:
        return CursorState(page=page, x=layout.left, y=layout.top, face=self.face)


class _Writer:
    """Per-run drawing state around one reportlab canvas."""

    def __init__(
        self, fonts: FontResources, layout: Layout, policy: PageBreakPolicy, trace: bool = False
    ) -> None:
        self.fonts = fonts
        self.layout = layout
        self.policy = policy
        self.trace = trace
        self.out = io.BytesIO()
        self.canvas = pdf_canvas.Canvas(self.out, pagesize=layout.page_size, invariant=1)
        self.canvas.setTitle("book")
        self.runs: List[PlacedRun] = []
        self.state = policy.reset(layout, 1)
        self._active_face: Optional[str] = None
        self._set_face(self.state.face)

    def _set_face(self, face: str) -> None:
        if face != self._active_face:
            self.canvas.setFont(self.fonts.face(face), self.fonts.size)
            self._active_face = face
        self.state = replace(self.state, face=face)

    def width(self, text: str, face: str) -> float:
        return pdfmetrics.stringWidth(text, self.fonts.face(face), self.fonts.size)

    def new_page(self) -> None:
        self.canvas.showPage()
        self._active_face = None
        self.state = self.policy.reset(self.layout, self.state.page + 1)
        self._set_face(self.state.face)

    def ln(self, height: float) -> None:
        self.state = replace(self.state, x=self.layout.left, y=self.state.y - height)

    def _ensure_room(self) -> None:
        if self.state.y - self.layout.line_height < self.layout.bottom:
            self.new_page()

    def draw(self, text: str, face: str) -> None:
        if not text:
            return
        self._ensure_room()
        self._set_face(face)
        baseline = self.state.y - (0.5 * self.layout.line_height + 0.3 * self.fonts.size)
        self.canvas.drawString(self.state.x, baseline, text)
        if self.trace:
            self.runs.append(PlacedRun(self.state.page, self.state.x, baseline, face, text))
        self.state = replace(self.state, x=self.state.x + self.width(text, face))

    def draw_broken(self, text: str, face: str) -> None:
        """Draw `text` character by character, wrapping whenever the right margin is hit."""
        chunk = ""
        for ch in text:
            if chunk and self.state.x + self.width(chunk + ch, face) > self.layout.right:
                self.draw(chunk, face)
                self.ln(self.layout.line_height)
                chunk = ""
            elif not chunk and self.state.x > self.layout.left and \
                    self.state.x + self.width(ch, face) > self.layout.right:
                self.ln(self.layout.line_height)
            chunk += ch
        self.draw(chunk, face)

    def write_word(self, parts: WordParts, leading_space: bool) -> None:
        word_w = self.width(parts.first, BOLD) + self.width(parts.rest, REGULAR)
        space_w = self.width(" ", REGULAR) if leading_space else 0.0
        line_w = self.layout.right - self.layout.left

        if self.state.x > self.layout.left and self.state.x + space_w + word_w > self.layout.right:
            self.ln(self.layout.line_height)
        elif leading_space:
            self.draw(" ", REGULAR)

        if word_w > line_w:
            self.draw_broken(parts.first, BOLD)
            self.draw_broken(parts.rest, REGULAR)
        else:
            self.draw(parts.first, BOLD)
            self.draw(parts.rest, REGULAR)

    def finish(self) -> bytes:
        self.canvas.save()
        return self.out.getvalue()


class ReflowRenderer:
    """Render an AggregatedBuffer into PDF bytes.

    The renderer holds only immutable configuration; all drawing state lives in
    a fresh `_Writer` per call, so one renderer can serve concurrent runs.
    With `trace=True` every drawn fragment is also kept as a `PlacedRun` on the
    result.
    """

    def __init__(
        self,
        fonts: FontResources,
        layout: Optional[Layout] = None,
        page_break: Optional[PageBreakPolicy] = None,
        trace: bool = False,
    ) -> None:
        self.fonts = fonts
        self.layout = layout or Layout()
        self.page_break = page_break or PageBreakPolicy()
        self.trace = trace

    def render(self, buffer: AggregatedBuffer) -> RenderedDocument:
        skipped: List[WordSkip] = []
        try:
            writer = _Writer(self.fonts, self.layout, self.page_break, trace=self.trace)
            for paragraph in iter_layout(buffer.text):
                for line in paragraph:
                    written = False
                    for outcome in line:
                        if isinstance(outcome, WordSkip):
                            logger.warning("Dropping word: %s", outcome.reason)
                            skipped.append(outcome)
                            continue
                        writer.write_word(outcome, leading_space=written)
                        written = True
                    writer.ln(self.layout.line_height)
                writer.ln(self.layout.paragraph_gap)
            data = writer.finish()
        except BionicError:
            raise
        except Exception as exc:
            raise RenderError(f"Unable to generate PDF: {exc}") from exc

        return RenderedDocument(
            data=data,
            page_count=writer.state.page,
            runs=writer.runs,
            skipped_words=skipped,
        )
