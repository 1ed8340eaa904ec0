from __future__ import annotations

import io
import logging
from typing import List

from docx import Document as DocxDocument
from docx.shared import Mm, Pt

from bionic.docs.model import AggregatedBuffer, WordParts, WordSkip
from bionic.text.tokens import iter_layout

logger = logging.getLogger(__name__)


def render_docx(buffer: AggregatedBuffer, font_size: float = 12, skipped: List[WordSkip] | None = None) -> bytes:
    """Write the buffer as a DOCX: one paragraph per line, first letter of each word in bold.

    Lines of the same source paragraph sit tight; the last one carries extra
    space after it. Dropped words are appended to `skipped` when given.
    """
    d = DocxDocument()
    section = d.sections[0]
    section.page_width, section.page_height = Mm(210), Mm(297)
    for side in ("left_margin", "right_margin", "top_margin", "bottom_margin"):
        setattr(section, side, Mm(20))
    d.styles["Normal"].font.size = Pt(font_size)

    for paragraph in iter_layout(buffer.text):
        last = None
        for line in paragraph:
            p = d.add_paragraph()
            p.paragraph_format.space_after = Pt(0)
            written = False
            for outcome in line:
                if isinstance(outcome, WordSkip):
                    logger.warning("Dropping word: %s", outcome.reason)
                    if skipped is not None:
                        skipped.append(outcome)
                    continue
                if written:
                    p.add_run(" ")
                _add_word(p, outcome)
                written = True
            last = p
        if last is not None:
            last.paragraph_format.space_after = Mm(10)

    out = io.BytesIO()
    d.save(out)
    return out.getvalue()


def _add_word(p, parts: WordParts) -> None:
    first = p.add_run(parts.first)
    first.bold = True
    if parts.rest:
        p.add_run(parts.rest)
