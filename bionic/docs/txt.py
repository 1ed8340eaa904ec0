from __future__ import annotations

from bionic.docs.model import AggregatedBuffer


def render_txt(buffer: AggregatedBuffer) -> bytes:
    """The aggregated buffer as UTF-8 text, page markers included."""
    return buffer.text.encode("utf-8")
