"""Accumulate normalized page text into one ordered buffer per run."""

from __future__ import annotations

from typing import Iterable, List

from bionic.docs.model import AggregatedBuffer, NormalizedPage

PAGE_MARKER = "Page -> {page}"


def page_block(page: NormalizedPage) -> str:
    """Header line with the page number, the page text, then a blank line."""
    return f"{PAGE_MARKER.format(page=page.page_number)}\n{page.text}\n\n"


def _check_order(last: int | None, page_number: int) -> None:
    if last is not None and page_number <= last:
        raise ValueError(
            f"Page {page_number} appended after page {last}; pages must be in ascending order"
        )


def empty_buffer() -> AggregatedBuffer:
    return AggregatedBuffer()


def append_page(buffer: AggregatedBuffer, page: NormalizedPage) -> AggregatedBuffer:
    """Return a new buffer with `page` appended; `buffer` itself is left untouched."""
    _check_order(buffer.page_numbers[-1] if buffer.page_numbers else None, page.page_number)
    return AggregatedBuffer(
        text=buffer.text + page_block(page),
        page_numbers=buffer.page_numbers + (page.page_number,),
    )


def aggregate(pages: Iterable[NormalizedPage]) -> AggregatedBuffer:
    """Fold `pages` into a fresh buffer. Pages must arrive in ascending order."""
    blocks: List[str] = []
    numbers: List[int] = []
    for page in pages:
        _check_order(numbers[-1] if numbers else None, page.page_number)
        blocks.append(page_block(page))
        numbers.append(page.page_number)
    return AggregatedBuffer(text="".join(blocks), page_numbers=tuple(numbers))
