"""Text clean-up stages: encoding repair, whitespace collapsing, page aggregation, tokenization."""

from .encoding import to_utf8
from .whitespace import normalize_spaces, split_words
from .aggregate import PAGE_MARKER, aggregate, append_page, empty_buffer, page_block
from .tokens import iter_layout, split_lines, split_paragraphs, split_word

__all__ = [
    "to_utf8",
    "normalize_spaces",
    "split_words",
    "PAGE_MARKER",
    "aggregate",
    "append_page",
    "empty_buffer",
    "page_block",
    "iter_layout",
    "split_lines",
    "split_paragraphs",
    "split_word",
]
