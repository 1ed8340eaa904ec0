"""Exception types raised by the conversion pipeline.

Document-level errors (parse, render, fonts, input size) abort a run.
Page- and word-level errors are caught by the pipeline, logged and recorded
as skips so the run can continue.
"""

from __future__ import annotations

from typing import Optional


class BionicError(Exception):
    """Base class for all pipeline errors."""


class FatalParseError(BionicError):
    """The input could not be opened as a PDF document."""


class RenderError(BionicError):
    """The output document could not be finalized."""


class FontResourceError(BionicError):
    """A configured font file is missing or cannot be loaded."""


class InputTooLargeError(BionicError, ValueError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Input is {size} bytes; the limit is {limit} bytes")
        self.size = size
        self.limit = limit


class PageExtractionError(BionicError):
    """Text could not be extracted from a single page."""

    def __init__(self, page_number: int, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Failed to extract text on page {page_number}: {cause}")
        self.page_number = page_number
        self.cause = cause


class EncodingError(BionicError):
    """Text could not be coerced into valid UTF-8."""


class WordDecodeError(BionicError):
    """The leading character of a word is not a valid character."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid leading character in word: {token!r}")
        self.token = token
