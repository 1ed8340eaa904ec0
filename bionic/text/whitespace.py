from __future__ import annotations

import re
from typing import List

# Unicode White_Space. str.split() also breaks on the information separators
# U+001C..U+001F, which are not whitespace and must survive normalization.
_WHITESPACE = re.compile(r"[^\S\x1c-\x1f]+")


def split_words(text: str) -> List[str]:
    """Non-empty runs of text between Unicode whitespace."""
    return [w for w in _WHITESPACE.split(text) if w]


def normalize_spaces(text: str) -> str:
    """Collapse every run of Unicode whitespace into one ASCII space and trim both ends.

    Idempotent: normalizing an already normalized string returns it unchanged.
    """
    return " ".join(split_words(text))
