"""Split an aggregated buffer into paragraphs, lines and styled words."""

from __future__ import annotations

from typing import Iterator, List, Union

from bionic.docs.model import WordParts, WordSkip
from bionic.errors import WordDecodeError
from bionic.text.whitespace import split_words

REPLACEMENT_CHAR = "\ufffd"


def split_paragraphs(text: str) -> List[str]:
    return text.split("\n\n")


def split_lines(paragraph: str) -> List[str]:
    """Lines of a paragraph that hold at least one word, with edge spaces trimmed."""
    return [line.strip(" ") for line in paragraph.split("\n") if split_words(line)]


def split_word(word: str) -> WordParts:
    """Split `word` into its first character and the remainder.

    Raises WordDecodeError when the first character is not a decodable
    character (an unpaired surrogate or U+FFFD left behind by a failed decode).
    """
    if not word:
        raise WordDecodeError(word)
    first = word[0]
    if first == REPLACEMENT_CHAR or "\ud800" <= first <= "\udfff":
        raise WordDecodeError(word)
    return WordParts(first=first, rest=word[1:])


def word_outcome(word: str) -> Union[WordParts, WordSkip]:
    try:
        return split_word(word)
    except WordDecodeError as exc:
        return WordSkip(token=word, reason=str(exc))


def iter_layout(text: str) -> Iterator[List[List[Union[WordParts, WordSkip]]]]:
    """Yield each paragraph as a list of lines, each line a list of word outcomes.

    Paragraphs with no visible line are still yielded (as an empty list) so the
    caller can apply the paragraph gap consistently.
    """
    for paragraph in split_paragraphs(text):
        yield [[word_outcome(w) for w in split_words(line)] for line in split_lines(paragraph)]
