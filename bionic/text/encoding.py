"""Coerce extracted page text into valid UTF-8.

Anything that is not already UTF-8 is assumed to be ISO-8859-1. There is no
content-based detection: text in other legacy encodings is mis-decoded rather
than rejected.
"""

from __future__ import annotations

from typing import Union

from bionic.errors import EncodingError

FALLBACK_ENCODING = "latin-1"


def _is_valid_utf8(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _decode_fallback(raw: bytes) -> str:
    try:
        return raw.decode(FALLBACK_ENCODING)
    except (UnicodeDecodeError, LookupError) as exc:
        raise EncodingError(f"Cannot decode {len(raw)} bytes as {FALLBACK_ENCODING}: {exc}") from exc


def to_utf8(text: Union[str, bytes]) -> str:
    """Return `text` as a string that encodes cleanly to UTF-8.

    - bytes: decoded as UTF-8 when valid, otherwise as Latin-1.
    - str: returned unchanged when valid. Strings carrying raw bytes as
      `surrogateescape` code points are turned back into bytes and decoded
      as Latin-1.

    Raises EncodingError when the fallback decode cannot be performed.
    """
    if isinstance(text, (bytes, bytearray)):
        raw = bytes(text)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return _decode_fallback(raw)

    if not isinstance(text, str):
        raise EncodingError(f"Expected text or bytes, got {type(text).__name__}")

    if _is_valid_utf8(text):
        return text

    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Text contains unpaired surrogates: {exc}") from exc
    return _decode_fallback(raw)
