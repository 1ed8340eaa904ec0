import pytest

from bionic.errors import EncodingError
from bionic.text.encoding import to_utf8
from bionic.text.whitespace import normalize_spaces


def test_normalize_spaces_collapses_runs_and_tabs():
    assert normalize_spaces("a  b\tc") == "a b c"


def test_normalize_spaces_trims_and_handles_unicode_whitespace():
    text = "\n  Hello  world\r\n end \x0b"
    assert normalize_spaces(text) == "Hello world end"


@pytest.mark.parametrize("sep", ["\x1c", "\x1d", "\x1e", "\x1f"])
def test_normalize_spaces_keeps_information_separators(sep):
    assert normalize_spaces(f"a{sep}b") == f"a{sep}b"
    assert normalize_spaces(f" {sep}  x ") == f"{sep} x"


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "a  b\tc",
    "  leading and trailing  ",
    "line one\nline two\n\n\nline three",
    "mixed  　spaces",
    "already normalized",
])
def test_normalize_spaces_is_idempotent(text):
    once = normalize_spaces(text)
    assert normalize_spaces(once) == once
    assert "  " not in once
    assert once == once.strip()


def test_to_utf8_returns_valid_text_unchanged():
    text = "Grüße, déjà vu, 漢字"
    assert to_utf8(text) is text


def test_to_utf8_decodes_valid_utf8_bytes():
    assert to_utf8("héllo".encode("utf-8")) == "héllo"


def test_to_utf8_falls_back_to_latin1_for_invalid_bytes():
    raw = b"caf\xe9 na\xefve \xa9"
    out = to_utf8(raw)
    assert out == raw.decode("latin-1") == "café naïve ©"
    out.encode("utf-8")


def test_to_utf8_recovers_surrogateescaped_bytes_as_latin1():
    broken = b"r\xe9sum\xe9".decode("utf-8", "surrogateescape")
    assert to_utf8(broken) == "résumé"


def test_to_utf8_rejects_unpaired_surrogates():
    with pytest.raises(EncodingError):
        to_utf8("abc\ud800def")


def test_to_utf8_rejects_non_text():
    with pytest.raises(EncodingError):
        to_utf8(42)
