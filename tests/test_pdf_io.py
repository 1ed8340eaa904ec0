import logging

import pytest

from bionic.docs.model import ExtractedPage, PageSkip
from bionic.docs.pdf_io import extract_pages, open_pdf
from bionic.errors import FatalParseError

from conftest import FakePage, FakeReader, make_pdf


def test_extract_pages_skips_failing_page_and_continues(caplog):
    reader = FakeReader([
        FakePage("one"),
        FakePage(error=RuntimeError("broken content stream")),
        FakePage("three"),
    ])
    with caplog.at_level(logging.WARNING):
        outcomes = extract_pages(reader)

    assert outcomes[0] == ExtractedPage(1, "one")
    assert isinstance(outcomes[1], PageSkip)
    assert outcomes[1].page_number == 2 and outcomes[1].stage == "extract"
    assert outcomes[2] == ExtractedPage(3, "three")
    assert "page num 2" in caplog.text
    assert "broken content stream" in caplog.text


def test_extract_pages_ignores_pages_without_content():
    reader = FakeReader([FakePage("a"), FakePage(contents=False), FakePage("c")])
    outcomes = extract_pages(reader)
    assert [o.page_number for o in outcomes] == [1, 3]


def test_extract_pages_treats_none_text_as_empty():
    reader = FakeReader([FakePage(text=None)])
    assert extract_pages(reader) == [ExtractedPage(1, "")]


def test_open_pdf_and_extract_real_document():
    data = make_pdf([["Hello world"], ["Second page here"]])
    reader = open_pdf(data)
    outcomes = extract_pages(reader)
    assert [o.page_number for o in outcomes] == [1, 2]
    assert "Hello world" in outcomes[0].text
    assert "Second page" in outcomes[1].text


@pytest.mark.parametrize("data", [b"", b"this is not a pdf at all", b"\x00\x01\x02" * 100])
def test_open_pdf_rejects_non_pdf_input(data):
    with pytest.raises(FatalParseError):
        open_pdf(data)
