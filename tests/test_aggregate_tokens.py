import pytest

from bionic.docs.model import NormalizedPage, WordParts, WordSkip
from bionic.errors import WordDecodeError
from bionic.text.aggregate import aggregate, append_page, empty_buffer
from bionic.text.tokens import iter_layout, split_lines, split_paragraphs, split_word


def test_aggregate_formats_one_block_per_page():
    buf = aggregate([NormalizedPage(1, "first page"), NormalizedPage(3, "third page")])
    assert buf.text == "Page -> 1\nfirst page\n\nPage -> 3\nthird page\n\n"
    assert buf.page_numbers == (1, 3)


def test_aggregate_rejects_out_of_order_pages():
    with pytest.raises(ValueError):
        aggregate([NormalizedPage(2, "b"), NormalizedPage(1, "a")])
    with pytest.raises(ValueError):
        aggregate([NormalizedPage(2, "b"), NormalizedPage(2, "again")])


def test_append_page_returns_new_buffer_without_mutating():
    start = empty_buffer()
    one = append_page(start, NormalizedPage(1, "x"))
    two = append_page(one, NormalizedPage(2, "y"))
    assert start.text == "" and start.is_empty()
    assert one.page_numbers == (1,)
    assert two.text == one.text + "Page -> 2\ny\n\n"


def test_aggregate_always_starts_empty():
    aggregate([NormalizedPage(1, "stale")])
    fresh = aggregate([NormalizedPage(5, "new")])
    assert "stale" not in fresh.text
    assert fresh.page_numbers == (5,)


def test_split_word_bolds_first_character_only():
    assert split_word("héllo") == WordParts(first="h", rest="éllo")
    assert split_word("éa") == WordParts(first="é", rest="a")
    assert split_word("x") == WordParts(first="x", rest="")


def test_split_word_rejects_invalid_leading_character():
    with pytest.raises(WordDecodeError):
        split_word("\ufffdabc")
    with pytest.raises(WordDecodeError):
        split_word("\udc80abc")


def test_split_paragraphs_and_lines_drop_blank_lines():
    text = "Page -> 1\nalpha beta\n\n  \nPage -> 2\n\ngamma\n\n"
    paragraphs = split_paragraphs(text)
    assert paragraphs[0] == "Page -> 1\nalpha beta"
    assert split_lines("  \nPage -> 2") == ["Page -> 2"]
    assert split_lines("") == []


def test_iter_layout_tags_bad_words_as_skips():
    layout = list(iter_layout("good \ufffdbad word\n\n"))
    first_line = layout[0][0]
    assert first_line[0] == WordParts("g", "ood")
    assert isinstance(first_line[1], WordSkip)
    assert first_line[1].token == "\ufffdbad"
    assert first_line[2] == WordParts("w", "ord")


def test_iter_layout_keeps_separator_characters_inside_words():
    layout = list(iter_layout("unit\x1fsep next\n\x1e\n\n"))
    first_line, second_line = layout[0]
    assert first_line == [WordParts("u", "nit\x1fsep"), WordParts("n", "ext")]
    assert second_line == [WordParts("\x1e", "")]
