import pytest

from jiwa.parser import EmptySummaryError, ParseError, parse_summary_description, read_lines


def test_first_line_is_summary_rest_is_description() -> None:
    content = parse_summary_description(["Fix login", "Steps:", "1. open page"])
    assert content.summary == "Fix login"
    assert content.description == "Steps:\n1. open page"


def test_summary_only() -> None:
    content = parse_summary_description(["Just a title"])
    assert content.summary == "Just a title"
    assert content.description == ""


def test_leading_blank_lines_are_skipped() -> None:
    content = parse_summary_description(["", "   ", "Title", "", "body"])
    assert content.summary == "Title"
    assert content.description == "\nbody"


def test_trailing_blank_lines_dropped_inner_kept() -> None:
    content = parse_summary_description(["Title", "a", "", "b", "", ""])
    assert content.description == "a\n\nb"


def test_line_terminators_stripped() -> None:
    content = parse_summary_description(["Title  \r\n", "body\n"])
    assert content.summary == "Title"
    assert content.description == "body"


@pytest.mark.parametrize("lines", [[], [""], ["  ", "\t", ""]])
def test_empty_input_raises_empty_summary(lines: list[str]) -> None:
    with pytest.raises(EmptySummaryError, match="summary line needs to be filled"):
        parse_summary_description(lines)


def test_empty_summary_is_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_summary_description(iter([]))


def test_read_lines_feeds_parser() -> None:
    text = "Title\nline one\nline two\n"
    content = parse_summary_description(read_lines(text))
    assert content.summary == "Title"
    assert content.description == "line one\nline two"
