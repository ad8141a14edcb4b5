import io

import pytest

from nvgd.filter import FilterStream, Params
from nvgd.filters.cut import cut_lines, new_cut, parse_selectors, split_white


def run(params, text):
    src = FilterStream(io.BytesIO(text.encode("utf-8")))
    return new_cut(src, Params(params)).read().decode("utf-8")


ALPHA = (
    "A\tB\tC\tD\tE\tF\tG\tH\tI\tJ\tK\tL\tM\tN\tO\tP\tQ\tR\tS\tT\tU\tV\tW\tX\tY\tZ\n"
    "a\tb\tc\td\te\tf\tg\th\ti\tj\tk\tl\tm\tn\to\tp\tq\tr\ts\tt\tu\tv\tw\tx\ty\tz"
)


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("1", "A\na"),
        ("12", "L\nl"),
        ("11-15", "K\tL\tM\tN\tO\nk\tl\tm\tn\to"),
        ("21-25", "U\tV\tW\tX\tY\nu\tv\tw\tx\ty"),
        ("13-11", "M\tL\tK\nm\tl\tk"),
        ("24-", "X\tY\tZ\nx\ty\tz"),
        ("-3", "A\tB\tC\na\tb\tc"),
        ("1,5", "A\tE\na\te"),
        ("12,26", "L\tZ\nl\tz"),
    ],
)
def test_cut_selector(spec, expected):
    assert run({"list": spec}, ALPHA) == expected


EMPTY_SRC = "\nA1\tB1\tC1\nA2\tB2\tC2\n\nA4\tB4\tC4\nA5\tB5\tC5\n\n"


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("1", "\nA1\nA2\n\nA4\nA5\n\n"),
        ("2", "\nB1\nB2\n\nB4\nB5\n\n"),
        ("3", "\nC1\nC2\n\nC4\nC5\n\n"),
    ],
)
def test_cut_empty(spec, expected):
    assert run({"list": spec}, EMPTY_SRC) == expected


@pytest.mark.parametrize(
    "data, expected",
    [
        ("", [""]),
        ("foo", ["foo"]),
        (" foo ", ["", "foo", ""]),
        ("foo b", ["foo", "b"]),
        ("foo bar\tbaz", ["foo", "bar", "baz"]),
        ("foo  \t\t  bar\t\t  \t\tbaz", ["foo", "bar", "baz"]),
    ],
)
def test_split_white(data, expected):
    got = [part.decode() for part in split_white(data.encode())]
    assert got == expected


def test_cut_white():
    src = "Jan 31\nFeb  1\nFeb 23\n"
    assert run({"white": "true", "list": "1"}, src) == "Jan\nFeb\nFeb\n"
    assert run({"white": "true", "list": "2"}, src) == "31\n1\n23\n"


def test_no_list_passes_lines_through():
    assert run({}, "a\tb\nc\td\n") == "a\tb\nc\td\n"


def test_custom_delimiter_and_crlf():
    assert run({"delim": ",", "list": "2"}, "a,b,c\r\nd,e,f\r\n") == "b\r\ne\r\n"


def test_out_of_range_field_gives_empty_line():
    assert run({"list": "30"}, "a\tb\n") == "\n"


@pytest.mark.parametrize("spec", ["0", "foo", "1-x", "1,,2", "0-3"])
def test_parse_selectors_rejects_bad_items(spec):
    with pytest.raises(ValueError):
        parse_selectors(spec)


def test_parse_selectors_error_message():
    with pytest.raises(ValueError, match="unknown cut list item: foo"):
        parse_selectors("foo")


def test_parse_selectors_empty():
    assert parse_selectors("") == []


def test_cut_lines_directly():
    out = b"".join(cut_lines([b"1 2 3\n4 5 6"], b" ", parse_selectors("3,1")))
    assert out == b"3 1\n6 4"