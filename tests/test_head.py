import io

import pytest

from nvgd.filter import FilterStream, Params
from nvgd.filters.head import head_lines, new_head


def run(params, text):
    src = FilterStream(io.BytesIO(text.encode("utf-8")))
    return new_head(src, Params(params)).read().decode("utf-8")


TEN = "0\n1\n2\n3\n4\n5\n6\n7\n8\n9\n"


@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, TEN),
        ({"start": "3"}, "3\n4\n5\n6\n7\n8\n9\n"),
        ({"start": "3", "limit": "5"}, "3\n4\n5\n6\n7\n"),
    ],
)
def test_head(params, expected):
    assert run(params, TEN) == expected


def test_default_limit_is_ten():
    text = "".join(f"{i}\n" for i in range(20))
    assert run({}, text) == TEN


def test_non_positive_limit_falls_back_to_ten():
    text = "".join(f"{i}\n" for i in range(20))
    assert run({"limit": "0"}, text) == TEN
    assert run({"limit": "-4"}, text) == TEN


def test_negative_start_is_zero():
    assert run({"start": "-5", "limit": "2"}, TEN) == "0\n1\n"


def test_start_past_end():
    assert run({"start": "50"}, TEN) == ""


def test_head_lines_directly():
    assert list(head_lines([b"a\nb\nc"], 1, 5)) == [b"b\n", b"c"]