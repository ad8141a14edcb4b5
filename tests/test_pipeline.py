import io

import pytest

from nvgd.filter import FilterStream
from nvgd.pipeline import (
    DefaultFilters,
    FilterNotFoundError,
    apply_filter,
    apply_filters,
    is_html,
    parse_filter_params,
    split_all,
    split_download,
    split_refresh,
)
from nvgd.qparams import parse_query


def stream(data: bytes) -> FilterStream:
    return FilterStream(io.BytesIO(data))


LINES = b"".join(f"{i}\n".encode() for i in range(20))


def test_parse_filter_params():
    p = parse_filter_params("limit:5;;start:2;flag")
    assert p == {"limit": "5", "start": "2", "flag": ""}


def test_parse_filter_params_value_with_colon():
    assert parse_filter_params("re:a:b") == {"re": "a:b"}


def test_apply_filter_head():
    out = apply_filter("head", "limit:2", stream(LINES)).read()
    assert out == b"0\n1\n"


def test_apply_filter_unknown():
    with pytest.raises(FilterNotFoundError, match="not found filter: nosuch"):
        apply_filter("nosuch", "", stream(b""))


def test_apply_filters_chain():
    qp = parse_query("grep=re:foo&count")
    out = apply_filters(qp, stream(b"foo\nbar\nfoo2\n")).read()
    assert out == b"2"


def test_apply_filters_empty_returns_source():
    src = stream(b"abc")
    assert apply_filters(parse_query(""), src) is src


def test_split_refresh():
    qp, n = split_refresh(parse_query("head&refresh=5"))
    assert n == 5
    assert [p.name for p in qp] == ["head"]


def test_split_refresh_invalid_and_absent():
    _, n = split_refresh(parse_query("refresh=abc"))
    assert n == 0
    qp, n = split_refresh(parse_query("head"))
    assert n == 0
    assert [p.name for p in qp] == ["head"]


def test_split_download_and_all():
    qp, download = split_download(parse_query("download&head"))
    assert download is True
    assert [p.name for p in qp] == ["head"]
    qp, everything = split_all(parse_query("head&all"))
    assert everything is True
    assert [p.name for p in qp] == ["head"]
    _, everything = split_all(parse_query("head"))
    assert everything is False


def test_is_html():
    assert is_html(parse_query("grep=re:x&markdown"))
    assert is_html(parse_query("htmltable"))
    assert not is_html(parse_query("markdown&head"))
    assert not is_html(parse_query(""))


def test_default_filters_lookup():
    df = DefaultFilters({"file:///var/": ["tail"], "file:///tmp/": ["head", "tail=limit:5"]})
    assert df.lookup("file:///tmp/x.log") == ["head", "tail=limit:5"]
    assert df.lookup("file:///unknown/") is None


def test_default_filters_apply():
    df = DefaultFilters({"file:///tmp/": ["head", "tail=limit:5"]})
    out = df.apply("file:///tmp/x.log", stream(LINES)).read()
    assert out == b"5\n6\n7\n8\n9\n"


def test_default_filters_no_match_passes_through():
    df = DefaultFilters({"file:///tmp/": ["head"]})
    src = stream(LINES)
    assert df.apply("file:///var/x", src) is src
    assert src.read() == LINES