"""The "cut" filter: selects fields of each line, like cut(1)."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Sequence
from typing import Any, Optional

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = [
    "Selector",
    "Splitter",
    "split_white",
    "parse_selectors",
    "cut_lines",
    "new_cut",
]

Selector = Callable[[Sequence[bytes]], list[bytes]]
Splitter = Callable[[bytes], list[bytes]]

_ONE = re.compile(r"[1-9][0-9]*")
_RANGE = re.compile(r"([1-9][0-9]*)-([1-9][0-9]*)")
_RANGE_BEGIN = re.compile(r"([1-9][0-9]*)-")
_RANGE_END = re.compile(r"-([1-9][0-9]*)")
_WHITE = re.compile(rb"[ \t]+")


def _explode(data: bytes) -> list[bytes]:
    """Split ``data`` into its characters, keeping invalid bytes alone."""
    text = data.decode("utf-8", "surrogateescape")
    return [ch.encode("utf-8", "surrogateescape") for ch in text]


def _split(data: bytes, delim: bytes) -> list[bytes]:
    if not delim:
        return _explode(data)
    return data.split(delim)


def split_white(data: bytes) -> list[bytes]:
    """Split ``data`` at runs of spaces and tabs."""
    return _WHITE.split(data)


def _split_lf(line: bytes) -> tuple[bytes, bytes]:
    end = len(line)
    if end and line[end - 1 : end] == b"\n":
        end -= 1
        if end and line[end - 1 : end] == b"\r":
            end -= 1
    return line[:end], line[end:]


def _one(index: int) -> Selector:
    def select(fields: Sequence[bytes]) -> list[bytes]:
        if index >= len(fields):
            return []
        return [fields[index]]

    return select


def _range(start: int, end: int) -> Selector:
    if start <= end:

        def forward(fields: Sequence[bytes]) -> list[bytes]:
            if start >= len(fields):
                return []
            return list(fields[start : min(end, len(fields) - 1) + 1])

        return forward

    def backward(fields: Sequence[bytes]) -> list[bytes]:
        if end >= len(fields):
            return []
        top = min(start, len(fields) - 1)
        return [fields[i] for i in range(top, end - 1, -1)]

    return backward


def _range_begin(start: int) -> Selector:
    def select(fields: Sequence[bytes]) -> list[bytes]:
        if start >= len(fields):
            return []
        return list(fields[start:])

    return select


def _range_end(end: int) -> Selector:
    def select(fields: Sequence[bytes]) -> list[bytes]:
        return list(fields[: min(end, len(fields) - 1) + 1])

    return select


def _index(s: str) -> int:
    n = int(s)
    if n < 1:
        raise ValueError(f"small index: {n}")
    return n - 1


def parse_selectors(spec: str) -> list[Selector]:
    """Parse a cut list such as ``"1,3-5,7-"`` into field selectors.

    Items are 1-based: ``N``, ``N-M`` (reversed when ``N > M``), ``N-``
    and ``-M``.  An empty spec selects nothing, meaning whole lines.
    """
    if not spec:
        return []
    selectors: list[Selector] = []
    for item in spec.split(","):
        if _ONE.fullmatch(item):
            selectors.append(_one(_index(item)))
        elif m := _RANGE.fullmatch(item):
            selectors.append(_range(_index(m[1]), _index(m[2])))
        elif m := _RANGE_BEGIN.fullmatch(item):
            selectors.append(_range_begin(_index(m[1])))
        elif m := _RANGE_END.fullmatch(item):
            selectors.append(_range_end(_index(m[1])))
        else:
            raise ValueError(f"unknown cut list item: {item}")
    return selectors


def cut_lines(
    source: Any,
    delim: bytes,
    selectors: Sequence[Selector],
    splitter: Optional[Splitter] = None,
) -> Iterator[bytes]:
    """Yield each line of ``source`` reduced to the selected fields.

    Selected fields are joined with ``delim``; line ends are kept.
    Without selectors lines pass through unchanged.
    """
    split = splitter if splitter is not None else (lambda b: _split(b, delim))
    for line in read_lines(source):
        if not selectors:
            yield line
            continue
        body, lf = _split_lf(line)
        fields = split(body)
        selected: list[bytes] = []
        for select in selectors:
            selected.extend(select(fields))
        yield delim.join(selected) + lf


def new_cut(source: FilterStream, params: Params) -> FilterStream:
    """Create a cut filter from ``delim``, ``white`` and ``list`` params."""
    delim = params.get_str("delim", "\t").encode("utf-8")
    splitter = split_white if params.get_bool("white", False) else None
    selectors = parse_selectors(params.get_str("list", ""))
    return source.wrap(cut_lines(source, delim, selectors, splitter))


register("cut", new_cut)