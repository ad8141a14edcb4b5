"""The "pager" filter: splits content into pages and keeps chosen ones."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterator, Sequence
from typing import Any, Optional

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = ["parse_pages", "page_lines", "new_pager"]

_PAGE_ONE = re.compile(r"-?[1-9][0-9]*")
_PAGE_RANGE = re.compile(r"([1-9][0-9]*)-([1-9][0-9]*)")


def parse_pages(spec: str) -> list[int]:
    """Parse a page list such as ``"1,3-5,-1"`` into sorted page numbers.

    Negative numbers count from the last page; ranges may be reversed.
    """
    pages: list[int] = []
    for item in spec.split(","):
        if _PAGE_ONE.fullmatch(item):
            pages.append(int(item))
        elif m := _PAGE_RANGE.fullmatch(item):
            lo, hi = sorted((int(m[1]), int(m[2])))
            pages.extend(range(lo, hi + 1))
        else:
            raise ValueError(f"unknown pages item: {item}")
    pages.sort()
    return pages


def page_lines(
    source: Any,
    eop: "re.Pattern[bytes]",
    pages: Sequence[int],
    lasts: Sequence[int] = (),
    show_num: bool = False,
) -> Iterator[bytes]:
    """Yield the chosen pages of ``source``.

    A page ends with a line matching ``eop``.  Pages numbered in
    ``pages`` are yielded as they are read; pages in ``lasts`` (negative,
    counted from the end) follow at the end unless already yielded.
    ``show_num`` puts a ``(page N)`` line before each page.
    """
    wanted = set(pages)
    last_set = set(lasts)
    ring: Optional[deque[bytearray]] = deque(maxlen=-min(lasts)) if lasts else None
    page_num = 0
    in_page = False
    hit = False
    current = bytearray()

    for line in read_lines(source):
        if not in_page:
            in_page = True
            page_num += 1
            hit = page_num in wanted
            current = bytearray()
            if ring is not None:
                ring.append(current)
            if show_num:
                header = f"(page {page_num})\n".encode("ascii")
                if ring is not None:
                    current += header
                if hit:
                    yield header
        if ring is not None:
            current += line
        if hit:
            yield line
        if eop.search(line):
            in_page = False

    if ring:
        held = len(ring)
        for offset, buf in enumerate(ring):
            relative = offset - held
            absolute = page_num + 1 + relative
            if relative in last_set and absolute not in wanted:
                yield bytes(buf)


def new_pager(source: FilterStream, params: Params) -> FilterStream:
    """Create a pager filter from the ``eop``, ``pages`` and ``num`` params."""
    if "eop" not in params:
        raise ValueError('"eop" option is required')
    try:
        eop = re.compile(params["eop"].encode("utf-8"))
    except re.error as exc:
        raise ValueError(f'invalid "eop" pattern: {exc}') from exc
    try:
        numbers = parse_pages(params.get_str("pages", "1"))
    except ValueError as exc:
        raise ValueError(f'invalid "pages": {exc}') from exc
    if not numbers:
        raise ValueError('no "pages" choosen')
    pages = [n for n in numbers if n > 0]
    lasts = [n for n in numbers if n < 0]
    show_num = params.get_bool("num", False)
    return source.wrap(page_lines(source, eop, pages, lasts, show_num))


register("pager", new_pager)