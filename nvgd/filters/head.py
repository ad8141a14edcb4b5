"""The "head" filter: keeps a window of leading lines."""

from __future__ import annotations

from collections.abc import Iterator
from itertools import islice
from typing import Any

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = ["head_lines", "new_head"]


def head_lines(source: Any, start: int = 0, limit: int = 10) -> Iterator[bytes]:
    """Yield at most ``limit`` lines of ``source`` after skipping ``start``."""
    return islice(read_lines(source), start, start + limit)


def new_head(source: FilterStream, params: Params) -> FilterStream:
    """Create a head filter from the ``start`` and ``limit`` params."""
    start = max(params.get_int("start", 0), 0)
    limit = params.get_int("limit", 10)
    if limit <= 0:
        limit = 10
    return source.wrap(head_lines(source, start, limit))


register("head", new_head)