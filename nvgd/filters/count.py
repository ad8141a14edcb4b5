"""The "count" filter: replaces the content with its number of lines."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = ["count_lines", "new_count"]


def count_lines(source: Any) -> Iterator[bytes]:
    """Yield the number of lines in ``source`` as decimal digits.

    A final line without a newline is counted too.
    """
    total = sum(1 for _ in read_lines(source))
    yield str(total).encode("ascii")


def new_count(source: FilterStream, params: Params) -> FilterStream:
    """Create a count filter over ``source``."""
    return source.wrap(count_lines(source))


register("count", new_count)