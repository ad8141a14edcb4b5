"""The "grep" filter: keeps lines matching a regular expression."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Callable, Iterator
from typing import Any, Optional

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = [
    "LineFilter",
    "trim_eol",
    "cut_field",
    "chain",
    "grep_lines",
    "new_grep",
]

LineFilter = Callable[[bytes], bytes]


def trim_eol(line: bytes) -> bytes:
    """Remove a trailing ``\\n`` or ``\\r\\n``."""
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


def _split_limited(data: bytes, sep: bytes, pieces: int) -> list[bytes]:
    if sep:
        return data.split(sep, pieces - 1)
    chars = [
        ch.encode("utf-8", "surrogateescape")
        for ch in data.decode("utf-8", "surrogateescape")
    ]
    if len(chars) > pieces:
        chars[pieces - 1 :] = [b"".join(chars[pieces - 1 :])]
    return chars


def cut_field(sep: bytes, n: int) -> LineFilter:
    """Return a line filter that keeps the ``n``-th (0-based) field.

    Lines with too few fields are returned whole.
    """
    pieces = n + 2

    def select(line: bytes) -> bytes:
        fields = _split_limited(line, sep, pieces)
        if n >= len(fields):
            return line
        return fields[n]

    return select


def chain(first: Optional[LineFilter], second: Optional[LineFilter]) -> Optional[LineFilter]:
    """Compose two line filters, applying ``first`` then ``second``."""
    if first is None:
        return second
    if second is None:
        return first
    return lambda line: second(first(line))


def grep_lines(
    source: Any,
    pattern: "re.Pattern[bytes]",
    match: bool = True,
    line_filter: Optional[LineFilter] = None,
    number: bool = False,
    context: int = 0,
) -> Iterator[bytes]:
    """Yield lines of ``source`` whose filtered text matches ``pattern``.

    With ``match`` false the non-matching lines are kept instead.
    ``number`` prefixes line numbers; ``context`` adds that many lines
    around each hit.  End-of-line bytes are trimmed before matching.
    """
    test = chain(trim_eol, line_filter) or trim_eol
    before: deque[bytes] = deque(maxlen=context) if context > 0 else deque()
    after = 0

    def output(lnum: int, data: bytes) -> bytes:
        if number:
            return f"{lnum}: ".encode("ascii") + data
        return data

    for lnum, raw in enumerate(read_lines(source), 1):
        if (pattern.search(test(raw)) is not None) != match:
            if after > 0:
                after -= 1
                yield output(lnum, raw)
            elif context > 0:
                before.append(raw)
            continue
        if context > 0:
            first = lnum - len(before)
            for offset, data in enumerate(before):
                yield output(first + offset, data)
            before.clear()
            after = context
        yield output(lnum, raw)


def new_grep(source: FilterStream, params: Params) -> FilterStream:
    """Create a grep filter from ``re``, ``match``, ``number``, ``context``,
    ``field`` and ``delim`` params."""
    pattern = re.compile(params.get_str("re", "").encode("utf-8"))
    match = params.get_bool("match", True)
    number = params.get_bool("number", False)
    context = params.get_int("context", 0)
    field = params.get_int("field", 0)
    delim = params.get_str("delim", "\t").encode("utf-8")
    line_filter = cut_field(delim, field - 1) if field > 0 else None
    return source.wrap(grep_lines(source, pattern, match, line_filter, number, context))


register("grep", new_grep)