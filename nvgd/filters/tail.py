"""The "tail" filter: keeps the last lines of the content."""

from __future__ import annotations

import io
from collections import deque
from collections.abc import Iterator
from typing import Any

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = ["RTAIL_BUFSIZE", "RTail", "tail_lines", "new_tail"]

RTAIL_BUFSIZE = 4096


class RTail:
    """Tail of a seekable file, found by scanning backwards from its end."""

    def __init__(self, raw: Any, limit: int, bufsize: int = RTAIL_BUFSIZE):
        self._raw = raw
        self._limit = limit
        self._bufsize = bufsize
        self._closed = False
        self._found = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_top(self) -> None:
        if self._found:
            return
        self._found = True
        try:
            self._find_top()
        except OSError:
            # Fall back to reading from wherever the file now stands.
            pass

    def _find_top(self) -> None:
        raw = self._raw
        curr = raw.seek(0, io.SEEK_END)
        count = 0
        skip_last = True
        while curr > 0:
            length = min(curr, self._bufsize)
            curr -= length
            raw.seek(curr, io.SEEK_SET)
            block = raw.read(length) or b""
            if len(block) != length:
                raise OSError(f"tail requires {length} bytes but got {len(block)}")
            end = length
            if skip_last:
                skip_last = False
                end -= 1
            while (off := block.rfind(b"\n", 0, end)) >= 0:
                count += 1
                if count >= self._limit:
                    raw.seek(curr + off + 1, io.SEEK_SET)
                    return
                end = off
        raw.seek(0, io.SEEK_SET)

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes of the tail, or all of it."""
        self._ensure_top()
        if size is None or size < 0:
            return bytes(self._raw.read() or b"")
        return bytes(self._raw.read(size) or b"")

    def readline(self) -> bytes:
        """Read one line of the tail; empty bytes at the end."""
        self._ensure_top()
        return bytes(self._raw.readline() or b"")

    def close(self) -> None:
        """Close the underlying file once."""
        if self._closed:
            return
        self._closed = True
        self._raw.close()

    def __enter__(self) -> "RTail":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def tail_lines(source: Any, limit: int = 10) -> Iterator[bytes]:
    """Yield the last ``limit`` lines of ``source`` (10 when not positive)."""
    if limit <= 0:
        limit = 10
    yield from deque(read_lines(source), maxlen=limit)


def _seekable(raw: Any) -> bool:
    check = getattr(raw, "seekable", None)
    return raw is not None and callable(check) and bool(check())


def new_tail(source: FilterStream, params: Params) -> FilterStream:
    """Create a tail filter from the ``limit`` param."""
    limit = params.get_int("limit", 10)
    if limit <= 0:
        limit = 10
    raw = source.raw
    if _seekable(raw):
        return source.wrap(RTail(raw, limit, RTAIL_BUFSIZE))
    return source.wrap(tail_lines(source, limit))


register("tail", new_tail)