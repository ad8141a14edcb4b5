"""Filter registry, filter parameters and the stream passed between filters."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Optional

__all__ = [
    "Params",
    "FilterStream",
    "DuplicateFilterError",
    "register",
    "find",
    "read_lines",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_LIMIT = 2**63
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class Params(dict):
    """Filter parameters: string names to string values."""

    def get_int(self, name: str, default: int) -> int:
        """Return ``name`` as an integer, or ``default`` if absent or invalid."""
        s = self.get(name)
        if s is None or not _INT_RE.fullmatch(s):
            return default
        v = int(s)
        if not -_INT_LIMIT <= v < _INT_LIMIT:
            return default
        return v

    def get_str(self, name: str, default: str) -> str:
        """Return ``name`` or ``default`` if absent."""
        return self.get(name, default)

    def get_bool(self, name: str, default: bool) -> bool:
        """Return ``name`` as a boolean, or ``default`` if absent or invalid."""
        s = self.get(name)
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
        return default


class DuplicateFilterError(ValueError):
    """Raised when a filter name is registered twice."""


class FilterStream:
    """A readable byte stream with options, passed from filter to filter.

    ``source`` is either a binary file-like object or an iterable of byte
    chunks.  Streams made by :meth:`wrap` share the options and close the
    stream they wrap.
    """

    def __init__(self, source: Any, options: Optional[dict] = None, *, parent: Optional["FilterStream"] = None):
        self.options: dict = options if options is not None else {}
        self._parent = parent
        self._closed = False
        self._buffer = bytearray()
        if hasattr(source, "read"):
            self._file = source
            self._chunks: Optional[Iterator[bytes]] = None
        else:
            self._file = None
            self._chunks = iter(source)

    @property
    def raw(self) -> Any:
        """The underlying file object, or None for chunk sources."""
        return self._file

    @property
    def closed(self) -> bool:
        return self._closed

    def wrap(self, source: Any) -> "FilterStream":
        """Return a new stream over ``source`` that shares these options."""
        return FilterStream(source, self.options, parent=self)

    def _fill(self) -> bool:
        chunk = next(self._chunks, None)
        if chunk is None:
            return False
        self._buffer += chunk
        return True

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, or everything when ``size`` is negative."""
        if self._file is not None:
            data = self._file.read() if size is None or size < 0 else self._file.read(size)
            return bytes(data or b"")
        if size is None or size < 0:
            while self._fill():
                pass
            data = bytes(self._buffer)
            self._buffer.clear()
            return data
        while len(self._buffer) < size and self._fill():
            pass
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def readline(self) -> bytes:
        """Read one line including its newline; empty bytes at the end."""
        if self._file is not None:
            return bytes(self._file.readline() or b"")
        while True:
            i = self._buffer.find(b"\n")
            if i >= 0:
                line = bytes(self._buffer[: i + 1])
                del self._buffer[: i + 1]
                return line
            if not self._fill():
                line = bytes(self._buffer)
                self._buffer.clear()
                return line

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.readline()
            if not line:
                return
            yield line

    def close(self) -> None:
        """Close the source and every wrapped stream below it."""
        if self._closed:
            return
        self._closed = True
        if self._file is not None:
            closer = getattr(self._file, "close", None)
        else:
            closer = getattr(self._chunks, "close", None)
        if callable(closer):
            closer()
        if self._parent is not None:
            self._parent.close()

    def __enter__(self) -> "FilterStream":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


Factory = Callable[[FilterStream, Params], FilterStream]

_filters: dict[str, Factory] = {}


def register(name: str, factory: Factory) -> Factory:
    """Register ``factory`` under ``name``; names must be unique."""
    if name in _filters:
        raise DuplicateFilterError(f'duplicated filter name "{name}"')
    _filters[name] = factory
    return factory


def find(name: str) -> Optional[Factory]:
    """Return the filter factory for ``name``, or None."""
    return _filters.get(name)


def read_lines(source: Any) -> Iterator[bytes]:
    """Yield lines of ``source`` with their terminators.

    ``source`` may be a file-like object with ``readline`` or an iterable
    of byte chunks.  A final line without a newline is yielded as is.
    """
    if hasattr(source, "readline"):
        while True:
            line = source.readline()
            if not line:
                return
            yield bytes(line)
    buf = bytearray()
    for chunk in source:
        buf += chunk
        start = 0
        while True:
            i = buf.find(b"\n", start)
            if i < 0:
                break
            yield bytes(buf[start : i + 1])
            start = i + 1
        del buf[:start]
    if buf:
        yield bytes(buf)