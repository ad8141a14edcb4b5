"""Mapping of exceptions to HTTP responses."""

from __future__ import annotations

from collections.abc import Iterator

__all__ = ["HTTPError", "to_http_error"]


class HTTPError(Exception):
    """An error carrying its own HTTP status code and response body."""

    def __init__(self, status_code: int, body: str):
        super().__init__(body)
        self.status_code = status_code
        self.body = body


def _chain(err: BaseException) -> Iterator[BaseException]:
    seen = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def to_http_error(err: BaseException) -> tuple[str, int]:
    """Return the response body and status code for ``err``."""
    chain = list(_chain(err))
    for e in chain:
        if isinstance(e, HTTPError):
            return e.body, e.status_code
    if any(isinstance(e, FileNotFoundError) for e in chain):
        return f"404 page not found: {err}", 404
    if any(isinstance(e, PermissionError) for e in chain):
        return f"403 Forbidden: {err}", 403
    return f"500 Internal Server Error: {err}", 500