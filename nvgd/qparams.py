"""Ordered query parameters that select filters."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import unquote_plus

__all__ = ["QueryParam", "QueryParams", "QueryParseError", "parse_query"]

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class QueryParseError(ValueError):
    """Raised for a malformed query string."""


@dataclass
class QueryParam:
    name: str
    value: str


class QueryParams(list):
    """A list of :class:`QueryParam` in query order."""

    def split(self, name: str) -> tuple["QueryParams", "QueryParams"]:
        """Return the items named ``name`` and all the others."""
        matched, others = QueryParams(), QueryParams()
        for item in self:
            (matched if item.name == name else others).append(item)
        return matched, others

    def delete_keys(self, keys: Iterable[str]) -> "QueryParams":
        """Return the items whose names are not in ``keys``."""
        table = set(keys)
        if not table:
            return self
        return QueryParams(item for item in self if item.name not in table)

    def __str__(self) -> str:
        return "[" + " ".join(f"{{name:{p.name} value:{p.value}}}" for p in self) + "]"


def _unescape(s: str) -> str:
    m = _BAD_ESCAPE.search(s)
    if m:
        raise QueryParseError(f'invalid URL escape "{s[m.start():m.start() + 3]}"')
    return unquote_plus(s, errors="surrogateescape")


def parse_query(qs: str) -> QueryParams:
    """Parse ``qs`` keeping the order and duplicates of its parameters."""
    params = QueryParams()
    for part in qs.split("&"):
        if not part:
            continue
        name, _, value = part.partition("=")
        params.append(QueryParam(_unescape(name), _unescape(value)))
    return params