"""Selection and chaining of filters from query parameters."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

# Imported for their filter registrations.
import nvgd.filters.count  # noqa: F401
import nvgd.filters.cut  # noqa: F401
import nvgd.filters.digest  # noqa: F401
import nvgd.filters.grep  # noqa: F401
import nvgd.filters.head  # noqa: F401
import nvgd.filters.jsonarray  # noqa: F401
import nvgd.filters.markdown_html  # noqa: F401
import nvgd.filters.pager  # noqa: F401
import nvgd.filters.tail  # noqa: F401
from nvgd.filter import FilterStream, Params, find
from nvgd.qparams import QueryParams, parse_query

__all__ = [
    "FilterNotFoundError",
    "DefaultFilters",
    "parse_filter_params",
    "apply_filter",
    "apply_filters",
    "split_refresh",
    "split_download",
    "split_all",
    "is_html",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_HTML_FILTERS = frozenset({"htmltable", "indexhtml", "markdown"})


class FilterNotFoundError(LookupError):
    """Raised when a query names a filter that is not registered."""


def parse_filter_params(q: str) -> Params:
    """Parse ``"k1:v1;k2:v2"`` into filter parameters."""
    params = Params()
    for part in q.split(";"):
        if not part:
            continue
        key, _, value = part.partition(":")
        params[key] = value
    return params


def apply_filter(name: str, params: str, source: FilterStream) -> FilterStream:
    """Apply the filter ``name`` configured by ``params`` to ``source``."""
    factory = find(name)
    if factory is None:
        raise FilterNotFoundError(f"not found filter: {name}")
    return factory(source, parse_filter_params(params))


def apply_filters(qparams: Sequence, source: FilterStream) -> FilterStream:
    """Apply each query parameter as a filter, in order."""
    for item in qparams:
        source = apply_filter(item.name, item.value, source)
    return source


def split_refresh(qparams: QueryParams) -> tuple[QueryParams, int]:
    """Remove ``refresh`` parameters and return the first one's seconds."""
    refreshes, others = qparams.split("refresh")
    if not refreshes:
        return qparams, 0
    value = refreshes[0].value
    seconds = int(value) if _INT_RE.fullmatch(value) else 0
    return others, seconds


def split_download(qparams: QueryParams) -> tuple[QueryParams, bool]:
    """Remove ``download`` parameters and tell whether there were any."""
    downloads, others = qparams.split("download")
    if not downloads:
        return qparams, False
    return others, True


def split_all(qparams: QueryParams) -> tuple[QueryParams, bool]:
    """Remove ``all`` parameters and tell whether there were any."""
    found, others = qparams.split("all")
    if not found:
        return qparams, False
    return others, True


def is_html(qparams: Sequence) -> bool:
    """Tell whether the last filter produces HTML."""
    if not qparams:
        return False
    return qparams[-1].name in _HTML_FILTERS


@dataclass
class DefaultFilters:
    """Filters applied by path prefix when a request asks for none."""

    descs: Mapping[str, list[str]] = field(default_factory=dict)

    def lookup(self, path: str) -> Optional[list[str]]:
        """Return the filter list of the first prefix matching ``path``."""
        for prefix, filters in self.descs.items():
            if path.startswith(prefix):
                return filters
        return None

    def apply(self, path: str, source: FilterStream) -> FilterStream:
        """Apply the default filters for ``path`` to ``source``."""
        filters = self.lookup(path)
        if filters is None:
            return source
        qparams = QueryParams()
        for spec in filters:
            qparams.extend(parse_query(spec))
        return apply_filters(qparams, source)