"""Path aliases that map short URL prefixes to protocol URLs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

__all__ = ["Alias", "Aliases", "DEFAULT_ALIASES"]


@dataclass(frozen=True)
class Alias:
    """Rewrites paths starting with ``from_`` to start with ``to``."""

    from_: str
    to: str

    def rewrite_path(self, src: str) -> str:
        """Turn an absolute path under ``to`` back into its alias form."""
        if not src.startswith("/"):
            return src
        if not src[1:].startswith(self.to):
            return src
        return "/" + self.from_ + src[1 + len(self.to):]


class Aliases(list):
    """An ordered list of :class:`Alias`; the first match wins."""

    def apply(self, path: str) -> tuple[str, Optional[Alias]]:
        """Rewrite ``path`` by the first matching alias, returning it too."""
        for alias in self:
            if path.startswith(alias.from_):
                return alias.to + path[len(alias.from_):], alias
        return path, None

    def merge_map(self, mapping: Optional[Mapping[str, str]]) -> "Aliases":
        """Return a copy with the aliases of ``mapping`` appended."""
        merged = Aliases(self)
        if mapping:
            merged.extend(Alias(src, dst) for src, dst in mapping.items())
        return merged


DEFAULT_ALIASES = Aliases(
    [
        Alias("files/", "file:///"),
        Alias("commands/", "command://"),
        Alias("config/", "config://"),
        Alias("help/", "help://"),
        Alias("trdsql/", "trdsql:/"),
        Alias("echarts/", "echarts:/"),
        Alias("examples/", "examples:/"),
        Alias("version/", "version://"),
    ]
)