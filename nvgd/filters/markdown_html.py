"""The "markdown" filter: renders Markdown content as an HTML page."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from nvgd.config import register_filter
from nvgd.filter import FilterStream, Params, register

__all__ = ["MarkdownConfig", "CONFIG", "render_markdown", "new_markdown"]

_HREF_LOCAL_DOC = re.compile(rb'(href="doc/[^."]*\.md)((?:\?[^"]+)?")')

_HEAD = (
    "<!DOCTYPE html>\n"
    '<meta charset="UTF-8">\n'
    '<meta name="referrer" content="no-referrer">\n'
)


@dataclass
class MarkdownConfig:
    """Configuration of the markdown filter."""

    custom_css_urls: list[str] = field(
        default_factory=list, metadata={"yaml": "custom_css_urls"}
    )


CONFIG = MarkdownConfig()


def _is_relative_link(link: str) -> bool:
    if not link:
        return False
    if link.startswith("#"):
        return True
    if link == "/" or (link.startswith("/") and not link.startswith("//")):
        return True
    return link.startswith("./") or link.startswith("../")


class _ExternalLinkProcessor(Treeprocessor):
    """Marks non-relative links as external: new tab, no referrer, no follow."""

    def run(self, root: Any) -> None:
        for anchor in root.iter("a"):
            href = anchor.get("href")
            if href is None or _is_relative_link(href):
                continue
            anchor.set("rel", "nofollow noreferrer noopener")
            anchor.set("target", "_blank")


class _ExternalLinks(Extension):
    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.treeprocessors.register(_ExternalLinkProcessor(md), "nvgd_external_links", 0)


def render_markdown(text: str) -> str:
    """Render Markdown ``text`` to an HTML fragment."""
    md = markdown.Markdown(extensions=["extra", "toc", _ExternalLinks()])
    return md.convert(text)


def _head(config: MarkdownConfig) -> bytes:
    links = "".join(
        f'<link rel="stylesheet" href="{url}" type="text/css" />\n'
        for url in config.custom_css_urls
        if url
    )
    return (_HEAD + links + "\n").encode("utf-8")


def new_markdown(source: FilterStream, params: Params) -> FilterStream:
    """Create a markdown filter that turns ``source`` into an HTML page.

    Links to local ``doc/*.md`` documents get the markdown filter added.
    """
    raw = source.read()
    body = render_markdown(raw.decode("utf-8", errors="replace")).encode("utf-8")
    body = _HREF_LOCAL_DOC.sub(rb"\1?markdown\2", body)
    return source.wrap(iter([_head(CONFIG), body]))


register("markdown", new_markdown)
register_filter("markdown", CONFIG)