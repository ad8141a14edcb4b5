import io

import pytest

from nvgd.config import root
from nvgd.filter import FilterStream, Params, find
from nvgd.filters.markdown_html import (
    CONFIG,
    MarkdownConfig,
    new_markdown,
    render_markdown,
)


@pytest.fixture
def css_urls():
    saved = list(CONFIG.custom_css_urls)
    yield CONFIG
    CONFIG.custom_css_urls = saved


def run(text: str) -> str:
    stream = new_markdown(FilterStream(io.BytesIO(text.encode("utf-8"))), Params())
    return stream.read().decode("utf-8")


def test_registered():
    assert find("markdown") is new_markdown


def test_heading_rendered():
    html = render_markdown("# Title\n")
    assert "<h1" in html
    assert "Title</h1>" in html


def test_page_header():
    out = run("hello\n")
    assert out.startswith(
        '<!DOCTYPE html>\n<meta charset="UTF-8">\n<meta name="referrer" content="no-referrer">\n'
    )
    assert "<p>hello</p>" in out


def test_local_doc_link_gets_markdown_filter():
    out = run("[doc](doc/filters.md)\n")
    assert 'href="doc/filters.md?markdown"' in out


def test_local_doc_link_with_query():
    out = run("[doc](doc/filters.md?x=1)\n")
    assert 'href="doc/filters.md?markdown?x=1"' in out


def test_external_link_opens_new_tab():
    html = render_markdown("[site](https://example.com/)\n")
    assert 'target="_blank"' in html
    assert "nofollow noreferrer noopener" in html


def test_relative_link_untouched():
    html = render_markdown("[up](../index.md) [top](/root) [anchor](#x)\n")
    assert "_blank" not in html


def test_custom_css(css_urls):
    css_urls.custom_css_urls = ["/a.css", "", "/b.css"]
    out = run("x\n")
    assert '<link rel="stylesheet" href="/a.css" type="text/css" />\n' in out
    assert out.count("<link") == 2


def test_config_section_applies(css_urls):
    root().filters.update_from({"markdown": {"custom_css_urls": ["/c.css"]}})
    out = run("x\n")
    assert '<link rel="stylesheet" href="/c.css" type="text/css" />\n' in out
    assert out.count("<link") == 1


def test_config_default_empty():
    assert MarkdownConfig().custom_css_urls == []