"""The "jsonarray" filter: turns each line into an element of a JSON array."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from nvgd.filter import FilterStream, Params, read_lines, register

__all__ = ["json_array_lines", "new_jsonarray"]

_HTML_SAFE = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _json_string(data: bytes) -> bytes:
    text = data.decode("utf-8", errors="replace")
    return json.dumps(text, ensure_ascii=False).translate(_HTML_SAFE).encode("utf-8")


def json_array_lines(source: Any) -> Iterator[bytes]:
    """Yield a JSON array of the lines of ``source``, one element per line.

    A newline at the end of the input is followed by an empty element.
    """
    prefix = b"["
    for line in read_lines(source):
        if line.endswith(b"\n"):
            yield prefix + _json_string(line[:-1]) + b",\n"
            prefix = b""
        else:
            yield prefix + _json_string(line) + b"]\n"
            return
    yield prefix + _json_string(b"") + b"]\n"


def new_jsonarray(source: FilterStream, params: Params) -> FilterStream:
    """Create a jsonarray filter over ``source``."""
    return source.wrap(json_array_lines(source))


register("jsonarray", new_jsonarray)