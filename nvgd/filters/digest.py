"""The "hash" filter: replaces the content with its digest."""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Callable, Iterator
from typing import Any

from nvgd.filter import FilterStream, Params, register

__all__ = ["ALGORITHMS", "ENCODINGS", "digest", "new_hash"]

_CHUNK_SIZE = 64 * 1024

ALGORITHMS: dict[str, Callable[[], Any]] = {
    "md5": hashlib.md5,
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}

ENCODINGS: dict[str, Callable[[bytes], bytes]] = {
    "hex": lambda b: b.hex().encode("ascii"),
    "base64": base64.b64encode,
    "binary": bytes,
}


def _chunks(source: Any) -> Iterator[bytes]:
    if hasattr(source, "read"):
        while True:
            chunk = source.read(_CHUNK_SIZE)
            if not chunk:
                return
            yield bytes(chunk)
    else:
        yield from source


def digest(source: Any, algorithm: str = "md5", encoding: str = "hex") -> Iterator[bytes]:
    """Return an iterator yielding the encoded digest of all of ``source``.

    ``algorithm`` is one of md5, sha1, sha256 or sha512 and ``encoding``
    one of hex, base64 or binary, both case-insensitive.  Unknown names
    raise :class:`ValueError` at once.
    """
    factory = ALGORITHMS.get(algorithm.lower())
    if factory is None:
        raise ValueError(f"unknown hash algorithm: {algorithm}")
    encode = ENCODINGS.get(encoding.lower())
    if encode is None:
        raise ValueError(f"unknown hash encoder: {encoding}")

    def generate() -> Iterator[bytes]:
        h = factory()
        for chunk in _chunks(source):
            h.update(chunk)
        yield encode(h.digest())

    return generate()


def new_hash(source: FilterStream, params: Params) -> FilterStream:
    """Create a hash filter from the ``algorithm`` and ``encoding`` params."""
    algorithm = params.get_str("algorithm", "md5")
    encoding = params.get_str("encoding", "hex")
    return source.wrap(digest(source, algorithm, encoding))


register("hash", new_hash)