import io

import pytest

from nvgd.filter import FilterStream, Params
from nvgd.filters.digest import digest, new_hash


def run(params, data):
    return new_hash(FilterStream(io.BytesIO(data)), Params(params)).read()


@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, b"d41d8cd98f00b204e9800998ecf8427e"),
        ({"encoding": "base64"}, b"1B2M2Y8AsgTpgAmY7PhCfg=="),
        ({"encoding": "binary"}, bytes.fromhex("d41d8cd98f00b204e9800998ecf8427e")),
        ({"algorithm": "sha1"}, b"da39a3ee5e6b4b0d3255bfef95601890afd80709"),
        (
            {"algorithm": "sha256"},
            b"e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
        ),
        (
            {"algorithm": "sha512"},
            b"cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
            b"47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e",
        ),
    ],
)
def test_hash_filter_empty(params, expected):
    assert run(params, b"") == expected


def test_hash_of_content():
    assert run({}, b"abc") == b"900150983cd24fb0d6963f7d28e17f72"


def test_names_are_case_insensitive():
    assert run({"algorithm": "SHA1", "encoding": "HEX"}, b"") == (
        b"da39a3ee5e6b4b0d3255bfef95601890afd80709"
    )


def test_digest_over_chunks_equals_whole():
    chunked = b"".join(digest([b"a", b"b", b"c"], "md5", "hex"))
    assert chunked == b"900150983cd24fb0d6963f7d28e17f72"


def test_unknown_algorithm():
    with pytest.raises(ValueError, match="unknown hash algorithm: crc"):
        run({"algorithm": "crc"}, b"")


def test_unknown_encoding():
    with pytest.raises(ValueError, match="unknown hash encoder: octal"):
        run({"encoding": "octal"}, b"")