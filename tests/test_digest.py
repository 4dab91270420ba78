"""Tests for hexadecimal digests."""

import hashlib
import re

import pytest

from datakit import Algorithm, UnsupportedAlgorithm, digest, md5, sha256

_HEX = re.compile(r"[0-9a-f]+")


def test_legacy_128_known_vector():
    """Test MD5 against the RFC 1321 test vector."""
    assert digest(b"abc", Algorithm.LEGACY_128) == "900150983cd24fb0d6963f7d28e17f72"


def test_sha_256_known_vector():
    """Test SHA-256 against the FIPS 180-2 test vector."""
    assert digest(b"abc", Algorithm.SHA_256) == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_default_algorithm_is_sha_256():
    """Test that omitting the algorithm selects SHA-256."""
    assert digest(b"hello") == (
        "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
    )


@pytest.mark.parametrize(
    "data",
    [b"a", b"hello world", bytes(range(256)), b"\x00" * 1024, "café"],
)
def test_sha_256_is_stable_lowercase_hex(data):
    """Test that SHA-256 output is deterministic and exactly 64 lowercase hex chars."""
    first = digest(data, Algorithm.SHA_256)
    second = digest(data, Algorithm.SHA_256)

    assert first == second
    assert len(first) == 64
    assert _HEX.fullmatch(first)


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_output_length_matches_algorithm(algorithm):
    """Test the fixed output length for each algorithm."""
    assert len(digest(b"payload", algorithm)) == algorithm.hex_length


def test_empty_input_returns_empty_string():
    """Test the empty-in, empty-out convenience rule."""
    assert digest(b"", Algorithm.LEGACY_128) == ""
    assert digest(b"", Algorithm.SHA_256) == ""
    assert digest("", Algorithm.LEGACY_128) == ""


def test_text_is_hashed_as_utf8():
    """Test that str input is encoded as UTF-8 before hashing."""
    text = "naïve ✓"
    expected = hashlib.sha256(text.encode("utf-8")).hexdigest()

    assert digest(text) == expected
    assert digest(bytearray(text.encode("utf-8"))) == expected


def test_input_is_not_mutated():
    """Test that hashing leaves a mutable buffer untouched."""
    buffer = bytearray(b"integrity")
    digest(buffer, Algorithm.LEGACY_128)
    assert buffer == bytearray(b"integrity")


@pytest.mark.parametrize("name", ["md5", "MD5", " legacy_128 ", "sha256", "SHA-256", "sha_256"])
def test_algorithm_names_are_accepted(name):
    """Test that algorithm names resolve case-insensitively."""
    assert len(digest(b"x", name)) in (32, 64)


@pytest.mark.parametrize("algorithm", ["sha1", "crc32", "", 42, None])
def test_unknown_algorithm_raises(algorithm):
    """Test that unknown algorithms signal UnsupportedAlgorithm."""
    with pytest.raises(UnsupportedAlgorithm, match="Unsupported digest algorithm"):
        digest(b"x", algorithm)


def test_unavailable_algorithm_raises(monkeypatch):
    """Test that a runtime refusal (e.g. FIPS mode) becomes UnsupportedAlgorithm."""

    def refuse(name, *args, **kwargs):
        raise ValueError(f"unsupported hash type {name}")

    monkeypatch.setattr(hashlib, "new", refuse)

    with pytest.raises(UnsupportedAlgorithm, match="unsupported hash type md5"):
        digest(b"x", Algorithm.LEGACY_128)


def test_unavailable_algorithm_not_hit_for_empty_input(monkeypatch):
    """Test that empty input short-circuits before the hash is constructed."""
    monkeypatch.setattr(hashlib, "new", lambda *a, **k: pytest.fail("hashed empty input"))
    assert digest(b"", Algorithm.SHA_256) == ""


def test_rejects_non_bytes_input():
    """Test that unsupported input types raise TypeError with a hint."""
    with pytest.raises(TypeError, match="must be bytes or str"):
        digest(12345, Algorithm.SHA_256)


def test_shortcuts():
    """Test the md5/sha256 single-algorithm shortcuts."""
    assert md5("hello") == "5d41402abc4b2a76b9719d911017c592"
    assert sha256("hello") == digest(b"hello", Algorithm.SHA_256)
    assert md5("") == ""
