"""Tests for the Base64 codec."""

import os

import pytest

from datakit import MalformedEncoding, canonical, decode, decode_text, encode


def test_encode_known_values():
    """Test encoding against RFC 4648 vectors."""
    assert encode(b"f") == "Zg=="
    assert encode(b"fo") == "Zm8="
    assert encode(b"foo") == "Zm9v"
    assert encode(b"foobar") == "Zm9vYmFy"


def test_empty_round_trip():
    """Test that empty bytes encode to empty text and back."""
    assert encode(b"") == ""
    assert decode("") == b""


def test_whitespace_only_decodes_to_empty():
    """Test that text with no Base64 characters decodes to nothing."""
    assert decode("  \n ") == b""


@pytest.mark.parametrize(
    "data",
    [b"\x00", b"hi", b"hello", bytes(range(256)), os.urandom(1000), b"\xff" * 57],
)
def test_decode_inverts_encode(data):
    """Test decode(encode(b)) == b for varied byte sequences."""
    assert decode(encode(data)) == data
    assert decode(encode(data, url_safe=True), url_safe=True) == data


def test_encode_output_is_single_line():
    """Test that long input is never line-wrapped."""
    text = encode(b"x" * 300)
    assert "\n" not in text
    assert len(text) == 400


def test_basic_alphabet_is_default():
    """Test that the basic alphabet is used unless url_safe is requested."""
    assert encode(b"\xfb\xff") == "+/8="
    assert encode(b"\xfb\xff", url_safe=True) == "-_8="


def test_alphabets_are_not_mixed():
    """Test that each alphabet rejects the other's special characters."""
    with pytest.raises(MalformedEncoding, match="basic alphabet"):
        decode("-_8=")
    with pytest.raises(MalformedEncoding, match="URL-safe alphabet"):
        decode("+/8=", url_safe=True)


def test_encode_text_uses_utf8():
    """Test that str input is encoded as UTF-8."""
    assert encode("café") == "Y2Fmw6k="
    assert decode_text("Y2Fmw6k=") == "café"


def test_decode_accepts_line_wrapped_text():
    """Test that MIME-style line breaks are ignored."""
    assert decode("aGVs\nbG8=\n") == b"hello"
    assert decode("aGVs\r\nbG8=") == b"hello"


def test_decode_restores_missing_padding():
    """Test that unpadded text decodes like its padded form."""
    assert decode("aGk") == b"hi"
    assert decode("aGVsbG8") == b"hello"
    assert decode("aGk=") == b"hi"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("aGk", "aGk="),
        ("aGVs\nbG8", "aGVsbG8="),
        ("Zg", "Zg=="),
        ("Zg=", "Zg=="),
        ("Zm9v", "Zm9v"),
    ],
)
def test_encode_of_decode_is_canonical(text, expected):
    """Test encode(decode(t)) == canonical(t) for padding and wrapping variants."""
    assert canonical(text) == expected
    assert encode(decode(text)) == expected


def test_canonical_is_exported():
    """Test that canonical is part of the package root surface."""
    import datakit
    import datakit.codec

    assert datakit.canonical is datakit.codec.canonical
    assert "canonical" in datakit.__all__


@pytest.mark.parametrize(
    "text",
    [
        "a",  # impossible length
        "aGk*",  # outside alphabet
        "aG=k",  # padding in the middle
        "aGk===",  # excess padding
        "====",
        "QR==",  # non-zero trailing bits
        "éééé",
    ],
)
def test_malformed_input_raises(text):
    """Test that malformed Base64 is never truncated or substituted."""
    with pytest.raises(MalformedEncoding, match="Malformed Base64 input"):
        decode(text)


def test_malformed_error_carries_input():
    """Test that the error exposes the offending text and reason."""
    with pytest.raises(MalformedEncoding) as excinfo:
        decode("aGk*")

    assert excinfo.value.text == "aGk*"
    assert "alphabet" in excinfo.value.reason


def test_decode_text_rejects_invalid_utf8():
    """Test that decoded bytes must be valid UTF-8 for decode_text."""
    with pytest.raises(MalformedEncoding, match="not valid utf-8"):
        decode_text(encode(b"\xff\xfe"))


def test_type_errors():
    """Test that wrong argument types raise TypeError."""
    with pytest.raises(TypeError, match="must be bytes or str"):
        encode(42)
    with pytest.raises(TypeError, match="must be str"):
        decode(b"aGk=")
