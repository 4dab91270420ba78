"""Base64 codec between bytes and printable text.

The basic RFC 4648 alphabet (``+`` and ``/``) is used unless the caller
passes ``url_safe=True`` to select the URL-safe alphabet (``-`` and ``_``).
Output is always padded and never line-wrapped.

``decode`` accepts line-wrapped text and text with its trailing padding
dropped; both are normalized before decoding, so
``encode(decode(t)) == canonical(t)`` for every valid ``t``.
"""

import base64
import binascii
import re

from datakit.errors import MalformedEncoding
from datakit.util import TEXT_ENCODING

_BASIC = re.compile(r"[A-Za-z0-9+/]*={0,2}")
_URL_SAFE = re.compile(r"[A-Za-z0-9\-_]*={0,2}")
_WHITESPACE = re.compile(r"[ \t\r\n\f\v]+")


def encode(data: bytes | str, *, url_safe: bool = False) -> str:
    """
    Encode bytes to a single line of padded Base64 text.

    Args:
        data: Raw bytes, or text which is encoded as UTF-8 first
        url_safe: Use the URL-safe alphabet instead of the basic one

    Returns:
        Base64 text; ``""`` for empty input

    Example:
        >>> encode(b"hi")
        'aGk='
    """
    if isinstance(data, str):
        data = data.encode(TEXT_ENCODING)
    elif not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"encode() input must be bytes or str.\n"
            f"Got {type(data).__name__!r}: {data!r}"
        )

    if not data:
        return ""

    encoded = base64.urlsafe_b64encode(data) if url_safe else base64.b64encode(data)
    return encoded.decode("ascii")


def canonical(text: str) -> str:
    """Return ``text`` with whitespace removed and trailing padding restored.

    Raises:
        MalformedEncoding: If the unpadded length cannot end a Base64 quantum
            or there is more padding than that quantum needs
    """
    stripped = _WHITESPACE.sub("", text)
    body = stripped.rstrip("=")
    remainder = len(body) % 4
    if remainder == 1:
        raise MalformedEncoding(text, f"length {len(body)} is not a valid Base64 length")

    needed = (4 - remainder) % 4
    if len(stripped) - len(body) > needed:
        raise MalformedEncoding(text, "excess padding")
    return body + "=" * needed


def decode(text: str, *, url_safe: bool = False) -> bytes:
    """
    Decode Base64 text back to bytes.

    Args:
        text: Base64 text, optionally line-wrapped or missing trailing padding
        url_safe: Expect the URL-safe alphabet instead of the basic one

    Returns:
        Decoded bytes; ``b""`` for empty or whitespace-only input

    Raises:
        MalformedEncoding: If the text has characters outside the alphabet,
            bad padding, an impossible length, or non-zero trailing bits
    """
    if not isinstance(text, str):
        raise TypeError(
            f"decode() input must be str.\n"
            f"Got {type(text).__name__!r}: {text!r}"
        )

    normalized = canonical(text)
    if not normalized:
        return b""

    alphabet = _URL_SAFE if url_safe else _BASIC
    if not alphabet.fullmatch(normalized):
        variant = "URL-safe" if url_safe else "basic"
        raise MalformedEncoding(text, f"characters outside the {variant} alphabet or misplaced padding")

    try:
        if url_safe:
            data = base64.urlsafe_b64decode(normalized)
        else:
            data = base64.b64decode(normalized, validate=True)
    except binascii.Error as e:
        raise MalformedEncoding(text, str(e)) from e

    # Reject encodings whose unused trailing bits are set ("QR==" for b"A")
    if encode(data, url_safe=url_safe) != normalized:
        raise MalformedEncoding(text, "non-zero trailing bits")

    return data


def decode_text(text: str, *, url_safe: bool = False) -> str:
    """Decode Base64 text and interpret the bytes as UTF-8."""
    data = decode(text, url_safe=url_safe)
    try:
        return data.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise MalformedEncoding(text, f"decoded bytes are not valid {TEXT_ENCODING}") from e
