"""Fixed-length hexadecimal digests over bytes.

Two algorithms are supported: the legacy 128-bit MD5 digest and SHA-256.
Digests are fingerprints for integrity checks, not a way to store secrets.

Zero-length input returns ``""`` instead of the digest of zero bytes, so
``digest(b"", Algorithm.LEGACY_128) == ""``. Use ``hashlib`` directly when
the hash of the empty sequence is needed.
"""

import hashlib
from enum import StrEnum

from datakit.errors import UnsupportedAlgorithm
from datakit.util import TEXT_ENCODING


class Algorithm(StrEnum):
    LEGACY_128 = "md5"
    SHA_256 = "sha256"

    @property
    def hex_length(self) -> int:
        return _HEX_LENGTHS[self]


_HEX_LENGTHS = {
    Algorithm.LEGACY_128: 32,
    Algorithm.SHA_256: 64,
}

# Accepted spellings, compared case-insensitively
_ALIASES = {
    "md5": Algorithm.LEGACY_128,
    "legacy_128": Algorithm.LEGACY_128,
    "sha256": Algorithm.SHA_256,
    "sha-256": Algorithm.SHA_256,
    "sha_256": Algorithm.SHA_256,
}


def _resolve(algorithm: Algorithm | str) -> Algorithm:
    if isinstance(algorithm, Algorithm):
        return algorithm
    if isinstance(algorithm, str):
        resolved = _ALIASES.get(algorithm.strip().lower())
        if resolved is not None:
            return resolved
    raise UnsupportedAlgorithm(algorithm)


def digest(data: bytes | str, algorithm: Algorithm | str = Algorithm.SHA_256) -> str:
    """
    Return the lowercase hex digest of ``data``.

    Args:
        data: Raw bytes, or text which is encoded as UTF-8 first
        algorithm: ``Algorithm`` member or a name such as "md5" / "sha256"

    Returns:
        32 (LEGACY_128) or 64 (SHA_256) lowercase hex characters, or ``""``
        for zero-length input

    Raises:
        UnsupportedAlgorithm: If the algorithm is unknown or the runtime's
            hashlib refuses it (e.g. MD5 on a FIPS-restricted build)
        TypeError: If ``data`` is neither bytes nor str

    Example:
        >>> digest(b"abc", Algorithm.LEGACY_128)
        '900150983cd24fb0d6963f7d28e17f72'
    """
    algo = _resolve(algorithm)

    if isinstance(data, str):
        data = data.encode(TEXT_ENCODING)
    elif isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    elif not isinstance(data, bytes):
        raise TypeError(
            f"digest() input must be bytes or str.\n"
            f"Got {type(data).__name__!r}: {data!r}\n"
            f"Hint: Encode text yourself, e.g. digest(text.encode('utf-8'))"
        )

    if not data:
        return ""

    try:
        hasher = hashlib.new(algo.value)
    except ValueError as e:
        raise UnsupportedAlgorithm(algo, str(e)) from e

    hasher.update(data)
    return hasher.hexdigest()


def md5(text: bytes | str) -> str:
    """Legacy 128-bit digest shortcut."""
    return digest(text, Algorithm.LEGACY_128)


def sha256(text: bytes | str) -> str:
    """SHA-256 digest shortcut."""
    return digest(text, Algorithm.SHA_256)
