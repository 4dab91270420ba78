from .codec import canonical, decode, decode_text, encode
from .digest import Algorithm, digest, md5, sha256
from .errors import (
    DataKitError,
    MalformedEncoding,
    MalformedTimestamp,
    UnsupportedAlgorithm,
)
from .result import Outcome, attempt
from .temporal import DurationUnit, difference, format, now, parse, shift
from .validators import (
    PasswordPolicy,
    is_valid_email,
    is_valid_password,
    is_valid_phone,
    is_valid_url,
)

__all__ = [
    "Algorithm",
    "digest",
    "md5",
    "sha256",
    "encode",
    "decode",
    "decode_text",
    "canonical",
    "PasswordPolicy",
    "is_valid_email",
    "is_valid_phone",
    "is_valid_url",
    "is_valid_password",
    "DurationUnit",
    "format",
    "parse",
    "now",
    "difference",
    "shift",
    "Outcome",
    "attempt",
    "DataKitError",
    "UnsupportedAlgorithm",
    "MalformedEncoding",
    "MalformedTimestamp",
]
