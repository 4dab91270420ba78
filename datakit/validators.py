"""Structural string validation.

The email, phone and URL predicates only prove that a string has the shape
of the format. They never check deliverability, DNS or reachability. All
predicates return False for ``None``, non-strings and blank input.
"""

import re
from dataclasses import dataclass, fields
from typing import Any

# Same shape as the Android platform email pattern
_EMAIL = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(?:\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)

# Optional +country, optional (area), then digits with space/dash/dot separators
_PHONE = re.compile(
    r"(?:\+[0-9]+[\- .]*)?"
    r"(?:\([0-9]+\)[\- .]*)?"
    r"[0-9][0-9\- .]+[0-9]"
)

_OCTET = r"(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9]?[0-9])"

_URL = re.compile(
    r"(?:(?:https?|ftp|rtsp)://"
    r"(?:[\w.~!$&'()*+,;=:%\-]+@)?)?"
    r"(?:"
    r"(?:[a-z0-9](?:[a-z0-9\-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}"
    rf"|{_OCTET}(?:\.{_OCTET}){{3}}"
    r")"
    r"(?::[0-9]{1,5})?"
    r"(?:[/?#]\S*)?",
    re.IGNORECASE,
)

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


@dataclass(frozen=True, kw_only=True)
class PasswordPolicy:
    """Character-class requirements combined with AND.

    Checks run in field order and stop at the first failure. With every
    flag off the policy is a plain length check.
    """

    min_length: int = 0
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_digit: bool = False
    require_special: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.min_length, int) or isinstance(self.min_length, bool):
            raise TypeError(
                f"PasswordPolicy min_length must be an int, "
                f"got {type(self.min_length).__name__!r}"
            )
        if self.min_length < 0:
            raise ValueError(
                f"PasswordPolicy min_length ({self.min_length}) must be >= 0"
            )

    def violation(self, password: str) -> str | None:
        """Return the name of the first unmet requirement, or None."""
        if len(password) < self.min_length:
            return "min_length"
        if self.require_uppercase and not _UPPER.search(password):
            return "require_uppercase"
        if self.require_lowercase and not _LOWER.search(password):
            return "require_lowercase"
        if self.require_digit and not _DIGIT.search(password):
            return "require_digit"
        if self.require_special and not _SPECIAL.search(password):
            return "require_special"
        return None

    def __str__(self) -> str:
        flags = [f.name for f in fields(self) if f.type is bool and getattr(self, f.name)]
        return f"PasswordPolicy(min {self.min_length}, {', '.join(flags) or 'no classes'})"


def is_valid_email(email: str) -> bool:
    if _is_blank(email):
        return False
    return _EMAIL.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    if _is_blank(phone):
        return False
    return _PHONE.fullmatch(phone) is not None


def is_valid_url(url: str) -> bool:
    """True for http(s)/ftp/rtsp URLs and bare hosts like ``example.com``."""
    if _is_blank(url):
        return False
    return _URL.fullmatch(url) is not None


def is_valid_password(password: str, policy: PasswordPolicy | None = None) -> bool:
    """
    Check a password against a policy.

    Args:
        password: Candidate password; blank input is always rejected
        policy: Requirements to apply (default: any non-blank string)

    Example:
        >>> strict = PasswordPolicy(
        ...     min_length=6,
        ...     require_uppercase=True,
        ...     require_lowercase=True,
        ...     require_digit=True,
        ...     require_special=True,
        ... )
        >>> is_valid_password("Abc123!", strict)
        True
        >>> is_valid_password("abc123", strict)
        False
    """
    if _is_blank(password):
        return False
    return (policy or PasswordPolicy()).violation(password) is None
