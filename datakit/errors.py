"""Error types raised by datakit operations.

Every error is a ``ValueError`` so callers that already guard against bad
values keep working. Catch ``DataKitError`` to handle any toolkit failure.
"""


class DataKitError(ValueError):
    """Base class for recoverable and configuration errors in datakit."""


class UnsupportedAlgorithm(DataKitError):
    """Requested digest algorithm is unknown or unavailable at runtime."""

    def __init__(self, algorithm: object, reason: str | None = None):
        self.algorithm: object = algorithm
        message = f"Unsupported digest algorithm: {algorithm!r}"
        if reason:
            message += f"\nReason: {reason}"
        message += "\nHint: Use Algorithm.LEGACY_128 ('md5') or Algorithm.SHA_256 ('sha256')"
        super().__init__(message)


class MalformedEncoding(DataKitError):
    """Text is not valid Base64 for the selected alphabet."""

    def __init__(self, text: str, reason: str):
        self.text: str = text
        self.reason: str = reason
        preview = text if len(text) <= 40 else text[:37] + "..."
        super().__init__(
            f"Malformed Base64 input: {reason}\n"
            f"Got: {preview!r}\n"
            f"Hint: Check the alphabet (basic '+/' vs url_safe '-_') and padding"
        )


class MalformedTimestamp(DataKitError):
    """Text does not match the supplied date-time pattern."""

    def __init__(self, text: str, pattern: str, reason: str | None = None):
        self.text: str = text
        self.pattern: str = pattern
        message = f"Timestamp {text!r} does not match pattern {pattern!r}"
        if reason:
            message += f"\nReason: {reason}"
        message += (
            "\nHint: Every pattern field must be present with its exact digit count,"
            "\n      e.g. parse('2025-01-06 09:30:00', 'yyyy-MM-dd HH:mm:ss')"
        )
        super().__init__(message)
