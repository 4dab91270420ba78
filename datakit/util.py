"""Shared constants for datakit.

Duration constants represent lengths in nanoseconds, the finest unit
``difference`` can report. Defaults here are used whenever a caller leaves
the matching keyword empty.
"""

# Time unit constants (all values in nanoseconds)
NANOSECOND = 1
MICROSECOND = 1_000
MILLISECOND = 1_000_000
SECOND = 1_000_000_000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# Canonical pattern used by format/parse/now when none is supplied
DEFAULT_PATTERN = "yyyy-MM-dd HH:mm:ss"

# IANA zone used when rendering or parsing instants
DEFAULT_TZ = "UTC"

# Text to bytes convention for digest and codec string inputs
TEXT_ENCODING = "utf-8"
