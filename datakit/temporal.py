"""Date-time formatting, parsing and arithmetic.

Patterns use a small, locale-independent grammar built from runs of
pattern letters:

    yyyy / YYYY   4-digit year          HH   hour 00-23
    yy / YY       2-digit year          hh   hour 01-12 (use with ``a``)
    MM            month 01-12           mm   minute
    dd / DD       day of month          ss   second
    SSS           millisecond           a    AM/PM marker
    Z             UTC offset as +HHMM

Text inside single quotes is literal ('' is a quote character) and any
non-letter character is literal. Two-digit years parse as 2000-2068 for
00-68 and 1969-1999 for 69-99.

Instants are timezone-aware datetimes, Unix timestamps in seconds (int) or
dates (midnight of that day in the zone they are rendered in). Calendar
arithmetic is backed by python-dateutil's relativedelta.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from datakit.errors import MalformedTimestamp
from datakit.util import (
    DAY,
    DEFAULT_PATTERN,
    DEFAULT_TZ,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
)

Instant = datetime | date | int


class DurationUnit(Enum):
    """Output scale for ``difference``; values are lengths in nanoseconds."""

    NANOSECONDS = NANOSECOND
    MICROSECONDS = MICROSECOND
    MILLISECONDS = MILLISECOND
    SECONDS = SECOND
    MINUTES = MINUTE
    HOURS = HOUR
    DAYS = DAY


class _Token(ABC):
    """One piece of a compiled pattern."""

    # Regex group name for fields, None for literals
    name: str | None = None

    @abstractmethod
    def render(self, dt: datetime) -> str:
        pass

    @abstractmethod
    def regex(self) -> str:
        pass


class _Literal(_Token):
    def __init__(self, text: str):
        self.text: str = text

    @override
    def render(self, dt: datetime) -> str:
        return self.text

    @override
    def regex(self) -> str:
        return re.escape(self.text)


class _Number(_Token):
    """Fixed-width zero-padded numeric field."""

    def __init__(self, name: str, width: int, getter: Callable[[datetime], int]):
        self.name: str = name
        self.width: int = width
        self.getter: Callable[[datetime], int] = getter

    @override
    def render(self, dt: datetime) -> str:
        return str(self.getter(dt)).zfill(self.width)

    @override
    def regex(self) -> str:
        return f"[0-9]{{{self.width}}}"


class _Meridiem(_Token):
    name = "meridiem"

    @override
    def render(self, dt: datetime) -> str:
        return "PM" if dt.hour >= 12 else "AM"

    @override
    def regex(self) -> str:
        return "(?i:AM|PM)"


class _Offset(_Token):
    name = "offset"

    @override
    def render(self, dt: datetime) -> str:
        offset = dt.utcoffset() or timedelta(0)
        sign = "-" if offset < timedelta(0) else "+"
        minutes = abs(int(offset.total_seconds())) // 60
        return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"

    @override
    def regex(self) -> str:
        return "[+-][0-9]{4}"


_FIELDS: dict[str, Callable[[], _Token]] = {
    "yyyy": lambda: _Number("year", 4, lambda dt: dt.year),
    "YYYY": lambda: _Number("year", 4, lambda dt: dt.year),
    "yy": lambda: _Number("year2", 2, lambda dt: dt.year % 100),
    "YY": lambda: _Number("year2", 2, lambda dt: dt.year % 100),
    "MM": lambda: _Number("month", 2, lambda dt: dt.month),
    "dd": lambda: _Number("day", 2, lambda dt: dt.day),
    "DD": lambda: _Number("day", 2, lambda dt: dt.day),
    "HH": lambda: _Number("hour", 2, lambda dt: dt.hour),
    "hh": lambda: _Number("hour12", 2, lambda dt: dt.hour % 12 or 12),
    "mm": lambda: _Number("minute", 2, lambda dt: dt.minute),
    "ss": lambda: _Number("second", 2, lambda dt: dt.second),
    "SSS": lambda: _Number("millisecond", 3, lambda dt: dt.microsecond // 1000),
    "a": _Meridiem,
    "Z": _Offset,
}


def _tokenize(pattern: str) -> list[_Token]:
    """Split a pattern into literal and field tokens.

    Raises:
        ValueError: On an unsupported letter run or an unterminated quote
    """
    tokens: list[_Token] = []
    literal: list[str] = []
    i = 0
    n = len(pattern)

    def flush() -> None:
        if literal:
            tokens.append(_Literal("".join(literal)))
            literal.clear()

    while i < n:
        ch = pattern[i]

        if ch == "'":
            # '' outside a quoted section is a single quote
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            j = i + 1
            while True:
                if j >= n:
                    raise ValueError(
                        f"Unterminated quote in date-time pattern {pattern!r}"
                    )
                if pattern[j] == "'":
                    if j + 1 < n and pattern[j + 1] == "'":
                        literal.append("'")
                        j += 2
                        continue
                    break
                literal.append(pattern[j])
                j += 1
            i = j + 1
            continue

        if ch.isascii() and ch.isalpha():
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            run = pattern[i:j]
            if run not in _FIELDS:
                valid = ", ".join(_FIELDS.keys())
                raise ValueError(
                    f"Unsupported token {run!r} in date-time pattern {pattern!r}\n"
                    f"Valid tokens: {valid}\n"
                    f"Hint: Quote literal text, e.g. \"yyyy-MM-dd'T'HH:mm:ss\""
                )
            flush()
            tokens.append(_FIELDS[run]())
            i = j
            continue

        literal.append(ch)
        i += 1

    flush()
    return tokens


def _compile(tokens: list[_Token]) -> re.Pattern[str]:
    parts: list[str] = []
    seen: set[str] = set()
    for token in tokens:
        if token.name is None:
            parts.append(token.regex())
        elif token.name in seen:
            # Repeated fields must carry the same text
            parts.append(f"(?P={token.name})")
        else:
            seen.add(token.name)
            parts.append(f"(?P<{token.name}>{token.regex()})")
    return re.compile("".join(parts))


def _pattern_or_default(pattern: str | None) -> str:
    # Blank falls back to the canonical pattern for format and parse as well
    # as now, instead of short-circuiting to an empty result
    if not pattern or not pattern.strip():
        return DEFAULT_PATTERN
    return pattern


def _coerce_instant(value: Any, name: str, zone: tzinfo = timezone.utc) -> datetime:
    """Convert an instant argument to a timezone-aware datetime.

    Accepts:
    - datetime: Must be timezone-aware
    - int: Unix timestamp in seconds
    - date: Start of day in ``zone`` (UTC unless given)

    Raises:
        TypeError: If value is an unsupported type or naive datetime
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise TypeError(
                f"{name} must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc."
            )
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=zone)
    raise TypeError(
        f"{name} must be datetime, date, or int.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def format(instant: Instant | None, pattern: str = DEFAULT_PATTERN, *, tz: str | None = None) -> str:
    """
    Render an instant as text.

    Args:
        instant: Aware datetime, Unix seconds, or date; None renders as ""
        pattern: Pattern string (blank means ``DEFAULT_PATTERN``)
        tz: IANA zone the instant is shown in. When omitted, an aware
            datetime keeps its own zone, and timestamps and dates use
            ``DEFAULT_TZ``. A date is always midnight of that day in the
            rendering zone.

    Example:
        >>> format(datetime(2025, 1, 6, 9, 30, tzinfo=timezone.utc), "yyyy-MM-dd HH:mm")
        '2025-01-06 09:30'
    """
    if instant is None:
        return ""
    zone = ZoneInfo(tz or DEFAULT_TZ)
    dt = _coerce_instant(instant, "instant", zone)
    if tz is not None or not isinstance(instant, datetime):
        dt = dt.astimezone(zone)
    tokens = _tokenize(_pattern_or_default(pattern))
    return "".join(token.render(dt) for token in tokens)


def parse(text: str | None, pattern: str = DEFAULT_PATTERN, *, tz: str | None = None) -> datetime | None:
    """
    Parse text that exactly matches ``pattern``.

    Fields absent from the pattern default to 1970-01-01 00:00:00.000. The
    result is in zone ``tz`` (``DEFAULT_TZ`` when omitted) unless the
    pattern carries a ``Z`` offset.

    Returns:
        Timezone-aware datetime, or None for empty/blank text

    Raises:
        MalformedTimestamp: If the text does not match or a field is out of range
        TypeError: If text is not a str
    """
    if text is None:
        return None
    if not isinstance(text, str):
        raise TypeError(
            f"parse() text must be str.\n"
            f"Got {type(text).__name__!r}: {text!r}\n"
            f"Hint: Use format() to render datetimes, or pass text such as "
            f"'2025-01-06 09:30:00'"
        )
    if not text.strip():
        return None

    pattern = _pattern_or_default(pattern)
    match = _compile(_tokenize(pattern)).fullmatch(text)
    if match is None:
        raise MalformedTimestamp(text, pattern)
    fields = match.groupdict()

    if "year" in fields:
        year = int(fields["year"])
    elif "year2" in fields:
        short = int(fields["year2"])
        year = 2000 + short if short < 69 else 1900 + short
    else:
        year = 1970

    if "hour" in fields:
        hour = int(fields["hour"])
    elif "hour12" in fields:
        hour12 = int(fields["hour12"])
        if not 1 <= hour12 <= 12:
            raise MalformedTimestamp(text, pattern, f"hour {hour12} is not in 01-12")
        hour = hour12 % 12
        if fields.get("meridiem", "AM").upper() == "PM":
            hour += 12
    else:
        hour = 0

    if "offset" in fields:
        raw = fields["offset"]
        offset = timedelta(hours=int(raw[1:3]), minutes=int(raw[3:5]))
        zone = timezone(-offset if raw[0] == "-" else offset)
    else:
        zone = ZoneInfo(tz or DEFAULT_TZ)

    try:
        return datetime(
            year,
            int(fields.get("month", 1)),
            int(fields.get("day", 1)),
            hour,
            int(fields.get("minute", 0)),
            int(fields.get("second", 0)),
            int(fields.get("millisecond", 0)) * 1000,
            tzinfo=zone,
        )
    except ValueError as e:
        raise MalformedTimestamp(text, pattern, str(e)) from e


def now(pattern: str = "", *, tz: str = DEFAULT_TZ) -> str:
    """Current host time as text (blank pattern means ``DEFAULT_PATTERN``)."""
    return format(datetime.now(ZoneInfo(tz)), pattern, tz=tz)


def difference(start: Instant | None, end: Instant | None, unit: DurationUnit | str | None) -> int:
    """
    Signed ``end - start`` truncated toward zero into ``unit``.

    Returns 0 when ``unit`` or either instant is None. That is a convenience
    default; check your inputs if you need to tell it apart from a genuine
    zero-length span.

    Example:
        >>> difference(0, 90, DurationUnit.MINUTES)
        1
        >>> difference(90, 0, DurationUnit.MINUTES)
        -1
    """
    if start is None or end is None or unit is None:
        return 0

    if isinstance(unit, str):
        try:
            unit = DurationUnit[unit.strip().upper()]
        except KeyError:
            valid = ", ".join(u.name for u in DurationUnit)
            raise ValueError(f"Invalid duration unit '{unit}'. Valid units: {valid}") from None
    elif not isinstance(unit, DurationUnit):
        raise TypeError(
            f"difference() unit must be a DurationUnit or its name.\n"
            f"Got {type(unit).__name__!r}: {unit!r}\n"
            f"Hint: difference(start, end, DurationUnit.SECONDS)  # or 'seconds'"
        )

    # Compare in UTC so same-zone wall-clock arithmetic never skips DST shifts
    start_dt = _coerce_instant(start, "start").astimezone(timezone.utc)
    end_dt = _coerce_instant(end, "end").astimezone(timezone.utc)
    delta = end_dt - start_dt

    nanos = ((delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds) * 1000
    magnitude = abs(nanos) // unit.value
    return magnitude if nanos >= 0 else -magnitude


def shift(
    instant: Instant,
    *,
    years: int = 0,
    months: int = 0,
    weeks: int = 0,
    days: int = 0,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
) -> datetime:
    """
    Move an instant by calendar units.

    Month and year steps clamp to the end of shorter months, so Jan 31 plus
    one month lands on the last day of February. Steps are applied to the
    wall clock of the instant's own zone.

    Example:
        >>> shift(date(2024, 1, 31), months=1).date()
        datetime.date(2024, 2, 29)
    """
    dt = _coerce_instant(instant, "instant")
    return dt + relativedelta(
        years=years,
        months=months,
        weeks=weeks,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )
