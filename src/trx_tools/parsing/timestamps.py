"""TRX date-time and time-span codec.

TRX files store timestamps as ``xs:dateTime`` values with up to seven
fractional digits and (normally) an explicit UTC offset, e.g.
``2025-02-11T17:41:50.6412763+01:00``, and durations as .NET ``TimeSpan``
strings such as ``00:00:00.0012345`` or ``1.02:03:04.5``.

Both are kept at .NET tick resolution (100 ns). Python datetimes stop at
microseconds, so ``Timestamp`` carries the remaining tick next to the
datetime and ``TimeSpan`` is a plain tick count.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import tzinfo

TICKS_PER_MICROSECOND = 10
TICKS_PER_SECOND = 10_000_000

_FRACTION_DIGITS = 7

_TIMESTAMP_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,7}))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})?$"
)

_TIMESPAN_RE = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d{1,7}))?$"
)


@dataclass(frozen=True, order=True)
class Timestamp:
    """A UTC instant with 100 ns resolution."""

    moment: datetime
    """Aware datetime, normalized to UTC; holds everything down to microseconds."""

    extra_ticks: int = 0
    """Ticks below one microsecond (0-9)."""

    def __post_init__(self) -> None:
        if self.moment.tzinfo is None:
            raise ValueError("Timestamp requires an aware datetime")
        if not 0 <= self.extra_ticks < TICKS_PER_MICROSECOND:
            raise ValueError(f"extra_ticks must be in 0..9, got {self.extra_ticks}")
        if self.moment.tzinfo is not UTC:
            object.__setattr__(self, "moment", self.moment.astimezone(UTC))

    def __str__(self) -> str:
        return format_timestamp(self)


@dataclass(frozen=True, order=True)
class TimeSpan:
    """A signed .NET ``TimeSpan`` as a count of 100 ns ticks."""

    ticks: int = 0

    def to_timedelta(self) -> timedelta:
        """Convert to ``timedelta``, dropping the sub-microsecond tick."""
        micro = abs(self.ticks) // TICKS_PER_MICROSECOND
        return timedelta(microseconds=-micro if self.ticks < 0 else micro)

    def __add__(self, other: object) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.ticks + other.ticks)

    def __str__(self) -> str:
        return format_timespan(self)


def _fraction_to_ticks(fraction: str | None) -> int:
    if not fraction:
        return 0
    return int(fraction.ljust(_FRACTION_DIGITS, "0"))


def _parse_offset(offset: str) -> tzinfo:
    if offset == "Z":
        return UTC
    sign = -1 if offset[0] == "-" else 1
    hours, minutes = offset[1:].split(":")
    return timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))


def _check_wall_time(local: datetime, value: str) -> None:
    # A wall time inside a DST gap or fold has two candidate offsets
    if local.replace(fold=0).utcoffset() != local.replace(fold=1).utcoffset():
        raise ValueError(
            f"Timestamp {value!r} is ambiguous or does not exist in {local.tzinfo}"
        )


def parse_timestamp(value: str, *, naive_timezone: tzinfo | None = None) -> Timestamp:
    """Parse a TRX timestamp and normalize it to UTC without losing ticks.

    Args:
        value: Raw attribute value.
        naive_timezone: Zone used to interpret a timestamp without an
            offset. When ``None`` such timestamps are rejected. Wall times
            that are skipped or repeated by a DST change in that zone are
            rejected as well.

    Raises:
        ValueError: If the value is not a valid timestamp, carries no
            offset and no ``naive_timezone`` was given, or falls outside
            the representable range once converted to UTC.
    """
    match = _TIMESTAMP_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid timestamp: {value!r}")

    offset = match.group("offset")
    if offset is not None:
        zone = _parse_offset(offset)
    elif naive_timezone is not None:
        zone = naive_timezone
    else:
        raise ValueError(f"Timestamp {value!r} has no UTC offset")

    micro, extra_ticks = divmod(_fraction_to_ticks(match.group("fraction")), TICKS_PER_MICROSECOND)
    try:
        local = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            micro,
            tzinfo=zone,
        )
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp: {value!r} ({exc})") from exc

    if offset is None:
        _check_wall_time(local, value)

    try:
        moment = local.astimezone(UTC)
    except OverflowError as exc:
        raise ValueError(f"Timestamp {value!r} is out of range in UTC") from exc
    return Timestamp(moment, extra_ticks)


def format_timestamp(value: Timestamp) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.fffffffZ`` (UTC, seven fraction digits)."""
    m = value.moment
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{m.year:04d}-{m.month:02d}-{m.day:02d}T{m.hour:02d}:{m.minute:02d}:{m.second:02d}"
        f".{m.microsecond:06d}{value.extra_ticks}Z"
    )


def parse_timespan(value: str) -> TimeSpan:
    """Parse a .NET ``TimeSpan`` string (``[-][d.]hh:mm:ss[.fffffff]``)."""
    match = _TIMESPAN_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid time span: {value!r}")

    seconds = (
        int(match.group("days") or 0) * 86_400
        + int(match.group("hours")) * 3_600
        + int(match.group("minutes")) * 60
        + int(match.group("seconds"))
    )
    ticks = seconds * TICKS_PER_SECOND + _fraction_to_ticks(match.group("fraction"))
    return TimeSpan(-ticks if match.group("sign") else ticks)


def format_timespan(value: TimeSpan) -> str:
    """Format a ``TimeSpan`` the way .NET's constant (``c``) format does."""
    sign = "-" if value.ticks < 0 else ""
    seconds, fraction = divmod(abs(value.ticks), TICKS_PER_SECOND)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if fraction:
        text = f"{text}.{fraction:0{_FRACTION_DIGITS}d}"
    return sign + text
