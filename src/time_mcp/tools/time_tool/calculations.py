"""
Date/time calculations behind the time tools.

Every function is pure: "now" is passed in by the caller so that a single
instant is shared by all views of one request. Errors raised by datetime or
zoneinfo are re-raised as TimeCalculationError (or TimeConversionError for
convert_time) with the original cause chained.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from time_mcp.errors import TimeCalculationError, TimeConversionError

from .formatting import format_datetime, humanize_delta

logger = logging.getLogger(__name__)

STANDARD_FORMAT = "YYYY-MM-DD HH:mm:ss"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class CurrentTime:
    utc: str
    local: str
    timezone: str


@dataclass(frozen=True)
class WeekOfYear:
    week: int
    iso_week: int


@dataclass(frozen=True)
class Conversion:
    source_time: str
    target_time: str
    offset_minutes: int
    time_diff: str


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def resolve_zone(name: str) -> ZoneInfo:
    """Look up an IANA timezone.

    Raises:
        ValueError: If the name is empty or unknown
    """
    if not name or not name.strip():
        raise ValueError("timezone must not be empty")
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ValueError(f"unknown timezone '{name}'") from e


def parse_instant(value: str, assume: tzinfo = UTC) -> datetime:
    """Parse an ISO 8601 string into an aware datetime.

    Strings without an offset are read in ``assume``.

    Raises:
        ValueError: If the string is empty or not ISO 8601
    """
    text = value.strip()
    if not text:
        raise ValueError("time must not be empty")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(f"unparsable ISO 8601 time '{value}'") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=assume)
    return parsed


def _calendar_date(value: str | None, now: datetime, zone: tzinfo) -> date:
    """Calendar date of ``value`` (or of ``now``) as seen in ``zone``."""
    if value is None:
        return now.astimezone(zone).date()
    parsed = parse_instant(value, assume=zone)
    try:
        return parsed.astimezone(zone).date()
    except OverflowError as e:
        raise ValueError(f"time '{value}' is out of range in {zone}") from e


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def current_time(pattern: str, timezone: str, *, now: datetime) -> CurrentTime:
    """Format ``now`` in UTC and in ``timezone`` with the same pattern."""
    try:
        zone = resolve_zone(timezone)
        return CurrentTime(
            utc=format_datetime(now.astimezone(UTC), pattern),
            local=format_datetime(now.astimezone(zone), pattern),
            timezone=timezone,
        )
    except ValueError as e:
        raise TimeCalculationError(f"get current time in '{timezone}'", str(e)) from e


def relative_time(time: str, *, now: datetime, default_timezone: str) -> str:
    """Humanized distance between ``time`` and ``now``, e.g. "3 hours ago"."""
    try:
        instant = parse_instant(time, assume=resolve_zone(default_timezone))
    except ValueError as e:
        raise TimeCalculationError(f"get relative time of '{time}'", str(e)) from e
    return humanize_delta(instant, now)


def get_timestamp(time: str | None = None, *, now: datetime) -> int:
    """Milliseconds since the Unix epoch. Strings without an offset are UTC."""
    if time is None:
        instant = now
    else:
        try:
            instant = parse_instant(time, assume=UTC)
        except ValueError as e:
            raise TimeCalculationError(f"get timestamp of '{time}'", str(e)) from e
    return (instant - EPOCH) // timedelta(milliseconds=1)


def days_in_month(date: str | None = None, *, now: datetime, default_timezone: str) -> int:
    """Number of days (28-31) in the month containing ``date``."""
    try:
        day = _calendar_date(date, now, resolve_zone(default_timezone))
    except ValueError as e:
        raise TimeCalculationError(f"get days in month of '{date}'", str(e)) from e
    return calendar.monthrange(day.year, day.month)[1]


def standard_week_number(day: date) -> int:
    """Week of the year with Sunday-start weeks.

    The week containing January 1 is week 1. Late-December days whose week
    already contains the next January 1 also count as week 1.
    """
    week_start = day - timedelta(days=(day.weekday() + 1) % 7)
    if day.month == 12 and day.day > 25:
        if date(day.year + 1, 1, 1) <= week_start + timedelta(days=6):
            return 1
    new_year = date(day.year, 1, 1)
    first_week_start = new_year - timedelta(days=(new_year.weekday() + 1) % 7)
    return (week_start - first_week_start).days // 7 + 1


def week_of_year(
    date: str | None = None, *, now: datetime, default_timezone: str
) -> WeekOfYear:
    """Standard (Sunday-start) and ISO 8601 week numbers of ``date``."""
    try:
        day = _calendar_date(date, now, resolve_zone(default_timezone))
    except ValueError as e:
        raise TimeCalculationError(f"get week of year of '{date}'", str(e)) from e
    return WeekOfYear(week=standard_week_number(day), iso_week=day.isocalendar().week)


# ---------------------------------------------------------------------------
# Timezone conversion
# ---------------------------------------------------------------------------


def format_time_diff(minutes: int) -> str:
    """
    Render an offset difference in minutes as a signed hours/minutes string.

    Examples:
        format_time_diff(330)   # "+5 hours 30 minutes"
        format_time_diff(15)    # "+0 hours 15 minutes"
        format_time_diff(-300)  # "-5 hours"
        format_time_diff(-301)  # "-5 hours 1 minute"
        format_time_diff(60)    # "+1 hour"
    """
    sign = "-" if minutes < 0 else "+"
    hours, remainder = divmod(abs(minutes), 60)
    text = f"{sign}{hours} {'hour' if hours == 1 else 'hours'}"
    if remainder:
        text += f" {remainder} {'minute' if remainder == 1 else 'minutes'}"
    return text


def _offset_minutes(dt: datetime) -> int:
    offset = dt.utcoffset() or timedelta(0)
    return int(offset / timedelta(minutes=1))


def convert_time(
    source_timezone: str,
    target_timezone: str,
    time: str | None = None,
    *,
    now: datetime,
) -> Conversion:
    """
    Show one instant in two timezones and the difference between them.

    The instant is ``time`` (read as UTC when it has no offset) or ``now``.
    Both local times are views of that same instant, so the difference is
    exactly ``target offset - source offset`` at that moment, including any
    daylight saving in effect.

    Raises:
        TimeConversionError: For empty or unknown zones, or an empty or
            unparsable time. The message names both zones.
    """
    for field_name, value in (
        ("sourceTimezone", source_timezone),
        ("targetTimezone", target_timezone),
    ):
        if not value.strip():
            raise TimeConversionError(
                source_timezone, target_timezone, f"{field_name} must not be empty"
            )

    try:
        instant = now if time is None else parse_instant(time, assume=UTC)
        source_zone = resolve_zone(source_timezone)
        target_zone = resolve_zone(target_timezone)
        source_time = instant.astimezone(source_zone)
        target_time = instant.astimezone(target_zone)
    except OverflowError as e:
        raise TimeConversionError(
            source_timezone, target_timezone, f"time '{time}' is out of range"
        ) from e
    except ValueError as e:
        raise TimeConversionError(source_timezone, target_timezone, str(e)) from e

    diff = _offset_minutes(target_time) - _offset_minutes(source_time)
    logger.debug(
        "Converted %s from %s to %s (%+d minutes)",
        instant.isoformat(),
        source_timezone,
        target_timezone,
        diff,
    )

    return Conversion(
        source_time=format_datetime(source_time, STANDARD_FORMAT),
        target_time=format_datetime(target_time, STANDARD_FORMAT),
        offset_minutes=diff,
        time_diff=format_time_diff(diff),
    )
