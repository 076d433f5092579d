"""
Rendering helpers for the time tools.

- format_datetime(): Day.js-style token patterns ("YYYY-MM-DD HH:mm:ss")
  or strftime patterns ("%Y-%m-%d") for current_time
- humanize_delta(): "3 hours ago" / "in a day" wording for relative_time
- format_offset(): "+05:30" style UTC offsets
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Sunday first, matching the "d" token (0 = Sunday)
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# Bracketed literal text, then every recognised token (longest first per letter)
_TOKEN_PATTERN = re.compile(
    r"\[([^\]]+)]|YYYY|YY|M{1,4}|D{1,2}|d{1,4}|H{1,2}|h{1,2}|a|A|m{1,2}|s{1,2}|Z{1,2}|SSS"
)


def format_offset(offset: timedelta | None, separator: str = ":") -> str:
    """Render a UTC offset as "+HH:MM" (or "+HHMM" with an empty separator)."""
    total_minutes = int((offset or timedelta(0)) / timedelta(minutes=1))
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _weekday(dt: datetime) -> int:
    return (dt.weekday() + 1) % 7


def _render_token(dt: datetime, token: str) -> str:
    hour12 = dt.hour % 12 or 12
    values = {
        "YYYY": f"{dt.year:04d}",
        "YY": f"{dt.year % 100:02d}",
        "M": str(dt.month),
        "MM": f"{dt.month:02d}",
        "MMM": MONTH_NAMES[dt.month - 1][:3],
        "MMMM": MONTH_NAMES[dt.month - 1],
        "D": str(dt.day),
        "DD": f"{dt.day:02d}",
        "d": str(_weekday(dt)),
        "dd": WEEKDAY_NAMES[_weekday(dt)][:2],
        "ddd": WEEKDAY_NAMES[_weekday(dt)][:3],
        "dddd": WEEKDAY_NAMES[_weekday(dt)],
        "H": str(dt.hour),
        "HH": f"{dt.hour:02d}",
        "h": str(hour12),
        "hh": f"{hour12:02d}",
        "a": "am" if dt.hour < 12 else "pm",
        "A": "AM" if dt.hour < 12 else "PM",
        "m": str(dt.minute),
        "mm": f"{dt.minute:02d}",
        "s": str(dt.second),
        "ss": f"{dt.second:02d}",
        "SSS": f"{dt.microsecond // 1000:03d}",
        "Z": format_offset(dt.utcoffset()),
        "ZZ": format_offset(dt.utcoffset(), separator=""),
    }
    return values[token]


def format_datetime(dt: datetime, pattern: str) -> str:
    """
    Format a datetime with a Day.js-style or strftime pattern.

    Patterns containing "%" go to strftime. Anything else is read as
    Day.js tokens; text inside square brackets is copied literally and
    characters that are not tokens pass through unchanged.

    Examples:
        format_datetime(dt, "YYYY-MM-DD HH:mm:ss")  # "2025-03-23 12:30:00"
        format_datetime(dt, "dddd [at] h:mm A")     # "Sunday at 12:30 PM"
        format_datetime(dt, "%Y/%m/%d")             # "2025/03/23"
    """
    if "%" in pattern:
        return dt.strftime(pattern)

    def replace(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return match.group(1)
        return _render_token(dt, match.group(0))

    return _TOKEN_PATTERN.sub(replace, pattern)


# ---------------------------------------------------------------------------
# Relative time
# ---------------------------------------------------------------------------

_SECONDS_PER_UNIT = {
    "second": 1.0,
    "minute": 60.0,
    "hour": 3600.0,
    "day": 86400.0,
    "month": 86400.0 * 365.2425 / 12,
    "year": 86400.0 * 365.2425,
}

# (phrase key, upper bound for the rounded value, unit the value is measured in)
# A threshold without a unit reuses the value measured by the one before it.
_THRESHOLDS: tuple[tuple[str, int | None, str | None], ...] = (
    ("s", 44, "second"),
    ("m", 89, None),
    ("mm", 44, "minute"),
    ("h", 89, None),
    ("hh", 21, "hour"),
    ("d", 35, None),
    ("dd", 25, "day"),
    ("M", 45, None),
    ("MM", 10, "month"),
    ("y", 17, None),
    ("yy", None, "year"),
)

_PHRASES = {
    "s": "a few seconds",
    "m": "a minute",
    "mm": "{n} minutes",
    "h": "an hour",
    "hh": "{n} hours",
    "d": "a day",
    "dd": "{n} days",
    "M": "a month",
    "MM": "{n} months",
    "y": "a year",
    "yy": "{n} years",
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def humanize_delta(target: datetime, now: datetime) -> str:
    """
    Describe ``target`` relative to ``now`` in English.

    Returns "<phrase> ago" for instants at or before now and "in <phrase>"
    for instants after it, e.g. "a few seconds ago", "3 hours ago",
    "in a month".
    """
    elapsed = (target - now).total_seconds()
    magnitude = 0
    phrase = ""

    for index, (key, limit, unit) in enumerate(_THRESHOLDS):
        if unit is not None:
            magnitude = _round_half_up(abs(elapsed) / _SECONDS_PER_UNIT[unit])
        if limit is None or magnitude <= limit:
            if magnitude <= 1 and index > 0:
                key = _THRESHOLDS[index - 1][0]
            phrase = _PHRASES[key].format(n=magnitude)
            break

    if elapsed > 0:
        return f"in {phrase}"
    return f"{phrase} ago"
