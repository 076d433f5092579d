"""
Tests for the time calculations.

Tests cover:
- Offset difference rendering (signs, singular units, remainders)
- Timezone conversion on a shared instant, including daylight saving
- Timestamps, days in month, week numbers
- Error wrapping for empty or invalid inputs
"""

from datetime import UTC, date, datetime

import pytest

from time_mcp.errors import TimeCalculationError, TimeConversionError
from time_mcp.tools.time_tool import calculations
from time_mcp.tools.time_tool.calculations import (
    convert_time,
    days_in_month,
    format_time_diff,
    get_timestamp,
    parse_instant,
    standard_week_number,
    week_of_year,
)

NOW = datetime(2025, 3, 23, 12, 30, tzinfo=UTC)


class TestFormatTimeDiff:
    """Tests for format_time_diff()."""

    @pytest.mark.parametrize(
        "minutes,expected",
        [
            (330, "+5 hours 30 minutes"),
            (15, "+0 hours 15 minutes"),
            (-300, "-5 hours"),
            (-301, "-5 hours 1 minute"),
            (300, "+5 hours"),
            (60, "+1 hour"),
            (-61, "-1 hour 1 minute"),
            (0, "+0 hours"),
            (-15, "-0 hours 15 minutes"),
        ],
    )
    def test_rendering(self, minutes, expected):
        assert format_time_diff(minutes) == expected


class TestConvertTime:
    """Tests for convert_time()."""

    def test_kolkata_to_kathmandu_is_quarter_hour(self):
        result = convert_time("Asia/Kolkata", "Asia/Kathmandu", now=NOW)
        assert result.offset_minutes == 15
        assert result.time_diff == "+0 hours 15 minutes"

    def test_explicit_time_is_read_as_utc(self):
        result = convert_time("Asia/Kolkata", "Asia/Kathmandu", "2025-10-17T00:00:00", now=NOW)
        assert result.source_time == "2025-10-17 05:30:00"
        assert result.target_time == "2025-10-17 05:45:00"

    def test_explicit_offset_is_honoured(self):
        result = convert_time("UTC", "Asia/Tokyo", "2025-10-17T05:30:00+05:30", now=NOW)
        assert result.source_time == "2025-10-17 00:00:00"
        assert result.target_time == "2025-10-17 09:00:00"

    def test_target_behind_source_is_negative(self):
        result = convert_time("Asia/Tokyo", "UTC", now=NOW)
        assert result.offset_minutes == -540
        assert result.time_diff == "-9 hours"

    def test_daylight_saving_changes_difference(self):
        """US clocks moved on 9 March 2025, UK clocks on 30 March 2025."""
        between = convert_time("America/New_York", "Europe/London", "2025-03-20T12:00:00", now=NOW)
        after = convert_time("America/New_York", "Europe/London", "2025-04-01T12:00:00", now=NOW)
        assert between.time_diff == "+4 hours"
        assert after.time_diff == "+5 hours"

    def test_default_instant_is_now(self):
        result = convert_time("UTC", "Europe/Paris", now=NOW)
        assert result.source_time == "2025-03-23 12:30:00"
        assert result.target_time == "2025-03-23 13:30:00"

    def test_same_input_same_output(self):
        first = convert_time("Asia/Kolkata", "America/Chicago", "2025-06-01T08:00:00", now=NOW)
        second = convert_time("Asia/Kolkata", "America/Chicago", "2025-06-01T08:00:00", now=NOW)
        assert first == second

    @pytest.mark.parametrize(
        "source,target,missing",
        [
            ("", "Asia/Tokyo", "sourceTimezone"),
            ("Asia/Tokyo", "   ", "targetTimezone"),
        ],
    )
    def test_empty_timezone_names_both_zones(self, source, target, missing):
        with pytest.raises(TimeConversionError) as exc_info:
            convert_time(source, target, now=NOW)
        message = str(exc_info.value)
        assert "sourceTimezone" in message
        assert "targetTimezone" in message
        assert f"{missing} must not be empty" in message

    def test_unknown_timezone(self):
        with pytest.raises(TimeConversionError, match="unknown timezone 'Mars/Olympus'"):
            convert_time("UTC", "Mars/Olympus", now=NOW)

    def test_unparsable_time(self):
        with pytest.raises(TimeConversionError, match="unparsable") as exc_info:
            convert_time("UTC", "Asia/Tokyo", "yesterday", now=NOW)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_out_of_range_instant_names_both_zones(self):
        with pytest.raises(TimeConversionError, match="out of range") as exc_info:
            convert_time("America/New_York", "Asia/Tokyo", "0001-01-01T00:00:00", now=NOW)
        message = str(exc_info.value)
        assert "sourceTimezone 'America/New_York'" in message
        assert "targetTimezone 'Asia/Tokyo'" in message
        assert isinstance(exc_info.value.__cause__, OverflowError)

    def test_sub_minute_offset_truncates_toward_zero(self):
        """New York kept local mean time (-4:56:02) until 1883."""
        result = convert_time("America/New_York", "UTC", "1880-01-01T12:00:00", now=NOW)
        assert result.offset_minutes == 296
        assert result.time_diff == "+4 hours 56 minutes"

        reverse = convert_time("UTC", "America/New_York", "1880-01-01T12:00:00", now=NOW)
        assert reverse.offset_minutes == -296

    def test_empty_time(self):
        with pytest.raises(TimeConversionError, match="time must not be empty"):
            convert_time("UTC", "Asia/Tokyo", "  ", now=NOW)

    def test_rejects_before_offset_math(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("offset computed for an invalid instant")

        monkeypatch.setattr(calculations, "_offset_minutes", fail)
        with pytest.raises(TimeConversionError):
            convert_time("UTC", "Asia/Tokyo", "not-a-time", now=NOW)


class TestGetTimestamp:
    """Tests for get_timestamp()."""

    def test_naive_time_is_utc(self):
        assert get_timestamp("2025-10-17T00:00:00", now=NOW) == 1760659200000

    @pytest.mark.parametrize("value", ["2025-10-17T00:00:00Z", "2025-10-17T02:00:00+02:00"])
    def test_offset_time(self, value):
        assert get_timestamp(value, now=NOW) == 1760659200000

    def test_milliseconds_kept(self):
        assert get_timestamp("1970-01-01T00:00:01.250", now=NOW) == 1250

    def test_defaults_to_now(self):
        assert get_timestamp(now=NOW) == int(NOW.timestamp()) * 1000

    def test_unparsable(self):
        with pytest.raises(TimeCalculationError, match="get timestamp"):
            get_timestamp("soon", now=NOW)


class TestDaysInMonth:
    """Tests for days_in_month()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2025-02-10", 28),
            ("2024-02-10", 29),
            ("1900-02-01", 28),
            ("2000-02-01", 29),
            ("2025-04-15", 30),
            ("2025-12-31T23:59:59", 31),
        ],
    )
    def test_month_lengths(self, value, expected):
        assert days_in_month(value, now=NOW, default_timezone="UTC") == expected

    def test_defaults_to_current_month(self):
        assert days_in_month(now=NOW, default_timezone="UTC") == 31

    def test_offset_date_is_seen_in_default_zone(self):
        """23:30 at UTC-5 on 31 January is already February in UTC."""
        assert days_in_month("2025-01-31T23:30:00-05:00", now=NOW, default_timezone="UTC") == 28

    def test_unparsable(self):
        with pytest.raises(TimeCalculationError, match="days in month"):
            days_in_month("February", now=NOW, default_timezone="UTC")

    def test_out_of_range(self):
        """Late 9999 at UTC-5 is already year 10000 in UTC."""
        with pytest.raises(TimeCalculationError, match="days in month"):
            days_in_month("9999-12-31T23:00:00-05:00", now=NOW, default_timezone="UTC")


class TestWeekOfYear:
    """Tests for standard_week_number() and week_of_year()."""

    @pytest.mark.parametrize(
        "day,week,iso_week",
        [
            (date(2025, 1, 1), 1, 1),
            (date(2025, 3, 23), 13, 12),
            (date(2024, 12, 29), 1, 52),
            (date(2025, 12, 31), 1, 1),
            (date(2021, 1, 1), 1, 53),
            (date(2021, 1, 3), 2, 53),
        ],
    )
    def test_week_numbers(self, day, week, iso_week):
        assert standard_week_number(day) == week
        result = week_of_year(day.isoformat(), now=NOW, default_timezone="UTC")
        assert result.week == week
        assert result.iso_week == iso_week

    def test_week_starts_on_sunday(self):
        saturday = standard_week_number(date(2025, 3, 22))
        sunday = standard_week_number(date(2025, 3, 23))
        assert sunday == saturday + 1

    def test_defaults_to_today(self):
        result = week_of_year(now=NOW, default_timezone="UTC")
        assert (result.week, result.iso_week) == (13, 12)

    def test_out_of_range(self):
        with pytest.raises(TimeCalculationError, match="week of year"):
            week_of_year("9999-12-31T23:00:00-05:00", now=NOW, default_timezone="UTC")


class TestParseInstant:
    """Tests for parse_instant()."""

    def test_date_only(self):
        assert parse_instant("2025-10-17") == datetime(2025, 10, 17, tzinfo=UTC)

    def test_zulu_suffix(self):
        assert parse_instant("2025-10-17T00:00:00Z") == datetime(2025, 10, 17, tzinfo=UTC)

    def test_empty(self):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_instant(" ")
