"""Tests for datetime utilities."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from soapcall.utils.datetime_utils import (
    format_for_soap,
    parse_iso_instant,
    truncate_to_utc_midnight,
)


class TestFormatForSoap:
    """Tests for the format_for_soap function."""

    def test_datetime_with_utc_timezone(self) -> None:
        """Test formatting datetime with UTC timezone."""
        dt = datetime(2025, 11, 14, 15, 30, 45, 123000, tzinfo=UTC)
        assert format_for_soap(dt) == '2025-11-14T15:30:45.123Z'

    def test_datetime_with_negative_timezone_offset(self) -> None:
        """Test that offsets are converted to UTC."""
        tz = timezone(timedelta(hours=-6))
        dt = datetime(2025, 11, 14, 15, 30, 45, 123000, tzinfo=tz)
        assert format_for_soap(dt) == '2025-11-14T21:30:45.123Z'

    def test_datetime_with_positive_timezone_offset(self) -> None:
        """Test that positive offsets can move the date back."""
        tz = timezone(timedelta(hours=5, minutes=30))
        dt = datetime(2025, 11, 14, 3, 0, 0, 0, tzinfo=tz)
        assert format_for_soap(dt) == '2025-11-13T21:30:00.000Z'

    def test_naive_datetime_assumes_utc(self) -> None:
        """Test that naive datetime (no timezone) is assumed to be UTC."""
        dt = datetime(2025, 11, 14, 15, 30, 45, 123000)  # noqa: DTZ001
        assert format_for_soap(dt) == '2025-11-14T15:30:45.123Z'

    def test_date_object_converts_to_midnight_utc(self) -> None:
        """Test that date object is converted to datetime at midnight UTC."""
        assert format_for_soap(date(2025, 11, 14)) == '2025-11-14T00:00:00.000Z'

    def test_iso_string(self) -> None:
        """Test that ISO strings are normalized."""
        assert format_for_soap('2020-12-31T12:34:56.789Z') == '2020-12-31T12:34:56.789Z'
        assert format_for_soap('2020-12-31') == '2020-12-31T00:00:00.000Z'

    def test_milliseconds_zero_padded(self) -> None:
        """Test that milliseconds are zero-padded to 3 digits."""
        dt = datetime(2025, 11, 14, 15, 30, 45, 1000, tzinfo=UTC)
        assert format_for_soap(dt) == '2025-11-14T15:30:45.001Z'

    def test_microseconds_truncated(self) -> None:
        """Test that sub-millisecond precision is dropped."""
        dt = datetime(2025, 11, 14, 23, 59, 59, 999999, tzinfo=UTC)
        assert format_for_soap(dt) == '2025-11-14T23:59:59.999Z'


class TestTruncateToUtcMidnight:
    """Tests for truncate_to_utc_midnight."""

    def test_truncates_time_of_day(self) -> None:
        """Test that the time of day is dropped."""
        dt = datetime(2020, 12, 31, 12, 34, 56, 789000, tzinfo=UTC)
        assert truncate_to_utc_midnight(dt) == datetime(2020, 12, 31, tzinfo=UTC)

    def test_uses_utc_calendar_date(self) -> None:
        """Test that the UTC date, not the local date, is kept."""
        tz = timezone(timedelta(hours=-6))
        dt = datetime(2020, 12, 31, 20, 0, 0, tzinfo=tz)
        assert truncate_to_utc_midnight(dt) == datetime(2021, 1, 1, tzinfo=UTC)


class TestParseIsoInstant:
    """Tests for parse_iso_instant."""

    def test_parse_z_suffix(self) -> None:
        """Test parsing an instant with a Z suffix."""
        assert parse_iso_instant('2020-12-31T12:34:56.789Z') == datetime(
            2020, 12, 31, 12, 34, 56, 789000, tzinfo=UTC
        )

    def test_parse_offset_converts_to_utc(self) -> None:
        """Test that offsets are converted to UTC."""
        parsed = parse_iso_instant('2020-12-31T06:00:00-06:00')
        assert parsed == datetime(2020, 12, 31, 12, 0, 0, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_parse_invalid_raises(self) -> None:
        """Test that invalid text raises ValueError."""
        with pytest.raises(ValueError):
            parse_iso_instant('not a date')
