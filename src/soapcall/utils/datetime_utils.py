# soapcall/utils/datetime_utils.py
"""
Datetime utilities for SOAP timestamps and dates.

All instants travel on the wire as UTC ISO 8601 strings with millisecond
precision and a literal 'Z' suffix: YYYY-MM-DDThh:mm:ss.cccZ
"""

from datetime import UTC, date, datetime


def to_utc_datetime(value: date | datetime | str) -> datetime:
    """
    Normalize a date, datetime or ISO 8601 string to an aware UTC datetime.

    Args:
        value: A datetime (naive values are assumed to be UTC), a date
               (converted to midnight UTC), or an ISO 8601 string.

    Returns:
        The equivalent aware datetime in UTC.

    Raises:
        ValueError: If a string is not a valid ISO 8601 date or datetime.
        TypeError: If the value is of any other type.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())

    # Convert date to datetime at midnight UTC if needed
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, datetime.min.time(), tzinfo=UTC)

    if not isinstance(value, datetime):
        raise TypeError(f'Expected a date, datetime or ISO string, got {type(value)!r}')

    # If datetime is naive (no timezone), assume UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)

    return value.astimezone(UTC)


def format_for_soap(dt: date | datetime | str) -> str:
    """
    Format an instant for a SOAP request as a UTC ISO string.

    Examples:
        >>> from datetime import datetime, timezone, timedelta
        >>> dt = datetime(2025, 11, 14, 15, 30, 45, 123000,
        ...               tzinfo=timezone(timedelta(hours=-6)))
        >>> format_for_soap(dt)
        '2025-11-14T21:30:45.123Z'
        >>> format_for_soap(date(2025, 11, 14))
        '2025-11-14T00:00:00.000Z'
    """
    utc: datetime = to_utc_datetime(dt)

    # strftime has no millisecond directive, so we build it manually
    date_time_part: str = utc.strftime('%Y-%m-%dT%H:%M:%S')
    milliseconds: int = utc.microsecond // 1000

    return f'{date_time_part}.{milliseconds:03d}Z'


def truncate_to_utc_midnight(dt: date | datetime | str) -> datetime:
    """Return midnight UTC of the UTC calendar date of the given instant."""
    utc: datetime = to_utc_datetime(dt)
    return datetime.combine(utc.date(), datetime.min.time(), tzinfo=UTC)


def parse_iso_instant(text: str) -> datetime:
    """
    Parse an ISO 8601 instant from a SOAP response into an aware UTC datetime.

    Raises:
        ValueError: If the text is not a valid ISO 8601 datetime.
    """
    return to_utc_datetime(datetime.fromisoformat(text.strip()))
