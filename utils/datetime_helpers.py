"""Timezone-aware date helpers for the rental application."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context

from utils.exceptions import ValidationError


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = 'Europe/Madrid'
    if has_app_context():
        tz_name = current_app.config.get('TIMEZONE', tz_name)
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def parse_date(value, field: str = 'date') -> date:
    """
    Coerce a calendar date from a date, datetime, or YYYY-MM-DD string.

    Datetimes lose their time component so overlap comparisons stay
    day-based.

    Args:
        value: date, datetime, or ISO string
        field: Field name reported in the validation error

    Returns:
        datetime.date

    Raises:
        ValidationError if the value is missing or not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            # Accept full ISO timestamps coming from JS clients
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ValidationError(
        f'Invalid date for {field}',
        errors={field: 'Expected a date in YYYY-MM-DD format'}
    )


def to_iso(value) -> str:
    """Normalize a date-like value to its YYYY-MM-DD string."""
    return parse_date(value).isoformat()
