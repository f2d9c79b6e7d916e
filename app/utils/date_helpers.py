"""
Date helpers for tournament scheduling windows.
"""

from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta

from app.config import get_settings


def add_months(value: datetime, months: int) -> datetime:
    """
    Add calendar months to a datetime.

    The day of month is clamped to the last day of the target month, so
    ``add_months(datetime(2025, 11, 30), 3)`` is ``datetime(2026, 2, 28)``.
    """
    return value + relativedelta(months=months)


def tournament_end_date(start_date: datetime) -> datetime:
    """End of the tournament window that opens at ``start_date``."""
    return add_months(start_date, get_settings().tournament_duration_months)


def is_within_window(moment: datetime, start: datetime, end: datetime) -> bool:
    """Inclusive check ``start <= moment <= end``."""
    return start <= moment <= end


def to_naive_utc(value: datetime) -> datetime:
    """
    Convert an aware datetime to naive UTC; naive values are returned as is.

    Columns are stored as naive ``DateTime``, so every incoming value goes
    through here before it is compared or persisted.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)
