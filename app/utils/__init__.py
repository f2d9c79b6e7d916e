"""Utility functions."""

from app.utils.date_helpers import (
    add_months,
    is_within_window,
    to_naive_utc,
    tournament_end_date,
    utcnow,
)
from app.utils.pagination import MetaData, PagedList

__all__ = [
    "add_months",
    "is_within_window",
    "to_naive_utc",
    "tournament_end_date",
    "utcnow",
    "MetaData",
    "PagedList",
]
