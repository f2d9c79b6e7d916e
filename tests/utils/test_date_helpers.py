from datetime import datetime, timedelta, timezone

from app.utils.date_helpers import (
    add_months,
    is_within_window,
    to_naive_utc,
    tournament_end_date,
    utcnow,
)


def test_end_date_is_three_months_after_start():
    assert tournament_end_date(datetime(2025, 1, 15)) == datetime(2025, 4, 15)


def test_end_date_keeps_time_of_day():
    assert tournament_end_date(datetime(2025, 1, 15, 10, 30)) == datetime(2025, 4, 15, 10, 30)


def test_add_months_clamps_to_last_day_of_month():
    assert add_months(datetime(2025, 11, 30), 3) == datetime(2026, 2, 28)
    assert add_months(datetime(2023, 11, 30), 3) == datetime(2024, 2, 29)


def test_window_is_inclusive():
    start = datetime(2025, 1, 15)
    end = datetime(2025, 4, 15)
    assert is_within_window(start, start, end)
    assert is_within_window(end, start, end)
    assert not is_within_window(start - timedelta(seconds=1), start, end)
    assert not is_within_window(end + timedelta(seconds=1), start, end)


def test_to_naive_utc_converts_aware_values():
    aware = datetime(2025, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_naive_utc(aware) == datetime(2025, 1, 15, 10, 0)


def test_to_naive_utc_leaves_naive_values():
    naive = datetime(2025, 1, 15, 12, 0)
    assert to_naive_utc(naive) is naive


def test_utcnow_is_aware():
    assert utcnow().tzinfo is timezone.utc
