# tests/test_recurrence.py

from __future__ import annotations

import datetime as dt

from organizer.calendar.recurrence import expand, occurs_on
from organizer.tasks.task_models import Frequency, Task


def _task(start: str, freq: Frequency, end: str | None = None) -> Task:
    return Task.create(text="t", start=start, frequency=freq, end_date=end)


def test_once_yields_only_the_start_day() -> None:
    assert expand(_task("2025-04-01T09:00", Frequency.ONCE)) == ["2025-04-01"]


def test_recurring_without_end_date_yields_only_the_start_day() -> None:
    for freq in (Frequency.DAILY, Frequency.WEEKLY, Frequency.MONTHLY, Frequency.YEARLY):
        assert expand(_task("2025-04-01", freq)) == ["2025-04-01"]


def test_daily_covers_every_day_inclusive() -> None:
    keys = expand(_task("2024-02-27", Frequency.DAILY, "2024-03-02"))
    assert keys == ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02"]


def test_time_of_day_does_not_affect_the_range() -> None:
    keys = expand(_task("2024-01-01T23:59", Frequency.DAILY, "2024-01-03"))
    assert keys == ["2024-01-01", "2024-01-02", "2024-01-03"]


def test_weekly_keeps_the_start_weekday() -> None:
    # 2025-04-01 is a Tuesday.
    keys = expand(_task("2025-04-01", Frequency.WEEKLY, "2025-04-30"))
    assert keys == ["2025-04-01", "2025-04-08", "2025-04-15", "2025-04-22", "2025-04-29"]
    assert {dt.date.fromisoformat(k).weekday() for k in keys} == {1}


def test_monthly_from_the_31st_lands_on_each_month_end() -> None:
    keys = expand(_task("2024-01-31", Frequency.MONTHLY, "2024-04-30"))
    assert keys == ["2024-01-31", "2024-02-29", "2024-03-31", "2024-04-30"]


def test_monthly_from_a_short_month_end_hits_both_day_and_month_end() -> None:
    # Feb 28 is the last day of February 2023, so every later month end matches too.
    keys = expand(_task("2023-02-28", Frequency.MONTHLY, "2023-05-31"))
    assert keys == [
        "2023-02-28",
        "2023-03-28",
        "2023-03-31",
        "2023-04-28",
        "2023-04-30",
        "2023-05-28",
        "2023-05-31",
    ]


def test_monthly_mid_month() -> None:
    keys = expand(_task("2025-01-15", Frequency.MONTHLY, "2025-03-20"))
    assert keys == ["2025-01-15", "2025-02-15", "2025-03-15"]


def test_monthly_from_the_30th_uses_february_end() -> None:
    keys = expand(_task("2024-01-30", Frequency.MONTHLY, "2024-03-31"))
    assert keys == ["2024-01-30", "2024-02-29", "2024-03-30"]


def test_yearly_same_month_and_day() -> None:
    keys = expand(_task("2023-03-15", Frequency.YEARLY, "2025-03-15"))
    assert keys == ["2023-03-15", "2024-03-15", "2025-03-15"]


def test_yearly_leap_day_skips_common_years() -> None:
    keys = expand(_task("2024-02-29", Frequency.YEARLY, "2028-03-01"))
    assert keys == ["2024-02-29", "2028-02-29"]


def test_end_before_start_yields_nothing() -> None:
    for freq in (Frequency.DAILY, Frequency.WEEKLY, Frequency.MONTHLY, Frequency.YEARLY):
        assert expand(_task("2025-04-10", freq, "2025-04-01")) == []


def test_end_equal_to_start_yields_the_start() -> None:
    assert expand(_task("2025-04-10", Frequency.WEEKLY, "2025-04-10")) == ["2025-04-10"]


def test_occurs_on_pattern_only() -> None:
    task = _task("2025-04-01", Frequency.WEEKLY, "2025-12-31")
    assert occurs_on(task, dt.date(2025, 4, 8))
    assert not occurs_on(task, dt.date(2025, 4, 9))


def test_range_ending_on_the_last_representable_day() -> None:
    assert expand(_task("9999-12-30", Frequency.DAILY, "9999-12-31")) == ["9999-12-30", "9999-12-31"]
    assert expand(_task("9999-12-31", Frequency.YEARLY, "9999-12-31")) == ["9999-12-31"]
