# tests/test_month_grid.py

from __future__ import annotations

import datetime as dt

from organizer.calendar.month_grid import (
    first_weekday,
    grid_rows_needed,
    grid_weeks,
    month_grid,
    shift_month,
)


def test_april_2025_fits_five_rows() -> None:
    cells = month_grid(2025, 4)

    assert len(cells) == 35
    assert cells[:2] == [None, None]
    assert cells[2] == dt.date(2025, 4, 1)
    assert cells[31] == dt.date(2025, 4, 30)
    assert cells[32:] == [None, None, None]
    assert [c.day for c in cells if c is not None] == list(range(1, 31))


def test_six_row_month_is_extended_not_truncated() -> None:
    # March 2025 starts on a Saturday: 6 blanks + 31 days.
    assert first_weekday(2025, 3) == 6
    assert grid_rows_needed(2025, 3) == 6

    cells = month_grid(2025, 3)
    assert len(cells) == 42
    assert cells[6] == dt.date(2025, 3, 1)
    assert cells[36] == dt.date(2025, 3, 31)
    assert all(c is None for c in cells[37:])


def test_four_row_february_still_fills_the_minimum_grid() -> None:
    # February 2026 starts on a Sunday and has 28 days.
    assert grid_rows_needed(2026, 2) == 4
    cells = month_grid(2026, 2)
    assert len(cells) == 35
    assert cells[0] == dt.date(2026, 2, 1)
    assert cells[28:] == [None] * 7


def test_min_cells_42_always_gives_six_weeks() -> None:
    weeks = grid_weeks(month_grid(2025, 4, min_cells=42))
    assert len(weeks) == 6
    assert all(len(w) == 7 for w in weeks)


def test_shift_month_crosses_years() -> None:
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 12, 1) == (2026, 1)
    assert shift_month(2025, 5, 0) == (2025, 5)


def test_shift_month_stops_at_the_calendar_edges() -> None:
    assert shift_month(1, 1, -1) == (1, 1)
    assert shift_month(9999, 12, 1) == (9999, 12)
    assert shift_month(9999, 11, 1) == (9999, 12)
