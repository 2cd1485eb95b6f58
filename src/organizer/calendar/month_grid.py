# src/organizer/calendar/month_grid.py

from __future__ import annotations

import datetime as dt
import logging

from dateutil.relativedelta import relativedelta

from .recurrence import days_in_month

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

FIVE_ROWS = 35
SIX_ROWS = 42


def first_weekday(year: int, month: int) -> int:
    """Weekday of day 1, 0=Sunday..6=Saturday."""
    # date.weekday(): Monday=0; shift so Sunday=0.
    return (dt.date(year, month, 1).weekday() + 1) % 7


def grid_rows_needed(year: int, month: int) -> int:
    cells = first_weekday(year, month) + days_in_month(year, month)
    return -(-cells // 7)


def month_grid(year: int, month: int, min_cells: int = FIVE_ROWS) -> list[dt.date | None]:
    """
    Display grid for one month: leading blanks, the days, trailing blanks.

    The grid has min_cells cells (35 by default). A month that needs six rows
    is extended to 42 cells instead of being cut off.
    """
    offset = first_weekday(year, month)
    n_days = days_in_month(year, month)

    size = max(min_cells, FIVE_ROWS)
    if offset + n_days > size:
        logger.debug("Month %04d-%02d needs six rows; extending grid to %d cells", year, month, SIX_ROWS)
        size = SIX_ROWS

    cells: list[dt.date | None] = []
    for i in range(size):
        day_num = i - offset + 1
        cells.append(dt.date(year, month, day_num) if 1 <= day_num <= n_days else None)
    return cells


def grid_weeks(cells: list[dt.date | None]) -> list[list[dt.date | None]]:
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move a (year, month) selector by offset months, stopping at the calendar's first and last month."""
    try:
        moved = dt.date(year, month, 1) + relativedelta(months=offset)
    except (ValueError, OverflowError):
        logger.debug("Month shift %+d from %04d-%02d leaves the calendar range", offset, year, month)
        return (dt.MINYEAR, 1) if offset < 0 else (dt.MAXYEAR, 12)
    return moved.year, moved.month


def clamp_day(year: int, month: int, day: int) -> dt.date:
    return dt.date(year, month, min(max(1, day), days_in_month(year, month)))
