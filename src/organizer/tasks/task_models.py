# src/organizer/tasks/task_models.py

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from ..calendar.date_keys import parse_calendar_date, parse_moment

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    """Raised when a task cannot be created (empty text, missing start date)."""


class Frequency(StrEnum):
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, raw: str | None) -> Frequency:
        if not raw:
            return cls.ONCE
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            logger.warning("Unknown task frequency %r; treating as once", raw)
            return cls.ONCE


@dataclass(frozen=True, slots=True)
class Task:
    """
    One calendar task.

    start_date/start_time form the "start moment": a calendar date plus an
    optional wall-clock time, not a timezone-aware instant. end_date is only
    meaningful for recurring frequencies and is always None for ONCE.
    """

    text: str
    start_date: dt.date
    frequency: Frequency = Frequency.ONCE
    start_time: dt.time | None = None
    end_date: dt.date | None = None

    @classmethod
    def create(
        cls,
        *,
        text: str,
        start: dt.date | dt.datetime | str | None,
        frequency: Frequency | str = Frequency.ONCE,
        start_time: dt.time | str | None = None,
        end_date: dt.date | str | None = None,
    ) -> Task:
        clean = (text or "").strip()
        if not clean:
            raise TaskValidationError("Task text is required.")

        moment = parse_moment(start) if start is not None else None
        if moment is None:
            raise TaskValidationError("Task date is required (YYYY-MM-DD).")

        time_part: dt.time | None = None
        if isinstance(moment, dt.datetime):
            time_part = moment.time().replace(second=0, microsecond=0)
            moment = moment.date()

        if start_time is not None and start_time != "":
            time_part = _parse_time(start_time)

        freq = frequency if isinstance(frequency, Frequency) else Frequency.parse(frequency)

        end: dt.date | None = None
        if freq is not Frequency.ONCE and end_date not in (None, ""):
            end = parse_calendar_date(end_date)
            if end is None:
                raise TaskValidationError(f"Invalid end date: {end_date!r} (expected YYYY-MM-DD).")

        return cls(text=clean, start_date=moment, frequency=freq, start_time=time_part, end_date=end)

    @property
    def is_recurring(self) -> bool:
        return self.frequency is not Frequency.ONCE

    @property
    def start_moment(self) -> dt.date | dt.datetime:
        if self.start_time is None:
            return self.start_date
        return dt.datetime.combine(self.start_date, self.start_time)

    def with_frequency(self, frequency: Frequency) -> Task:
        """Change frequency; resetting to ONCE clears the end date."""
        end = None if frequency is Frequency.ONCE else self.end_date
        return replace(self, frequency=frequency, end_date=end)

    # ---- persisted wire format ----

    def to_record(self) -> dict[str, str]:
        date_s = self.start_date.isoformat()
        if self.start_time is not None:
            date_s = f"{date_s}T{self.start_time.strftime('%H:%M')}"
        return {
            "text": self.text,
            "date": date_s,
            "frequency": self.frequency.value,
            "endDate": self.end_date.isoformat() if self.end_date else "",
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task | None:
        """Validate one persisted record; returns None (and logs) if it is unusable."""
        if not isinstance(raw, dict):
            logger.warning("Dropping non-object task record: %r", raw)
            return None
        try:
            return cls.create(
                text=str(raw.get("text") or ""),
                start=raw.get("date"),
                frequency=str(raw.get("frequency") or "once"),
                end_date=raw.get("endDate") or None,
            )
        except TaskValidationError as e:
            logger.warning("Dropping invalid task record %r: %s", raw, e)
            return None


def _parse_time(raw: dt.time | str) -> dt.time:
    if isinstance(raw, dt.time):
        return raw.replace(second=0, microsecond=0)
    s = str(raw).strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return dt.datetime.strptime(s, fmt).time().replace(second=0)
        except ValueError:
            continue
    raise TaskValidationError(f"Invalid time: {raw!r} (expected HH:MM).")
