"""Anchored 7-day windows used to scope the weekly timesheet grid."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.constants import DAYS_PER_WEEK, DEFAULT_WEEK_ANCHOR


def resolve_week_start(d: date, anchor: int = DEFAULT_WEEK_ANCHOR) -> date:
    """Most recent ``anchor`` weekday on or before ``d`` (Monday=0 .. Sunday=6)."""
    if not 0 <= anchor <= 6:
        raise ValueError(f"anchor weekday must be 0..6, got {anchor!r}")
    return d - timedelta(days=(d.weekday() - anchor) % DAYS_PER_WEEK)


@dataclass(frozen=True)
class WeekWindow:
    start: date
    anchor: int = DEFAULT_WEEK_ANCHOR

    def __post_init__(self):
        if self.start.weekday() != self.anchor:
            raise ValueError(f"{self.start} is not on anchor weekday {self.anchor}")

    @classmethod
    def containing(cls, d: date, anchor: int = DEFAULT_WEEK_ANCHOR) -> "WeekWindow":
        return cls(resolve_week_start(d, anchor), anchor)

    @classmethod
    def current(cls, today: Optional[date] = None, anchor: int = DEFAULT_WEEK_ANCHOR) -> "WeekWindow":
        return cls.containing(today or date.today(), anchor)

    @property
    def end(self) -> date:
        return self.start + timedelta(days=DAYS_PER_WEEK - 1)

    def dates(self) -> tuple[date, ...]:
        return tuple(self.start + timedelta(days=i) for i in range(DAYS_PER_WEEK))

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def next(self) -> "WeekWindow":
        return WeekWindow(self.start + timedelta(days=DAYS_PER_WEEK), self.anchor)

    def previous(self) -> "WeekWindow":
        return WeekWindow(self.start - timedelta(days=DAYS_PER_WEEK), self.anchor)

    def format_range(self) -> str:
        """``Aug 13 - 19, 2025`` or ``Aug 27 - Sep 2, 2025``."""
        start, end = self.start, self.end
        if start.month == end.month:
            return f"{start:%b} {start.day} - {end.day}, {start.year}"
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {start.year}"
