from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from ..core.enums import TimeEntryStatus


@dataclass(frozen=True)
class GPSPoint:
    latitude: float
    longitude: float
    timestamp: str
    accuracy: Optional[float] = None


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one member's timesheet line for one day."""

    id: int
    crew_id: int
    member_id: int
    date: date
    start_time: time
    end_time: time
    hours_regular: float
    hours_overtime: float
    status: TimeEntryStatus
    location: str
    work_description: str
    work_package_id: Optional[str] = None
    comments: Optional[str] = None
    gps_locations: Tuple[GPSPoint, ...] = ()
    submitted_by: str = ""
    submitted_at: Optional[datetime] = None

    @property
    def total_hours(self) -> float:
        return self.hours_regular + self.hours_overtime

    @property
    def activity_time(self) -> datetime:
        """When the entry last moved: submission time, else the work date."""
        return self.submitted_at or datetime.combine(self.date, time.min)


@dataclass(frozen=True)
class NewTimeEntry:
    crew_id: int
    member_id: int
    date: date
    start_time: time
    end_time: time
    hours_regular: float
    hours_overtime: float
    location: str
    work_description: str
    work_package_id: Optional[str] = None
    comments: Optional[str] = None
    submit: bool = False
