from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TimeEntryStatus
from .model import NewTimeEntry, TimeEntry


class TimeEntryRepository(Protocol):
    def list_all(self) -> Sequence[TimeEntry]:
        """Newest work date first."""
        raise NotImplementedError

    def list_by_crew(self, crew_id: int) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def list_for_members_between(
        self,
        *,
        member_ids: Sequence[int],
        start_date: date,
        end_date: date,
    ) -> Sequence[TimeEntry]:
        """Entries for any of ``member_ids`` dated within [start_date, end_date]."""
        raise NotImplementedError

    def create_entry(
        self,
        entry: NewTimeEntry,
        *,
        status: TimeEntryStatus,
        submitted_by: Optional[str],
        submitted_at: Optional[datetime],
    ) -> int:
        raise NotImplementedError

    def update_status(
        self,
        *,
        entry_id: int,
        status: TimeEntryStatus,
        submitted_by: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
    ) -> bool:
        raise NotImplementedError
