from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_non_negative
from ..core.enums import Role, TimeEntryStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..crews.repository import CrewRepository
from .model import NewTimeEntry, TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)

# status -> statuses it may move to
_TRANSITIONS = {
    TimeEntryStatus.DRAFT: {TimeEntryStatus.SUBMITTED},
    TimeEntryStatus.SUBMITTED: {TimeEntryStatus.APPROVED, TimeEntryStatus.REJECTED},
    TimeEntryStatus.REJECTED: {TimeEntryStatus.SUBMITTED},
    TimeEntryStatus.APPROVED: set(),
}


class TimeEntryService:
    """Use cases: record time entries and move them through review."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        crews: CrewRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._entries = entries
        self._crews = crews
        self._clock = clock

    def list_entries(self, crew_id: Optional[int] = None) -> Sequence[TimeEntry]:
        if crew_id is None:
            return self._entries.list_all()
        return self._entries.list_by_crew(int(crew_id))

    def get_entry(self, entry_id: int) -> TimeEntry:
        entry = self._entries.get_by_id(int(entry_id))
        if not entry:
            raise ValidationError("Time entry not found")
        return entry

    def create_entry(self, *, current_role: Role, submitted_by: str, entry: NewTimeEntry) -> TimeEntry:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to record time")

        crew = self._crews.get_by_id(entry.crew_id)
        if not crew:
            raise ValidationError("Crew not found")
        if not crew.find_member(entry.member_id):
            raise ValidationError("Member does not belong to this crew")
        if entry.end_time <= entry.start_time:
            raise ValidationError("End time must be after start time")
        entry = replace(
            entry,
            hours_regular=require_non_negative(entry.hours_regular, "Regular hours"),
            hours_overtime=require_non_negative(entry.hours_overtime, "Overtime hours"),
            work_description=require_non_empty(entry.work_description, "Work description"),
        )

        status = TimeEntryStatus.SUBMITTED if entry.submit else TimeEntryStatus.DRAFT
        entry_id = self._entries.create_entry(
            entry,
            status=status,
            submitted_by=submitted_by if entry.submit else None,
            submitted_at=self._clock() if entry.submit else None,
        )
        return self.get_entry(entry_id)

    def _move(self, entry_id: int, target: TimeEntryStatus, **extra) -> TimeEntry:
        entry = self.get_entry(entry_id)
        if target not in _TRANSITIONS[entry.status]:
            raise ValidationError(f"Cannot change a {entry.status.value} entry to {target.value}")
        if not self._entries.update_status(entry_id=entry.id, status=target, **extra):
            raise ValidationError("Updating the time entry failed")
        logger.info("time entry %s: %s -> %s", entry.id, entry.status.value, target.value)
        return self.get_entry(entry.id)

    def submit_entry(self, *, current_role: Role, submitted_by: str, entry_id: int) -> TimeEntry:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to submit time")
        return self._move(
            entry_id,
            TimeEntryStatus.SUBMITTED,
            submitted_by=submitted_by,
            submitted_at=self._clock(),
        )

    def approve_entry(self, *, current_role: Role, entry_id: int) -> TimeEntry:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to review time")
        return self._move(entry_id, TimeEntryStatus.APPROVED)

    def reject_entry(self, *, current_role: Role, entry_id: int) -> TimeEntry:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to review time")
        return self._move(entry_id, TimeEntryStatus.REJECTED)
