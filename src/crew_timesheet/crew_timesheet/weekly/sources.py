"""Where attendance cells come from.

A source answers one question per projection: for these members and this
window, which (member, date) pairs have time recorded, and in what state.
Pairs it leaves out are treated as missing by the projector, so a source
must raise ``DataSourceError`` rather than return a partial answer.
"""
from __future__ import annotations

import random
from collections import defaultdict
from datetime import date
from typing import Dict, Mapping, Protocol, Sequence, Tuple

from ..core.enums import CellStatus, TimeEntryStatus
from ..timesheets.model import TimeEntry
from ..timesheets.repository import TimeEntryRepository
from .model import AttendanceCell
from .window import WeekWindow

CellKey = Tuple[int, date]

ENTRY_TO_CELL_STATUS = {
    TimeEntryStatus.APPROVED: CellStatus.APPROVED,
    TimeEntryStatus.SUBMITTED: CellStatus.SUBMITTED,
    TimeEntryStatus.DRAFT: CellStatus.PENDING,
    TimeEntryStatus.REJECTED: CellStatus.PENDING,
}

# least advanced first; a day with several entries shows the weakest one
_STATUS_RANK = {CellStatus.PENDING: 0, CellStatus.SUBMITTED: 1, CellStatus.APPROVED: 2}


class AttendanceSource(Protocol):
    def fetch(self, member_ids: Sequence[int], window: WeekWindow) -> Mapping[CellKey, AttendanceCell]:
        raise NotImplementedError


def cell_from_entries(entries: Sequence[TimeEntry]) -> AttendanceCell:
    if not entries:
        return AttendanceCell.missing()
    status = min((ENTRY_TO_CELL_STATUS[e.status] for e in entries), key=_STATUS_RANK.__getitem__)
    return AttendanceCell.entry(status, sum(e.total_hours for e in entries))


class TimeEntryAttendanceSource:
    """Cells from persisted time entries keyed by (member, date)."""

    def __init__(self, entries: TimeEntryRepository):
        self._entries = entries

    def fetch(self, member_ids: Sequence[int], window: WeekWindow) -> Mapping[CellKey, AttendanceCell]:
        grouped: Dict[CellKey, list] = defaultdict(list)
        rows = self._entries.list_for_members_between(
            member_ids=list(member_ids), start_date=window.start, end_date=window.end
        )
        for entry in rows:
            grouped[(entry.member_id, entry.date)].append(entry)
        return {key: cell_from_entries(items) for key, items in grouped.items()}


class SyntheticAttendanceSource:
    """Placeholder data for demos (``DEMO_ATTENDANCE``). Not business logic.

    Each cell is drawn from a generator seeded with (seed, member, date) so a
    page reload shows the same grid.
    """

    def __init__(
        self,
        *,
        seed: int = 0,
        weekday_missing_rate: float = 0.1,
        weekend_missing_rate: float = 0.3,
        shift_hours: float = 16.0,
    ):
        self._seed = seed
        self._weekday_missing_rate = weekday_missing_rate
        self._weekend_missing_rate = weekend_missing_rate
        self._shift_hours = shift_hours

    def _draw(self, member_id: int, d: date) -> AttendanceCell:
        rng = random.Random(f"{self._seed}:{member_id}:{d.isoformat()}")
        missing_rate = self._weekend_missing_rate if d.weekday() >= 5 else self._weekday_missing_rate
        if rng.random() < missing_rate:
            return AttendanceCell.missing()
        status = rng.choices(
            (CellStatus.APPROVED, CellStatus.SUBMITTED, CellStatus.PENDING),
            weights=(0.75, 0.17, 0.08),
        )[0]
        return AttendanceCell.entry(status, self._shift_hours)

    def fetch(self, member_ids: Sequence[int], window: WeekWindow) -> Mapping[CellKey, AttendanceCell]:
        out = {}
        for member_id in member_ids:
            for d in window.dates():
                cell = self._draw(member_id, d)
                if cell.has_entry:
                    out[(member_id, d)] = cell
        return out
