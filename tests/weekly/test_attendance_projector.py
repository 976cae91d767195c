from __future__ import annotations

from datetime import date

import pytest

from src.crew_timesheet.crew_timesheet.core.enums import CellStatus, TimeEntryStatus
from src.crew_timesheet.crew_timesheet.core.exceptions import DataSourceError
from src.crew_timesheet.crew_timesheet.weekly.model import AttendanceCell, GridCrew, GridMember
from src.crew_timesheet.crew_timesheet.weekly.projector import WeeklyAttendanceProjector
from src.crew_timesheet.crew_timesheet.weekly.sources import TimeEntryAttendanceSource
from src.crew_timesheet.crew_timesheet.weekly.window import WeekWindow

from tests.fakes import FailingTimeEntries, InMemoryTimeEntries, make_entry

WINDOW = WeekWindow(date(2025, 8, 13))

ALPHA = GridCrew(
    id=1,
    crew_name="Line Crew Alpha",
    utility_company="Florida Power & Light",
    members=(GridMember(1, "Mike Johnson", "Foreman"), GridMember(2, "Carlos Rivera", "Lineman"), GridMember(3, "Dave Thompson", "Apprentice")),
)
EMPTY = GridCrew(id=9, crew_name="Empty Crew", utility_company="Duke Energy")


class StaticSource:
    def __init__(self, cells):
        self.cells = cells
        self.calls = []

    def fetch(self, member_ids, window):
        self.calls.append((list(member_ids), window))
        return self.cells


def test_three_members_yield_21_cells_all_missing_without_records():
    attendance = WeeklyAttendanceProjector(StaticSource({})).project([ALPHA], WINDOW)

    assert attendance.cell_count() == 21
    for _, _, _, cell in attendance.iter_cells():
        assert cell == AttendanceCell.missing()


def test_every_member_gets_every_window_date():
    attendance = WeeklyAttendanceProjector(StaticSource({})).project([ALPHA], WINDOW)
    for member_week in attendance.crews[0].members:
        assert tuple(member_week.cells) == WINDOW.dates()


def test_recorded_cells_are_placed_and_rest_missing():
    source = StaticSource({(2, date(2025, 8, 14)): AttendanceCell.entry(CellStatus.APPROVED, 16)})
    attendance = WeeklyAttendanceProjector(source).project([ALPHA], WINDOW)

    assert attendance.cell(1, 2, date(2025, 8, 14)) == AttendanceCell(True, CellStatus.APPROVED, 16.0)
    assert attendance.cell(1, 2, date(2025, 8, 15)).status == CellStatus.MISSING
    assert attendance.cell(1, 1, date(2025, 8, 14)).status == CellStatus.MISSING


def test_cell_invariant_holds_everywhere():
    entries = InMemoryTimeEntries([
        make_entry(1, member_id=1, work_date=date(2025, 8, 13), status=TimeEntryStatus.APPROVED),
        make_entry(2, member_id=2, work_date=date(2025, 8, 16), status=TimeEntryStatus.DRAFT),
    ])
    attendance = WeeklyAttendanceProjector(TimeEntryAttendanceSource(entries)).project([ALPHA, EMPTY], WINDOW)

    for _, _, _, cell in attendance.iter_cells():
        assert (not cell.has_entry) == (cell.status == CellStatus.MISSING)
        assert (cell.hours is not None) == cell.has_entry


def test_crew_without_members_gives_no_rows_and_no_error():
    source = StaticSource({})
    attendance = WeeklyAttendanceProjector(source).project([EMPTY], WINDOW)

    assert attendance.crews[0].members == ()
    assert attendance.cell_count() == 0
    assert source.calls == []


def test_member_ids_are_fetched_once_in_a_single_call():
    shared = GridCrew(id=2, crew_name="Shared", utility_company="Duke Energy", members=(GridMember(1, "Mike Johnson", "Foreman"),))
    source = StaticSource({})
    WeeklyAttendanceProjector(source).project([ALPHA, shared], WINDOW)

    assert source.calls == [([1, 2, 3], WINDOW)]


def test_source_failure_propagates_instead_of_defaulting_to_missing():
    projector = WeeklyAttendanceProjector(TimeEntryAttendanceSource(FailingTimeEntries()))
    with pytest.raises(DataSourceError):
        projector.project([ALPHA], WINDOW)


def test_cells_cannot_be_mutated():
    attendance = WeeklyAttendanceProjector(StaticSource({})).project([ALPHA], WINDOW)
    with pytest.raises(TypeError):
        attendance.crews[0].members[0].cells[date(2025, 8, 13)] = AttendanceCell.entry(CellStatus.APPROVED, 8)


def test_contradictory_cell_is_rejected():
    with pytest.raises(ValueError):
        AttendanceCell(has_entry=False, status=CellStatus.APPROVED)
    with pytest.raises(ValueError):
        AttendanceCell(has_entry=True, status=CellStatus.SUBMITTED)
    with pytest.raises(ValueError):
        AttendanceCell(has_entry=False, status=CellStatus.MISSING, hours=4.0)
