from __future__ import annotations

import csv
import io
from datetime import date

import pytest

from src.crew_timesheet.crew_timesheet.core.enums import CellStatus, ViewMode
from src.crew_timesheet.crew_timesheet.core.exceptions import DataSourceError, ValidationError
from src.crew_timesheet.crew_timesheet.weekly.export import week_csv_filename, write_week_csv
from src.crew_timesheet.crew_timesheet.weekly.projector import WeeklyAttendanceProjector
from src.crew_timesheet.crew_timesheet.weekly.service import TimesheetGridService
from src.crew_timesheet.crew_timesheet.weekly.sources import TimeEntryAttendanceSource

from tests.fakes import (
    FailingTimeEntries,
    InMemoryContracts,
    InMemoryCrews,
    InMemoryTimeEntries,
    sample_contracts,
    sample_crews,
    sample_entries,
)


def _service(entries=None):
    entries = entries or InMemoryTimeEntries(sample_entries())
    return TimesheetGridService(
        InMemoryCrews(sample_crews()),
        InMemoryContracts(sample_contracts()),
        entries,
        WeeklyAttendanceProjector(TimeEntryAttendanceSource(entries)),
    )


def test_build_week_resolves_window_and_projects_all_crews():
    view = _service().build_week(week_of=date(2025, 8, 15))

    assert view.window.start == date(2025, 8, 13)
    assert [cw.crew.crew_name for cw in view.crews] == ["Line Crew Alpha", "Standby Crew Charlie", "Tree Crew Bravo"]
    assert view.attendance.cell_count() == (3 + 0 + 1) * 7
    assert view.available_utilities == ["Florida Power & Light", "Duke Energy"]


def test_cells_reflect_time_entries():
    attendance = _service().build_week(week_of=date(2025, 8, 15)).attendance

    approved = attendance.cell(1, 1, date(2025, 8, 13))
    assert approved.status == CellStatus.APPROVED
    assert approved.hours == 16.0
    assert attendance.cell(1, 1, date(2025, 8, 14)).status == CellStatus.PENDING
    assert attendance.cell(1, 3, date(2025, 8, 13)).status == CellStatus.MISSING


def test_contract_scope_and_filters():
    view = _service().build_week(week_of=date(2025, 8, 15), contract_id=1, view_mode=ViewMode.PENDING)
    assert [cw.crew.crew_name for cw in view.crews] == ["Line Crew Alpha"]

    view = _service().build_week(week_of=date(2025, 8, 15), search="nothing matches")
    assert view.crews == []
    assert view.summary.total_crews == 0


def test_view_uses_camel_case_keys():
    payload = _service().build_week(week_of=date(2025, 8, 15), show_weekends=False).to_view()

    assert payload["weekStart"] == "2025-08-13"
    assert payload["weekLabel"] == "Aug 13 - 19, 2025"
    assert payload["nextWeek"] == "2025-08-20"
    assert len(payload["dates"]) == 5
    alpha = payload["crews"][0]
    assert alpha["crewName"] == "Line Crew Alpha"
    assert alpha["utilityCompany"] == "Florida Power & Light"
    first = alpha["members"][0]
    assert first["id"] == "1_1"
    assert first["weeklyData"]["2025-08-13"] == {"hasEntry": True, "status": "approved", "hours": 16.0}
    assert alpha["members"][2]["weeklyData"]["2025-08-13"] == {"hasEntry": False, "status": "missing"}


def test_backend_failure_surfaces():
    with pytest.raises(DataSourceError):
        _service(FailingTimeEntries()).build_week(week_of=date(2025, 8, 15))


def test_cell_detail_returns_cell_and_entries():
    detail = _service().cell_detail(crew_id=1, member_id=1, work_date=date(2025, 8, 13))

    assert detail.cell.status == CellStatus.APPROVED
    assert [e.id for e in detail.entries] == [1]
    assert detail.crew.utility_company == "Florida Power & Light"


def test_cell_detail_rejects_foreign_member():
    with pytest.raises(ValidationError):
        _service().cell_detail(crew_id=1, member_id=4, work_date=date(2025, 8, 13))


def test_csv_export_has_one_row_per_member():
    view = _service().build_week(week_of=date(2025, 8, 15), contract_id=1)
    data = write_week_csv(view)

    assert data.startswith(b"\xef\xbb\xbf")
    rows = list(csv.DictReader(io.StringIO(data.decode("utf-8-sig"))))
    assert [r["member_name"] for r in rows] == ["Mike Johnson", "Carlos Rivera", "Dave Thompson"]
    assert rows[0]["2025-08-13"] == "approved (16h)"
    assert rows[0]["2025-08-15"] == "missing"
    assert rows[0]["total_hours"] == "24"
    assert week_csv_filename(view) == "timesheets_20250813_20250819.csv"
