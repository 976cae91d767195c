from __future__ import annotations

from datetime import date

from src.crew_timesheet.crew_timesheet.core.enums import CellStatus, ViewMode
from src.crew_timesheet.crew_timesheet.weekly.filters import (
    available_utilities,
    display_dates,
    filter_crew_weeks,
    summarize,
)
from src.crew_timesheet.crew_timesheet.weekly.model import AttendanceCell, GridCrew, GridMember
from src.crew_timesheet.crew_timesheet.weekly.projector import WeeklyAttendanceProjector
from src.crew_timesheet.crew_timesheet.weekly.window import WeekWindow

WINDOW = WeekWindow(date(2025, 8, 13))


class FullWeekSource:
    """Every member has a cell every day, with the status given per member."""

    def __init__(self, status_by_member):
        self.status_by_member = status_by_member

    def fetch(self, member_ids, window):
        return {
            (m, d): AttendanceCell.entry(self.status_by_member[m], 10)
            for m in member_ids
            if m in self.status_by_member
            for d in window.dates()
        }


def _weeks():
    crews = [
        GridCrew(1, "Line Crew Alpha", "Florida Power & Light", (GridMember(1, "A", "Foreman"),)),
        GridCrew(2, "Tree Crew Bravo", "Duke Energy", (GridMember(2, "B", "Climber"),)),
        GridCrew(3, "Line Crew Delta", "Duke Energy", (GridMember(3, "C", "Lineman"),)),
    ]
    source = FullWeekSource({1: CellStatus.APPROVED, 2: CellStatus.PENDING})
    return WeeklyAttendanceProjector(source).project(crews, WINDOW).crews


def _names(crew_weeks):
    return [cw.crew.crew_name for cw in crew_weeks]


def test_search_matches_crew_name_case_insensitively():
    assert _names(filter_crew_weeks(_weeks(), search="line crew")) == ["Line Crew Alpha", "Line Crew Delta"]


def test_search_matches_utility_label():
    assert _names(filter_crew_weeks(_weeks(), search="duke")) == ["Tree Crew Bravo", "Line Crew Delta"]


def test_search_without_match_returns_empty_list():
    assert filter_crew_weeks(_weeks(), search="zzz-no-such-crew") == []


def test_utility_filter_keeps_selected_set_and_empty_set_keeps_all():
    assert _names(filter_crew_weeks(_weeks(), utilities={"Florida Power & Light"})) == ["Line Crew Alpha"]
    assert len(filter_crew_weeks(_weeks(), utilities=set())) == 3


def test_view_modes():
    assert _names(filter_crew_weeks(_weeks(), view_mode=ViewMode.PENDING)) == ["Tree Crew Bravo"]
    assert _names(filter_crew_weeks(_weeks(), view_mode=ViewMode.MISSING)) == ["Line Crew Delta"]
    assert len(filter_crew_weeks(_weeks(), view_mode=ViewMode.ALL)) == 3


def test_filters_combine():
    found = filter_crew_weeks(_weeks(), search="crew", utilities={"Duke Energy"}, view_mode=ViewMode.MISSING)
    assert _names(found) == ["Line Crew Delta"]


def test_available_utilities_in_first_seen_order():
    assert available_utilities(_weeks()) == ["Florida Power & Light", "Duke Energy"]


def test_summary_counts_cells():
    summary = summarize(_weeks())
    assert summary.total_crews == 3
    assert summary.pending == 7
    assert summary.missing == 7


def test_hiding_weekends_drops_saturday_and_sunday():
    shown = display_dates(WINDOW, show_weekends=False)
    assert shown == [date(2025, 8, 13), date(2025, 8, 14), date(2025, 8, 15), date(2025, 8, 18), date(2025, 8, 19)]
    assert len(display_dates(WINDOW)) == 7
