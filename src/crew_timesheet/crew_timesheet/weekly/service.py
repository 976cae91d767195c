from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Collection, Optional, Sequence

from ..contracts.repository import ContractRepository
from ..core.constants import DEFAULT_WEEK_ANCHOR
from ..core.enums import ViewMode
from ..core.exceptions import ValidationError
from ..crews.model import Crew
from ..crews.repository import CrewRepository
from ..timesheets.model import TimeEntry
from ..timesheets.repository import TimeEntryRepository
from .filters import GridSummary, available_utilities, display_dates, filter_crew_weeks, summarize
from .model import AttendanceCell, CrewWeek, GridCrew, GridMember, MemberWeek, WeeklyAttendance
from .projector import WeeklyAttendanceProjector
from .window import WeekWindow

UNASSIGNED_UTILITY = "Unassigned"


@dataclass(frozen=True)
class WeeklyGridView:
    window: WeekWindow
    attendance: WeeklyAttendance
    crews: Sequence[CrewWeek]
    display_dates: Sequence[date]
    available_utilities: Sequence[str]
    summary: GridSummary

    def to_view(self) -> dict:
        return {
            "weekStart": self.window.start.strftime("%Y-%m-%d"),
            "weekEnd": self.window.end.strftime("%Y-%m-%d"),
            "weekLabel": self.window.format_range(),
            "previousWeek": self.window.previous().start.strftime("%Y-%m-%d"),
            "nextWeek": self.window.next().start.strftime("%Y-%m-%d"),
            "dates": [d.strftime("%Y-%m-%d") for d in self.display_dates],
            "availableUtilities": list(self.available_utilities),
            "summary": {
                "totalCrews": self.summary.total_crews,
                "pending": self.summary.pending,
                "missing": self.summary.missing,
            },
            "crews": [cw.to_view() for cw in self.crews],
        }


@dataclass(frozen=True)
class CellDetail:
    crew: GridCrew
    member: GridMember
    date: date
    cell: AttendanceCell
    entries: Sequence[TimeEntry]


class TimesheetGridService:
    """Use case: the weekly timesheet grid for the selected contract."""

    def __init__(
        self,
        crews: CrewRepository,
        contracts: ContractRepository,
        entries: TimeEntryRepository,
        projector: WeeklyAttendanceProjector,
        *,
        anchor: int = DEFAULT_WEEK_ANCHOR,
    ):
        self._crews = crews
        self._contracts = contracts
        self._entries = entries
        self._projector = projector
        self._anchor = int(anchor)

    def window_for(self, d: Optional[date] = None) -> WeekWindow:
        return WeekWindow.current(d, self._anchor)

    def grid_crews(self, contract_id: Optional[int] = None) -> list[GridCrew]:
        crews: Sequence[Crew]
        if contract_id is None:
            crews = self._crews.list_all()
        else:
            crews = self._crews.list_by_contract(int(contract_id))
        utility_by_contract = {c.id: c.utility_name for c in self._contracts.list_all()}
        return [
            GridCrew(
                id=crew.id,
                crew_name=crew.crew_name,
                utility_company=utility_by_contract.get(crew.utility_contract_id, UNASSIGNED_UTILITY),
                members=tuple(GridMember(id=m.id, name=m.name, role=m.role) for m in crew.members),
            )
            for crew in crews
        ]

    def build_week(
        self,
        *,
        week_of: Optional[date] = None,
        contract_id: Optional[int] = None,
        search: str = "",
        utilities: Collection[str] = (),
        view_mode: ViewMode = ViewMode.ALL,
        show_weekends: bool = True,
    ) -> WeeklyGridView:
        window = self.window_for(week_of)
        attendance = self._projector.project(self.grid_crews(contract_id), window)
        visible = filter_crew_weeks(attendance.crews, search=search, utilities=utilities, view_mode=view_mode)
        return WeeklyGridView(
            window=window,
            attendance=attendance,
            crews=visible,
            display_dates=display_dates(window, show_weekends=show_weekends),
            available_utilities=available_utilities(attendance.crews),
            summary=summarize(visible),
        )

    def cell_detail(self, *, crew_id: int, member_id: int, work_date: date) -> CellDetail:
        crew = next((c for c in self.grid_crews() if c.id == int(crew_id)), None)
        if not crew:
            raise ValidationError("Crew not found")
        member = next((m for m in crew.members if m.id == int(member_id)), None)
        if not member:
            raise ValidationError("Member does not belong to this crew")

        window = self.window_for(work_date)
        single = GridCrew(id=crew.id, crew_name=crew.crew_name, utility_company=crew.utility_company, members=(member,))
        attendance = self._projector.project([single], window)
        entries = self._entries.list_for_members_between(
            member_ids=[member.id], start_date=work_date, end_date=work_date
        )
        return CellDetail(
            crew=crew,
            member=member,
            date=work_date,
            cell=attendance.cell(crew.id, member.id, work_date),
            entries=list(entries),
        )


def member_rows(view: WeeklyGridView) -> list[tuple[CrewWeek, MemberWeek]]:
    return [(cw, mw) for cw in view.crews for mw in cw.members]
