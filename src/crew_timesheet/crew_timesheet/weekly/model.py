from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from ..core.enums import CellStatus
from .window import WeekWindow


@dataclass(frozen=True)
class AttendanceCell:
    """One (member, date) cell.

    ``has_entry`` is False exactly when the status is ``missing``, and
    ``hours`` is set exactly when there is an entry.
    """

    has_entry: bool
    status: CellStatus
    hours: Optional[float] = None

    def __post_init__(self):
        if self.has_entry == (self.status == CellStatus.MISSING):
            raise ValueError(f"has_entry={self.has_entry} contradicts status={self.status.value}")
        if self.has_entry == (self.hours is None):
            raise ValueError("hours must be set exactly when the cell has an entry")

    @classmethod
    def missing(cls) -> "AttendanceCell":
        return cls(has_entry=False, status=CellStatus.MISSING)

    @classmethod
    def entry(cls, status: CellStatus, hours: float) -> "AttendanceCell":
        return cls(has_entry=True, status=status, hours=float(hours))

    def to_view(self) -> dict:
        view = {"hasEntry": self.has_entry, "status": self.status.value}
        if self.hours is not None:
            view["hours"] = self.hours
        return view


@dataclass(frozen=True)
class GridMember:
    id: int
    name: str
    role: str


@dataclass(frozen=True)
class GridCrew:
    """Crew as the grid sees it: members plus the owning utility label."""

    id: int
    crew_name: str
    utility_company: str
    members: Tuple[GridMember, ...] = ()


@dataclass(frozen=True)
class MemberWeek:
    member: GridMember
    cells: Mapping[date, AttendanceCell]

    def statuses(self) -> Iterator[CellStatus]:
        return (cell.status for cell in self.cells.values())

    def to_view(self, crew_id: int) -> dict:
        return {
            "id": f"{crew_id}_{self.member.id}",
            "memberId": self.member.id,
            "memberName": self.member.name,
            "role": self.member.role,
            "weeklyData": {d.strftime("%Y-%m-%d"): cell.to_view() for d, cell in self.cells.items()},
        }


@dataclass(frozen=True)
class CrewWeek:
    crew: GridCrew
    members: Tuple[MemberWeek, ...]

    def has_status(self, status: CellStatus) -> bool:
        return any(s == status for m in self.members for s in m.statuses())

    def count_status(self, status: CellStatus) -> int:
        return sum(1 for m in self.members for s in m.statuses() if s == status)

    def to_view(self) -> dict:
        return {
            "id": self.crew.id,
            "crewName": self.crew.crew_name,
            "utilityCompany": self.crew.utility_company,
            "members": [m.to_view(self.crew.id) for m in self.members],
        }


@dataclass(frozen=True)
class WeeklyAttendance:
    """Immutable projection of crews x members x window dates."""

    window: WeekWindow
    crews: Tuple[CrewWeek, ...]

    def iter_cells(self) -> Iterator[Tuple[GridCrew, GridMember, date, AttendanceCell]]:
        for crew_week in self.crews:
            for member_week in crew_week.members:
                for d, cell in member_week.cells.items():
                    yield crew_week.crew, member_week.member, d, cell

    def cell_count(self) -> int:
        return sum(len(m.cells) for c in self.crews for m in c.members)

    def cell(self, crew_id: int, member_id: int, d: date) -> Optional[AttendanceCell]:
        for crew_week in self.crews:
            if crew_week.crew.id != crew_id:
                continue
            for member_week in crew_week.members:
                if member_week.member.id == member_id:
                    return member_week.cells.get(d)
        return None


def frozen_cells(cells: Mapping[date, AttendanceCell]) -> Mapping[date, AttendanceCell]:
    return MappingProxyType(dict(cells))
