"""Stateless filters and counts over a projected week."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Collection, Iterable, Sequence

from ..core.enums import CellStatus, ViewMode
from .model import CrewWeek
from .window import WeekWindow


@dataclass(frozen=True)
class GridSummary:
    total_crews: int
    pending: int
    missing: int


def matches_search(crew_week: CrewWeek, term: str) -> bool:
    term = (term or "").strip().lower()
    if not term:
        return True
    crew = crew_week.crew
    return term in crew.crew_name.lower() or term in crew.utility_company.lower()


def matches_utilities(crew_week: CrewWeek, utilities: Collection[str]) -> bool:
    return not utilities or crew_week.crew.utility_company in utilities


def matches_view_mode(crew_week: CrewWeek, mode: ViewMode) -> bool:
    if mode == ViewMode.PENDING:
        return crew_week.has_status(CellStatus.PENDING)
    if mode == ViewMode.MISSING:
        return crew_week.has_status(CellStatus.MISSING)
    return True


def filter_crew_weeks(
    crew_weeks: Iterable[CrewWeek],
    *,
    search: str = "",
    utilities: Collection[str] = (),
    view_mode: ViewMode = ViewMode.ALL,
) -> list[CrewWeek]:
    return [
        cw
        for cw in crew_weeks
        if matches_search(cw, search) and matches_utilities(cw, utilities) and matches_view_mode(cw, view_mode)
    ]


def available_utilities(crew_weeks: Iterable[CrewWeek]) -> list[str]:
    out: list[str] = []
    for cw in crew_weeks:
        if cw.crew.utility_company not in out:
            out.append(cw.crew.utility_company)
    return out


def summarize(crew_weeks: Sequence[CrewWeek]) -> GridSummary:
    return GridSummary(
        total_crews=len(crew_weeks),
        pending=sum(cw.count_status(CellStatus.PENDING) for cw in crew_weeks),
        missing=sum(cw.count_status(CellStatus.MISSING) for cw in crew_weeks),
    )


def display_dates(window: WeekWindow, *, show_weekends: bool = True) -> list[date]:
    """Grid columns; Saturday and Sunday are dropped when weekends are hidden."""
    if show_weekends:
        return list(window.dates())
    return [d for d in window.dates() if d.weekday() < 5]
