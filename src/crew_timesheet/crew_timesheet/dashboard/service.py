from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, time_ago
from ..core.constants import (
    CREW_STATUS_ACTIVE_LIMIT,
    CREW_STATUS_INACTIVE_LIMIT,
    DASHBOARD_WINDOW_DAYS,
    EXCEPTION_ALERT_LIMIT,
    RECENT_ACTIVITY_LIMIT,
    UNKNOWN_CREW_NAME,
)
from ..crews.model import Crew
from ..incidents.model import TimeException
from ..state.app_state import AppState, contract_crews
from ..timesheets.model import TimeEntry


@dataclass(frozen=True)
class DashboardStats:
    total_hours: float
    regular_hours: float
    overtime_hours: float
    active_crews: int
    inactive_crews: int
    pending_exceptions: int
    hours_this_week: float
    crews_on_site: int


@dataclass(frozen=True)
class DayHours:
    date: date
    label: str
    regular_hours: float
    overtime_hours: float
    total: float


@dataclass(frozen=True)
class HoursChart:
    days: Sequence[DayHours]
    max_hours: float


@dataclass(frozen=True)
class ActivityItem:
    entry_id: int
    crew_name: str
    status: str
    total_hours: float
    overtime_hours: float
    when: datetime


@dataclass(frozen=True)
class CrewStatusPanel:
    active: Sequence[Crew]
    more_active: int
    inactive: Sequence[Crew]


@dataclass(frozen=True)
class ExceptionAlert:
    exception: TimeException
    age: str


@dataclass(frozen=True)
class Dashboard:
    contract_name: Optional[str]
    storm_event: Optional[str]
    stats: DashboardStats
    hours_chart: HoursChart
    exception_alerts: Sequence[ExceptionAlert]
    pending_exception_count: int
    crew_status: CrewStatusPanel
    recent_activity: Sequence[ActivityItem]


def _hours(entries: Sequence[TimeEntry]) -> tuple[float, float]:
    regular = sum(e.hours_regular for e in entries)
    overtime = sum(e.hours_overtime for e in entries)
    return regular, overtime


class DashboardService:
    """Summary panels computed from a loaded ``AppState``."""

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._clock = clock

    def build(self, state: AppState) -> Dashboard:
        now = self._clock()
        crews = contract_crews(state)
        crew_ids = {c.id for c in crews}
        entries = [e for e in state.time_entries if e.crew_id in crew_ids]
        pending = [x for x in state.exceptions if x.is_pending]
        contract = state.selected_contract

        return Dashboard(
            contract_name=contract.utility_name if contract else None,
            storm_event=contract.storm_event if contract else None,
            stats=self.stats(crews, entries, state.exceptions, now=now),
            hours_chart=self.hours_chart(entries, today=now.date()),
            exception_alerts=[
                ExceptionAlert(exception=x, age=time_ago(x.created_at, now=now))
                for x in pending[:EXCEPTION_ALERT_LIMIT]
            ],
            pending_exception_count=len(pending),
            crew_status=self.crew_status(crews),
            recent_activity=self.recent_activity(entries, crews),
        )

    @staticmethod
    def stats(
        crews: Sequence[Crew],
        entries: Sequence[TimeEntry],
        exceptions: Sequence[TimeException],
        *,
        now: datetime,
    ) -> DashboardStats:
        regular, overtime = _hours(entries)
        active = sum(1 for c in crews if c.active)
        week_start = (now - timedelta(days=DASHBOARD_WINDOW_DAYS)).date()
        this_week = [e for e in entries if e.date >= week_start]
        return DashboardStats(
            total_hours=regular + overtime,
            regular_hours=regular,
            overtime_hours=overtime,
            active_crews=active,
            inactive_crews=len(crews) - active,
            pending_exceptions=sum(1 for x in exceptions if x.is_pending),
            hours_this_week=sum(e.total_hours for e in this_week),
            crews_on_site=len({e.crew_id for e in entries if e.date == now.date()}),
        )

    @staticmethod
    def hours_chart(entries: Sequence[TimeEntry], *, today: date) -> HoursChart:
        days = []
        for offset in range(DASHBOARD_WINDOW_DAYS - 1, -1, -1):
            d = today - timedelta(days=offset)
            regular, overtime = _hours([e for e in entries if e.date == d])
            days.append(
                DayHours(
                    date=d,
                    label=f"{d:%a}, {d:%b} {d.day}",
                    regular_hours=regular,
                    overtime_hours=overtime,
                    total=regular + overtime,
                )
            )
        return HoursChart(days=days, max_hours=max([d.total for d in days] + [1.0]))

    @staticmethod
    def recent_activity(entries: Sequence[TimeEntry], crews: Sequence[Crew]) -> list[ActivityItem]:
        names = {c.id: c.crew_name for c in crews}
        recent = sorted(entries, key=lambda e: e.activity_time, reverse=True)[:RECENT_ACTIVITY_LIMIT]
        return [
            ActivityItem(
                entry_id=e.id,
                crew_name=names.get(e.crew_id, UNKNOWN_CREW_NAME),
                status=e.status.value,
                total_hours=e.total_hours,
                overtime_hours=e.hours_overtime,
                when=e.activity_time,
            )
            for e in recent
        ]

    @staticmethod
    def crew_status(crews: Sequence[Crew]) -> CrewStatusPanel:
        active = [c for c in crews if c.active]
        inactive = [c for c in crews if not c.active]
        return CrewStatusPanel(
            active=active[:CREW_STATUS_ACTIVE_LIMIT],
            more_active=max(len(active) - CREW_STATUS_ACTIVE_LIMIT, 0),
            inactive=inactive[:CREW_STATUS_INACTIVE_LIMIT],
        )
