from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .contracts.mysql_contract_repository import MySQLContractRepository
from .contracts.repository import ContractRepository
from .contracts.service import ContractService
from .core.constants import DEFAULT_WEEK_ANCHOR
from .crews.mysql_crew_repository import MySQLCrewRepository
from .crews.repository import CrewRepository
from .crews.service import CrewService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .incidents.mysql_exception_repository import MySQLExceptionRepository
from .incidents.repository import ExceptionRepository
from .incidents.service import ExceptionService
from .timesheets.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timesheets.repository import TimeEntryRepository
from .timesheets.service import TimeEntryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .weekly.projector import WeeklyAttendanceProjector
from .weekly.service import TimesheetGridService
from .weekly.sources import AttendanceSource, SyntheticAttendanceSource, TimeEntryAttendanceSource


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    contracts_repo: ContractRepository
    crews_repo: CrewRepository
    time_entries_repo: TimeEntryRepository
    exceptions_repo: ExceptionRepository

    auth_service: AuthService
    user_service: UserService
    contract_service: ContractService
    crew_service: CrewService
    time_entry_service: TimeEntryService
    exception_service: ExceptionService
    grid_service: TimesheetGridService
    dashboard_service: DashboardService


def assemble(
    *,
    users_repo: UserRepository,
    contracts_repo: ContractRepository,
    crews_repo: CrewRepository,
    time_entries_repo: TimeEntryRepository,
    exceptions_repo: ExceptionRepository,
    conn: Optional[DatabaseConnection] = None,
    demo_login: bool = False,
    demo_attendance: bool = False,
    week_anchor: int = DEFAULT_WEEK_ANCHOR,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of the given repositories."""
    source: AttendanceSource
    if demo_attendance:
        source = SyntheticAttendanceSource()
    else:
        source = TimeEntryAttendanceSource(time_entries_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        contracts_repo=contracts_repo,
        crews_repo=crews_repo,
        time_entries_repo=time_entries_repo,
        exceptions_repo=exceptions_repo,
        auth_service=AuthService(users_repo, demo_login=demo_login, clock=clock),
        user_service=UserService(users_repo),
        contract_service=ContractService(contracts_repo),
        crew_service=CrewService(crews_repo),
        time_entry_service=TimeEntryService(time_entries_repo, crews_repo, clock=clock),
        exception_service=ExceptionService(exceptions_repo, time_entries_repo, clock=clock),
        grid_service=TimesheetGridService(
            crews_repo,
            contracts_repo,
            time_entries_repo,
            WeeklyAttendanceProjector(source),
            anchor=week_anchor,
        ),
        dashboard_service=DashboardService(clock=clock),
    )


def build_container(
    *,
    db_config: dict,
    demo_login: bool = False,
    demo_attendance: bool = False,
    week_anchor: int = DEFAULT_WEEK_ANCHOR,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        users_repo=MySQLUserRepository(conn),
        contracts_repo=MySQLContractRepository(conn),
        crews_repo=MySQLCrewRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        exceptions_repo=MySQLExceptionRepository(conn),
        conn=conn,
        demo_login=demo_login,
        demo_attendance=demo_attendance,
        week_anchor=week_anchor,
    )
