from __future__ import annotations

from dataclasses import replace

from src.crew_timesheet.crew_timesheet.contracts.service import ContractService
from src.crew_timesheet.crew_timesheet.crews.service import CrewService
from src.crew_timesheet.crew_timesheet.incidents.service import ExceptionService
from src.crew_timesheet.crew_timesheet.state.app_state import (
    AddCrew,
    AddException,
    AddTimeEntry,
    AddUser,
    AppState,
    DeleteCrew,
    DeleteUser,
    LoadData,
    SetLoading,
    SetSelectedContract,
    UpdateCrew,
    UpdateException,
    UpdateTimeEntry,
    UpdateUser,
    contract_crews,
    crews_by_contract,
    reduce_app,
    time_entries_by_crew,
)
from src.crew_timesheet.crew_timesheet.state.auth_state import (
    AuthState,
    LoadUser,
    LoginFailure,
    LoginStart,
    LoginSuccess,
    Logout,
    UpdateProfile,
    reduce_auth,
)
from src.crew_timesheet.crew_timesheet.state.loader import load_app_state, new_app_store
from src.crew_timesheet.crew_timesheet.timesheets.service import TimeEntryService
from src.crew_timesheet.crew_timesheet.users.service import UserService
from src.crew_timesheet.crew_timesheet.users.session_cache import SessionUser
from src.crew_timesheet.crew_timesheet.core.enums import ExceptionStatus, Role, TimeEntryStatus

from tests.fakes import (
    FailingTimeEntries,
    InMemoryContracts,
    InMemoryCrews,
    InMemoryExceptions,
    InMemoryTimeEntries,
    InMemoryUsers,
    sample_contracts,
    sample_crews,
    sample_entries,
    sample_exceptions,
    sample_users,
)


def test_reducer_returns_new_state_and_leaves_input_alone():
    crews = sample_crews()
    state = AppState()
    loaded = reduce_app(state, LoadData({"crews": crews, "loading": False}))

    assert state.crews == ()
    assert state.loading is True
    assert loaded.crews == tuple(crews)
    assert loaded.loading is False


def test_crew_actions():
    state = reduce_app(AppState(), LoadData({"crews": sample_crews()[:2]}))
    charlie = sample_crews()[2]

    state = reduce_app(state, AddCrew(charlie))
    assert [c.id for c in state.crews] == [1, 2, 3]

    state = reduce_app(state, UpdateCrew(replace(charlie, crew_name="Renamed")))
    assert state.crews[2].crew_name == "Renamed"

    state = reduce_app(state, DeleteCrew(1))
    assert [c.id for c in state.crews] == [2, 3]


def test_selected_contract_scopes_crews():
    contracts = sample_contracts()
    state = reduce_app(AppState(), LoadData({"crews": sample_crews()}))
    assert len(contract_crews(state)) == 3

    state = reduce_app(state, SetSelectedContract(contracts[0]))
    assert [c.id for c in contract_crews(state)] == [1, 3]


def test_time_entries_by_crew():
    state = reduce_app(AppState(), LoadData({"time_entries": sample_entries()}))
    assert [e.id for e in time_entries_by_crew(state, 2)] == [4]


def test_loading_flag():
    state = reduce_app(AppState(), SetLoading(False))
    assert state.loading is False
    assert reduce_app(state, SetLoading(True)).loading is True


def test_unknown_action_is_ignored():
    state = AppState()
    assert reduce_app(state, object()) is state


def test_auth_reducer_flow():
    user = SessionUser(id=1, username="admin", email="a@x.com", full_name="John", role=Role.SUPER_ADMIN)
    state = reduce_auth(AuthState(), LoginStart())
    assert state.loading is True

    state = reduce_auth(state, LoginSuccess(user))
    assert state.is_authenticated and state.user == user and not state.loading

    state = reduce_auth(state, Logout())
    assert state == AuthState(user=None, is_authenticated=False, loading=False)

    assert reduce_auth(AuthState(), LoginFailure()).is_authenticated is False
    assert reduce_auth(AuthState(), LoadUser(None)).loading is False


def _services(entries):
    crews = InMemoryCrews(sample_crews())
    return dict(
        contracts=ContractService(InMemoryContracts(sample_contracts())),
        crews=CrewService(crews),
        time_entries=TimeEntryService(entries, crews),
        exceptions=ExceptionService(InMemoryExceptions(), entries),
        users=UserService(InMemoryUsers()),
    )


def test_loader_fills_store_and_selects_first_contract():
    store = new_app_store()
    state = load_app_state(store, **_services(InMemoryTimeEntries(sample_entries())))

    assert state.loading is False
    assert len(state.crews) == 3
    assert len(state.time_entries) == 4
    # contracts come sorted by utility name
    assert state.selected_contract.utility_name == "Duke Energy"


def test_loader_honours_stored_selection():
    state = load_app_state(new_app_store(), **_services(InMemoryTimeEntries()), selected_contract_id=1)
    assert state.selected_contract.id == 1


def test_loader_failure_leaves_empty_not_loading_state():
    state = load_app_state(new_app_store(), **_services(FailingTimeEntries()))

    assert state.loading is False
    assert state.crews == ()
    assert state.time_entries == ()


def test_add_actions_replace_rows_already_loaded():
    crews = sample_crews()
    state = reduce_app(AppState(), LoadData({"crews": crews}))

    state = reduce_app(state, AddCrew(replace(crews[0], crew_name="Renamed")))
    assert [c.id for c in state.crews] == [1, 2, 3]
    assert state.crews[0].crew_name == "Renamed"

    users = sample_users()
    state = reduce_app(state, LoadData({"users": users}))
    assert len(reduce_app(state, AddUser(users[0])).users) == len(users)


def test_crews_by_contract():
    state = reduce_app(AppState(), LoadData({"crews": sample_crews()}))
    assert [c.id for c in crews_by_contract(state, 2)] == [2]
    assert crews_by_contract(state, 99) == ()


def test_user_actions():
    users = sample_users()
    state = reduce_app(AppState(), LoadData({"users": users[:2]}))

    state = reduce_app(state, AddUser(users[2]))
    assert [u.id for u in state.users] == [1, 2, 3]

    state = reduce_app(state, UpdateUser(replace(users[2], active=False)))
    assert state.users[2].active is False

    state = reduce_app(state, DeleteUser(1))
    assert [u.id for u in state.users] == [2, 3]


def test_time_entry_and_exception_actions():
    entries = sample_entries()
    exceptions = sample_exceptions()
    state = reduce_app(AppState(), LoadData({"time_entries": entries[:3], "exceptions": exceptions[:1]}))

    state = reduce_app(state, AddTimeEntry(entries[3]))
    state = reduce_app(state, UpdateTimeEntry(replace(entries[1], status=TimeEntryStatus.APPROVED)))
    assert [e.id for e in state.time_entries] == [1, 2, 3, 4]
    assert state.time_entries[1].status is TimeEntryStatus.APPROVED

    state = reduce_app(state, AddException(exceptions[1]))
    state = reduce_app(state, UpdateException(replace(exceptions[0], status=ExceptionStatus.UNDER_REVIEW)))
    assert [x.status for x in state.exceptions] == [ExceptionStatus.UNDER_REVIEW, ExceptionStatus.ACCEPTED]


def test_profile_update_keeps_authentication():
    user = SessionUser(id=1, username="admin", email="a@x.com", full_name="John", role=Role.SUPER_ADMIN)
    state = reduce_auth(AuthState(), LoginSuccess(user))

    state = reduce_auth(state, UpdateProfile(replace(user, full_name="John A.")))
    assert state.is_authenticated is True
    assert state.user.full_name == "John A."
