"""Dashboard view state as an explicit value plus pure reducers.

``reduce_app`` never mutates its input; every action yields a new
``AppState``. Stores are created per request, so no view state outlives the
request that built it.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple, Union

from ..contracts.model import UtilityContract
from ..crews.model import Crew
from ..incidents.model import TimeException
from ..timesheets.model import TimeEntry
from ..users.model import User


@dataclass(frozen=True)
class AppState:
    selected_contract: Optional[UtilityContract] = None
    utility_contracts: Tuple[UtilityContract, ...] = ()
    crews: Tuple[Crew, ...] = ()
    time_entries: Tuple[TimeEntry, ...] = ()
    exceptions: Tuple[TimeException, ...] = ()
    users: Tuple[User, ...] = ()
    loading: bool = True


@dataclass(frozen=True)
class SetSelectedContract:
    contract: Optional[UtilityContract]


@dataclass(frozen=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True)
class LoadData:
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AddCrew:
    crew: Crew


@dataclass(frozen=True)
class UpdateCrew:
    crew: Crew


@dataclass(frozen=True)
class DeleteCrew:
    crew_id: int


@dataclass(frozen=True)
class AddUser:
    user: User


@dataclass(frozen=True)
class UpdateUser:
    user: User


@dataclass(frozen=True)
class DeleteUser:
    user_id: int


@dataclass(frozen=True)
class AddTimeEntry:
    entry: TimeEntry


@dataclass(frozen=True)
class UpdateTimeEntry:
    entry: TimeEntry


@dataclass(frozen=True)
class AddException:
    exception: TimeException


@dataclass(frozen=True)
class UpdateException:
    exception: TimeException


AppAction = Union[
    SetSelectedContract, SetLoading, LoadData,
    AddCrew, UpdateCrew, DeleteCrew,
    AddUser, UpdateUser, DeleteUser,
    AddTimeEntry, UpdateTimeEntry,
    AddException, UpdateException,
]


def _replace_by_id(items: tuple, item) -> tuple:
    return tuple(item if existing.id == item.id else existing for existing in items)


def _upsert(items: tuple, item) -> tuple:
    """Replace the row with the same id, or append it; a store loaded after the write already holds it."""
    if any(existing.id == item.id for existing in items):
        return _replace_by_id(items, item)
    return (*items, item)


def _drop_id(items: tuple, item_id: int) -> tuple:
    return tuple(existing for existing in items if existing.id != item_id)


def reduce_app(state: AppState, action: AppAction) -> AppState:
    if isinstance(action, SetSelectedContract):
        return replace(state, selected_contract=action.contract)
    if isinstance(action, SetLoading):
        return replace(state, loading=action.loading)
    if isinstance(action, LoadData):
        changes = {k: tuple(v) if isinstance(v, list) else v for k, v in action.changes.items()}
        return replace(state, **changes)
    if isinstance(action, AddCrew):
        return replace(state, crews=_upsert(state.crews, action.crew))
    if isinstance(action, UpdateCrew):
        return replace(state, crews=_replace_by_id(state.crews, action.crew))
    if isinstance(action, DeleteCrew):
        return replace(state, crews=_drop_id(state.crews, action.crew_id))
    if isinstance(action, AddUser):
        return replace(state, users=_upsert(state.users, action.user))
    if isinstance(action, UpdateUser):
        return replace(state, users=_replace_by_id(state.users, action.user))
    if isinstance(action, DeleteUser):
        return replace(state, users=_drop_id(state.users, action.user_id))
    if isinstance(action, AddTimeEntry):
        return replace(state, time_entries=_upsert(state.time_entries, action.entry))
    if isinstance(action, UpdateTimeEntry):
        return replace(state, time_entries=_replace_by_id(state.time_entries, action.entry))
    if isinstance(action, AddException):
        return replace(state, exceptions=_upsert(state.exceptions, action.exception))
    if isinstance(action, UpdateException):
        return replace(state, exceptions=_replace_by_id(state.exceptions, action.exception))
    return state


def crews_by_contract(state: AppState, contract_id: int) -> tuple:
    return tuple(c for c in state.crews if c.utility_contract_id == contract_id)


def contract_crews(state: AppState) -> tuple:
    """Crews of the selected contract, or every crew when none is selected."""
    if state.selected_contract is None:
        return state.crews
    return crews_by_contract(state, state.selected_contract.id)


def time_entries_by_crew(state: AppState, crew_id: int) -> tuple:
    return tuple(e for e in state.time_entries if e.crew_id == crew_id)
