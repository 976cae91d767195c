from __future__ import annotations

import logging
from typing import Optional

from ..contracts.service import ContractService
from ..core.exceptions import DomainError
from ..crews.service import CrewService
from ..incidents.service import ExceptionService
from ..timesheets.service import TimeEntryService
from ..users.service import UserService
from .app_state import AppState, LoadData, SetLoading, reduce_app
from .store import Store

logger = logging.getLogger(__name__)


def new_app_store() -> Store:
    return Store(reduce_app, AppState())


def load_app_state(
    store: Store,
    *,
    contracts: ContractService,
    crews: CrewService,
    time_entries: TimeEntryService,
    exceptions: ExceptionService,
    users: UserService,
    selected_contract_id: Optional[int] = None,
) -> AppState:
    """Fill ``store`` from the backend in one pass.

    A failed fetch leaves the collections empty and only clears the loading
    flag; there is no partial load.
    """
    try:
        contract_list = list(contracts.list_contracts())
        changes = dict(
            utility_contracts=contract_list,
            crews=list(crews.list_crews()),
            time_entries=list(time_entries.list_entries()),
            exceptions=list(exceptions.list_exceptions()),
            users=list(users.list_users()),
        )
    except DomainError:
        logger.exception("error loading app data")
        return store.dispatch(SetLoading(False))

    selected = next((c for c in contract_list if c.id == selected_contract_id), None)
    if selected is None and contract_list:
        selected = contract_list[0]
    return store.dispatch(LoadData({**changes, "selected_contract": selected, "loading": False}))
