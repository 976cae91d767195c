from __future__ import annotations

from src.crew_timesheet.crew_timesheet.common.web import app_store, commit
from src.crew_timesheet.crew_timesheet.core.enums import Role, TimeEntryStatus
from src.crew_timesheet.crew_timesheet.state.app_state import AddCrew, DeleteCrew, UpdateTimeEntry


def test_store_is_built_once_per_request(app, container):
    with app.test_request_context():
        assert app_store(container) is app_store(container)
        assert len(app_store(container).state.crews) == 3

    with app.test_request_context():
        assert app_store(container).state.loading is False


def test_commit_after_write_keeps_one_copy(app, container):
    with app.test_request_context():
        crew = container.crew_service.create_crew(
            current_role=Role.ADMIN, crew_name="Line Crew Delta", utility_contract_id=1
        )
        # first use of the store loads it, so it already holds the new crew
        state = commit(container, AddCrew(crew))
        assert [c.id for c in state.crews].count(crew.id) == 1


def test_commit_into_loaded_store(app, container):
    with app.test_request_context():
        app_store(container)
        entry = container.time_entry_service.approve_entry(current_role=Role.ADMIN, entry_id=2)
        state = commit(container, UpdateTimeEntry(entry))
        assert next(e for e in state.time_entries if e.id == 2).status is TimeEntryStatus.APPROVED

        container.crew_service.delete_crew(current_role=Role.ADMIN, crew_id=3)
        state = commit(container, DeleteCrew(3))
        assert [c.id for c in state.crews] == [1, 2]
