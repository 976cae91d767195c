from __future__ import annotations

from datetime import datetime

import pytest

from src.crew_timesheet.crew_timesheet.container import assemble
from src.crew_timesheet.crew_timesheet.main import create_app

from tests.fakes import (
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


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 8, 15, 12, 0, 0)


@pytest.fixture
def repos(fixed_now):
    return dict(
        users_repo=InMemoryUsers(sample_users()),
        contracts_repo=InMemoryContracts(sample_contracts()),
        crews_repo=InMemoryCrews(sample_crews()),
        time_entries_repo=InMemoryTimeEntries(sample_entries()),
        exceptions_repo=InMemoryExceptions(sample_exceptions(), now=fixed_now),
    )


@pytest.fixture
def container(repos, fixed_now):
    return assemble(**repos, clock=lambda: fixed_now)


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str = "field_manager", password: str = "manager123"):
        resp = client.post("/api/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
