from __future__ import annotations

import json

import pytest

from src.crew_timesheet.crew_timesheet.core.constants import SESSION_PROFILE_KEY
from src.crew_timesheet.crew_timesheet.core.enums import Role
from src.crew_timesheet.crew_timesheet.users.session_cache import (
    SessionUser,
    clear_profile,
    load_profile,
    save_profile,
)


def test_profile_is_stored_under_fixed_key_in_camel_case(fixed_now):
    store = {}
    user = SessionUser(1, "admin", "admin@uspcontractor.com", "John Administrator", Role.SUPER_ADMIN, last_login=fixed_now)
    save_profile(store, user)

    cached = json.loads(store[SESSION_PROFILE_KEY])
    assert SESSION_PROFILE_KEY == "uspAdmin_user"
    assert cached["fullName"] == "John Administrator"
    assert cached["role"] == "SuperAdmin"
    assert load_profile(store) == user


def test_missing_profile_is_none():
    assert load_profile({}) is None


def test_corrupt_profile_is_dropped_and_logged(caplog):
    store = {SESSION_PROFILE_KEY: "{not json"}
    assert load_profile(store) is None
    assert SESSION_PROFILE_KEY not in store
    assert "unreadable cached session profile" in caplog.text


def test_profile_with_unknown_role_is_dropped():
    store = {SESSION_PROFILE_KEY: json.dumps({"id": 1, "username": "x", "fullName": "X", "role": "Owner"})}
    assert load_profile(store) is None


@pytest.mark.parametrize("raw", ["[1, 2]", "null", "42", "\"admin\""])
def test_profile_that_is_not_an_object_is_dropped(raw, caplog):
    store = {SESSION_PROFILE_KEY: raw}
    assert load_profile(store) is None
    assert SESSION_PROFILE_KEY not in store
    assert "unreadable cached session profile" in caplog.text


def test_clear_profile():
    store = {SESSION_PROFILE_KEY: "{}", "other": 1}
    clear_profile(store)
    assert store == {"other": 1}
