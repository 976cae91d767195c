from __future__ import annotations

import pytest

from src.crew_timesheet.crew_timesheet.core.enums import Role
from src.crew_timesheet.crew_timesheet.core.exceptions import AuthenticationError
from src.crew_timesheet.crew_timesheet.users.service import AuthService

from tests.fakes import InMemoryUsers, sample_users


def test_backend_login_records_last_login(fixed_now):
    users = InMemoryUsers(sample_users())
    s_user = AuthService(users, clock=lambda: fixed_now).authenticate("field_manager", "manager123")

    assert s_user.role == Role.ADMIN
    assert s_user.demo is False
    assert s_user.last_login == fixed_now
    assert users.logins == [(2, fixed_now)]


@pytest.mark.parametrize(
    "username,password",
    [("field_manager", "wrong"), ("nobody", "manager123"), ("", ""), ("retired", "retired123")],
)
def test_failed_logins_share_one_message(username, password):
    svc = AuthService(InMemoryUsers(sample_users()))
    with pytest.raises(AuthenticationError) as exc:
        svc.authenticate(username, password)
    assert str(exc.value) == "Invalid username or password"


def test_demo_accounts_need_the_flag():
    users = InMemoryUsers()
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("viewer", "anything")

    s_user = AuthService(users, demo_login=True).authenticate("viewer", "anything")
    assert s_user.demo is True
    assert s_user.role == Role.VIEWER


def test_demo_flag_does_not_open_unknown_usernames():
    with pytest.raises(AuthenticationError):
        AuthService(InMemoryUsers(), demo_login=True).authenticate("intruder", "x")


def test_placeholder_hash_never_matches():
    users = InMemoryUsers()
    users.create_user(username="legacy", email="l@x.com", full_name="Legacy", password_hash="CHANGE_ME", role=Role.VIEWER)
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("legacy", "CHANGE_ME")
