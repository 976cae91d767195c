from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.crew_timesheet.crew_timesheet.core.enums import Role
from src.crew_timesheet.crew_timesheet.core.exceptions import AuthorizationError, ValidationError
from src.crew_timesheet.crew_timesheet.users.service import UserService

from tests.fakes import InMemoryUsers, sample_users


@pytest.fixture
def svc():
    return UserService(InMemoryUsers(sample_users()))


def _create(svc, current_role, **overrides):
    values = dict(
        username="storm_clerk",
        email="clerk@uspcontractor.com",
        full_name="Storm Clerk",
        password="secret1",
        role=Role.VIEWER,
    )
    values.update(overrides)
    return svc.create_account(current_role=current_role, **values)


def test_list_ordered_by_full_name(svc):
    assert [u.username for u in svc.list_users()][0] == "admin"


def test_admin_creates_viewer_with_hashed_password(svc):
    user = _create(svc, Role.ADMIN)
    assert user.role == Role.VIEWER
    assert check_password_hash(user.password_hash, "secret1")


def test_only_super_admin_creates_admins(svc):
    with pytest.raises(AuthorizationError):
        _create(svc, Role.ADMIN, role=Role.ADMIN)
    assert _create(svc, Role.SUPER_ADMIN, role=Role.ADMIN).role == Role.ADMIN


def test_super_admin_accounts_cannot_be_created(svc):
    with pytest.raises(ValidationError):
        _create(svc, Role.SUPER_ADMIN, role=Role.SUPER_ADMIN)


@pytest.mark.parametrize(
    "overrides",
    [dict(username="admin"), dict(email="not-an-email"), dict(password="123"), dict(full_name="")],
)
def test_create_validation(svc, overrides):
    with pytest.raises(ValidationError):
        _create(svc, Role.SUPER_ADMIN, **overrides)


def test_viewer_cannot_manage_users(svc):
    with pytest.raises(AuthorizationError):
        _create(svc, Role.VIEWER)


def test_deactivate_and_delete(svc):
    assert svc.set_active(current_role=Role.ADMIN, user_id=3, active=False).active is False
    svc.delete_user(current_role=Role.ADMIN, user_id=3)
    assert [u.id for u in svc.list_users()] == [1, 4, 2]


def test_super_admin_is_protected(svc):
    with pytest.raises(ValidationError):
        svc.delete_user(current_role=Role.SUPER_ADMIN, user_id=1)


def test_admin_cannot_touch_other_admins(svc):
    with pytest.raises(AuthorizationError):
        svc.set_active(current_role=Role.ADMIN, user_id=2, active=False)
