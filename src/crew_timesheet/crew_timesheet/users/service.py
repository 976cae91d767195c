from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import INVALID_CREDENTIALS_MESSAGE
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .demo_accounts import find_demo_account
from .model import User
from .repository import UserRepository
from .session_cache import SessionUser

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login).

    Backend accounts with password hashes are the only real authentication
    path. When ``demo_login`` is on, usernames from the demo table are let in
    without a password check.
    """

    def __init__(
        self,
        users: UserRepository,
        *,
        demo_login: bool = False,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._demo_login = bool(demo_login)
        self._clock = clock

    @property
    def demo_login(self) -> bool:
        return self._demo_login

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = (username or "").strip()
        now = self._clock()

        if self._demo_login:
            demo = find_demo_account(username)
            if demo:
                logger.warning("demo login used for %r", username)
                return SessionUser(
                    id=demo.id,
                    username=demo.username,
                    email=demo.email,
                    full_name=demo.full_name,
                    role=demo.role,
                    last_login=now,
                    demo=True,
                )

        user = self._users.get_by_username(username) if username else None
        if not user or not user.active:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False
        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        self._users.touch_last_login(user.id, at=now)
        return SessionUser(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            last_login=now,
        )


class UserService:
    """Use case: manage office accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def create_account(
        self,
        *,
        current_role: Role,
        username: str,
        email: str,
        full_name: str,
        password: str,
        role: Role,
    ) -> User:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to manage users")
        if role == Role.SUPER_ADMIN:
            raise ValidationError("SuperAdmin accounts cannot be created here")
        if role == Role.ADMIN and current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can create Admin accounts")

        username = require_non_empty(username, "Username")
        email = require_non_empty(email, "Email")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", 6)
        if "@" not in email:
            raise ValidationError("Email is not valid")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            role=role,
        )
        return self._require_user(user_id)

    def update_profile(self, *, user_id: int, full_name: str, email: str) -> User:
        """Own-profile edit; any role may change its display name and email."""
        user = self._require_user(user_id)
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email")
        if "@" not in email:
            raise ValidationError("Email is not valid")
        self._users.update_profile(user.id, full_name=full_name, email=email)
        return self._require_user(user.id)

    def set_active(self, *, current_role: Role, user_id: int, active: bool) -> User:
        user = self._require_manageable(current_role, user_id)
        self._users.set_active(user.id, active=active)
        return self._require_user(user.id)

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        user = self._require_manageable(current_role, user_id)
        if not self._users.delete_by_id(user.id):
            raise ValidationError("Deleting the user failed")

    def _require_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ValidationError("User not found")
        return user

    def _require_manageable(self, current_role: Role, user_id: int) -> User:
        if not current_role.can_edit:
            raise AuthorizationError("You do not have permission to manage users")
        user = self._require_user(user_id)
        if user.role == Role.SUPER_ADMIN:
            raise ValidationError("SuperAdmin accounts cannot be changed here")
        if user.role == Role.ADMIN and current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can change Admin accounts")
        return user
