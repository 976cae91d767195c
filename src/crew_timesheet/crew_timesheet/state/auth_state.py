from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from ..users.session_cache import SessionUser


@dataclass(frozen=True)
class AuthState:
    user: Optional[SessionUser] = None
    is_authenticated: bool = False
    loading: bool = True


@dataclass(frozen=True)
class LoginStart:
    pass


@dataclass(frozen=True)
class LoginSuccess:
    user: SessionUser


@dataclass(frozen=True)
class LoginFailure:
    pass


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class UpdateProfile:
    user: SessionUser


@dataclass(frozen=True)
class LoadUser:
    user: Optional[SessionUser]


AuthAction = Union[LoginStart, LoginSuccess, LoginFailure, Logout, UpdateProfile, LoadUser]


def reduce_auth(state: AuthState, action: AuthAction) -> AuthState:
    if isinstance(action, LoginStart):
        return replace(state, loading=True)
    if isinstance(action, LoginSuccess):
        return AuthState(user=action.user, is_authenticated=True, loading=False)
    if isinstance(action, (LoginFailure, Logout)):
        return AuthState(user=None, is_authenticated=False, loading=False)
    if isinstance(action, UpdateProfile):
        return replace(state, user=action.user)
    if isinstance(action, LoadUser):
        return AuthState(user=action.user, is_authenticated=action.user is not None, loading=False)
    return state
