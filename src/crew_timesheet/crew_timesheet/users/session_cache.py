from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import MutableMapping, Optional

from ..common.casing import snake_keys, to_view
from ..core.constants import SESSION_PROFILE_KEY
from ..core.enums import Role
from ..core.exceptions import SessionCacheError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    id: int
    username: str
    email: str
    full_name: str
    role: Role
    last_login: Optional[datetime] = None
    demo: bool = False


def encode_profile(user: SessionUser) -> str:
    return json.dumps(to_view(user))


def decode_profile(raw: str) -> SessionUser:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise SessionCacheError(f"Corrupt cached profile: expected an object, got {type(data).__name__}")
        data = snake_keys(data)
        last_login = data.get("last_login")
        return SessionUser(
            id=int(data["id"]),
            username=str(data["username"]),
            email=str(data.get("email") or ""),
            full_name=str(data["full_name"]),
            role=Role(data["role"]),
            last_login=datetime.fromisoformat(last_login) if last_login else None,
            demo=bool(data.get("demo", False)),
        )
    except (TypeError, ValueError, KeyError) as e:
        raise SessionCacheError(f"Corrupt cached profile: {e}") from e


def save_profile(store: MutableMapping, user: SessionUser) -> None:
    store[SESSION_PROFILE_KEY] = encode_profile(user)


def load_profile(store: MutableMapping) -> Optional[SessionUser]:
    """Cached profile, or None when absent or unreadable (the bad value is dropped)."""
    raw = store.get(SESSION_PROFILE_KEY)
    if not raw:
        return None
    try:
        return decode_profile(raw)
    except SessionCacheError:
        logger.warning("discarding unreadable cached session profile", exc_info=True)
        store.pop(SESSION_PROFILE_KEY, None)
        return None


def clear_profile(store: MutableMapping) -> None:
    store.pop(SESSION_PROFILE_KEY, None)
