from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an office account of the admin dashboard.

    Note: Plain data object (no DB access code here).
    """

    id: int
    username: str
    email: str
    full_name: str
    password_hash: str
    role: Role
    active: bool = True
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
