"""Demo login table.

Accounts listed here log in with any password. ``AuthService`` only consults
this table when the ``ENABLE_DEMO_LOGIN`` setting is on, and the production
settings module forces that setting off.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class DemoAccount:
    id: int
    username: str
    email: str
    full_name: str
    role: Role


DEMO_ACCOUNTS = (
    DemoAccount(1, "admin", "admin@uspcontractor.com", "John Administrator", Role.SUPER_ADMIN),
    DemoAccount(2, "field_manager", "field@uspcontractor.com", "Sarah Field Manager", Role.ADMIN),
    DemoAccount(3, "viewer", "viewer@uspcontractor.com", "Mike Observer", Role.VIEWER),
)


def find_demo_account(username: str) -> Optional[DemoAccount]:
    for account in DEMO_ACCOUNTS:
        if account.username == username:
            return account
    return None
