from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class CrewMember:
    id: int
    crew_id: int
    name: str
    role: str
    hourly_rate: Optional[float] = None
    active: bool = True


@dataclass(frozen=True)
class Crew:
    """A work team assigned to one utility contract.

    Members are kept in display order; the backend owns their lifecycle.
    """

    id: int
    crew_name: str
    utility_contract_id: int
    supervisor_id: str
    active: bool
    equipment_assigned: Tuple[str, ...] = ()
    members: Tuple[CrewMember, ...] = field(default_factory=tuple)

    def find_member(self, member_id: int) -> Optional[CrewMember]:
        for member in self.members:
            if member.id == int(member_id):
                return member
        return None


@dataclass(frozen=True)
class CrewStats:
    active_crews: int
    total_members: int
    inactive_crews: int
