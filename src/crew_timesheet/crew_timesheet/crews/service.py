from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.validators import require_non_empty, require_non_negative, require_str_list
from ..core.constants import DEFAULT_MEMBER_HOURLY_RATE
from ..core.enums import CrewStatusFilter, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Crew, CrewStats
from .repository import CrewRepository


def _require_editor(role: Role) -> None:
    if not role.can_edit:
        raise AuthorizationError("You do not have permission to change crews")


def filter_crews(
    crews: Iterable[Crew],
    *,
    search: str = "",
    status: CrewStatusFilter = CrewStatusFilter.ALL,
) -> list[Crew]:
    """Crew-management filter: search over crew name and supervisor id."""
    term = (search or "").strip().lower()
    out = []
    for crew in crews:
        if term and term not in crew.crew_name.lower() and term not in crew.supervisor_id.lower():
            continue
        if status == CrewStatusFilter.ACTIVE and not crew.active:
            continue
        if status == CrewStatusFilter.INACTIVE and crew.active:
            continue
        out.append(crew)
    return out


def crew_stats(crews: Sequence[Crew]) -> CrewStats:
    active = sum(1 for c in crews if c.active)
    return CrewStats(
        active_crews=active,
        total_members=sum(len(c.members) for c in crews),
        inactive_crews=len(crews) - active,
    )


class CrewService:
    """Use cases: browse and maintain crews, their members and equipment."""

    def __init__(self, crews: CrewRepository):
        self._crews = crews

    def list_crews(self, contract_id: Optional[int] = None) -> Sequence[Crew]:
        if contract_id is None:
            return self._crews.list_all()
        return self._crews.list_by_contract(int(contract_id))

    def get_crew(self, crew_id: int) -> Crew:
        crew = self._crews.get_by_id(int(crew_id))
        if not crew:
            raise ValidationError("Crew not found")
        return crew

    def create_crew(
        self,
        *,
        current_role: Role,
        crew_name: str,
        utility_contract_id: int,
        supervisor_id: str = "",
        equipment_assigned: Optional[Sequence[str]] = None,
    ) -> Crew:
        _require_editor(current_role)
        crew_name = require_non_empty(crew_name, "Crew name")
        equipment = require_str_list(equipment_assigned, "Equipment")
        crew_id = self._crews.create_crew(
            crew_name=crew_name,
            utility_contract_id=int(utility_contract_id),
            supervisor_id=(supervisor_id or "").strip(),
            equipment_assigned=equipment,
        )
        return self.get_crew(crew_id)

    def update_crew(
        self,
        *,
        current_role: Role,
        crew_id: int,
        crew_name: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> Crew:
        _require_editor(current_role)
        crew = self.get_crew(crew_id)
        new_name = require_non_empty(crew_name, "Crew name") if crew_name is not None else crew.crew_name
        new_active = crew.active if active is None else bool(active)
        self._crews.update_crew(
            crew_id=crew.id,
            crew_name=new_name,
            active=new_active,
            equipment_assigned=crew.equipment_assigned,
        )
        return self.get_crew(crew.id)

    def delete_crew(self, *, current_role: Role, crew_id: int) -> None:
        _require_editor(current_role)
        if not self._crews.delete_crew(int(crew_id)):
            raise ValidationError("Crew not found")

    def add_member(
        self,
        *,
        current_role: Role,
        crew_id: int,
        name: str,
        role: str,
        hourly_rate: Optional[float] = None,
    ) -> Crew:
        _require_editor(current_role)
        crew = self.get_crew(crew_id)
        rate = DEFAULT_MEMBER_HOURLY_RATE if hourly_rate is None else require_non_negative(hourly_rate, "Hourly rate")
        self._crews.add_member(
            crew_id=crew.id,
            name=require_non_empty(name, "Member name"),
            role=require_non_empty(role, "Member role"),
            hourly_rate=rate,
        )
        return self.get_crew(crew.id)

    def remove_member(self, *, current_role: Role, crew_id: int, member_id: int) -> Crew:
        _require_editor(current_role)
        crew = self.get_crew(crew_id)
        if not crew.find_member(member_id):
            raise ValidationError("Member does not belong to this crew")
        self._crews.remove_member(crew_id=crew.id, member_id=int(member_id))
        return self.get_crew(crew.id)

    def add_equipment(self, *, current_role: Role, crew_id: int, equipment: str) -> Crew:
        _require_editor(current_role)
        crew = self.get_crew(crew_id)
        item = require_non_empty(equipment, "Equipment")
        self._crews.update_crew(
            crew_id=crew.id,
            crew_name=crew.crew_name,
            active=crew.active,
            equipment_assigned=[*crew.equipment_assigned, item],
        )
        return self.get_crew(crew.id)

    def remove_equipment(self, *, current_role: Role, crew_id: int, index: int) -> Crew:
        _require_editor(current_role)
        crew = self.get_crew(crew_id)
        if not 0 <= int(index) < len(crew.equipment_assigned):
            raise ValidationError("Equipment index out of range")
        remaining = [e for i, e in enumerate(crew.equipment_assigned) if i != int(index)]
        self._crews.update_crew(
            crew_id=crew.id,
            crew_name=crew.crew_name,
            active=crew.active,
            equipment_assigned=remaining,
        )
        return self.get_crew(crew.id)
