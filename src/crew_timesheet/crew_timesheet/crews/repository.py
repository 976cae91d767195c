from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Crew


class CrewRepository(Protocol):
    """Crews are always returned with their members attached."""

    def list_all(self) -> Sequence[Crew]:
        raise NotImplementedError

    def list_by_contract(self, contract_id: int) -> Sequence[Crew]:
        raise NotImplementedError

    def get_by_id(self, crew_id: int) -> Optional[Crew]:
        raise NotImplementedError

    def create_crew(
        self,
        *,
        crew_name: str,
        utility_contract_id: int,
        supervisor_id: str,
        equipment_assigned: Sequence[str],
    ) -> int:
        raise NotImplementedError

    def update_crew(
        self,
        *,
        crew_id: int,
        crew_name: str,
        active: bool,
        equipment_assigned: Sequence[str],
    ) -> bool:
        raise NotImplementedError

    def delete_crew(self, crew_id: int) -> bool:
        raise NotImplementedError

    def add_member(self, *, crew_id: int, name: str, role: str, hourly_rate: float) -> int:
        raise NotImplementedError

    def remove_member(self, *, crew_id: int, member_id: int) -> bool:
        raise NotImplementedError
