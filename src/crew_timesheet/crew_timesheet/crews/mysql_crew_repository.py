from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json_list, fetchall, in_clause
from .model import Crew, CrewMember
from .repository import CrewRepository

_CREW_COLUMNS = "id, crew_name, utility_contract_id, supervisor_id, active, equipment_assigned"


class MySQLCrewRepository(CrewRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _attach_members(self, cur, crew_rows: list[dict]) -> list[Crew]:
        if not crew_rows:
            return []
        crew_ids = [int(r["id"]) for r in crew_rows]
        cur.execute(
            f"""
            SELECT id, crew_id, name, role, hourly_rate, active
            FROM crew_members
            WHERE crew_id IN ({in_clause(crew_ids)})
            ORDER BY id
            """,
            tuple(crew_ids),
        )
        members_by_crew: dict[int, list[CrewMember]] = {cid: [] for cid in crew_ids}
        for m in fetchall(cur):
            members_by_crew[int(m["crew_id"])].append(
                CrewMember(
                    id=int(m["id"]),
                    crew_id=int(m["crew_id"]),
                    name=m["name"],
                    role=m["role"],
                    hourly_rate=float(m["hourly_rate"]) if m.get("hourly_rate") is not None else None,
                    active=bool(m.get("active", True)),
                )
            )

        return [
            Crew(
                id=int(r["id"]),
                crew_name=r["crew_name"],
                utility_contract_id=int(r["utility_contract_id"]),
                supervisor_id=str(r.get("supervisor_id") or ""),
                active=bool(r.get("active", True)),
                equipment_assigned=tuple(decode_json_list(r.get("equipment_assigned"))),
                members=tuple(members_by_crew[int(r["id"])]),
            )
            for r in crew_rows
        ]

    def list_all(self) -> Sequence[Crew]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CREW_COLUMNS} FROM crews ORDER BY crew_name")
            return self._attach_members(cur, fetchall(cur))

    def list_by_contract(self, contract_id: int) -> Sequence[Crew]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_CREW_COLUMNS} FROM crews WHERE utility_contract_id=%s ORDER BY crew_name",
                (int(contract_id),),
            )
            return self._attach_members(cur, fetchall(cur))

    def get_by_id(self, crew_id: int) -> Optional[Crew]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CREW_COLUMNS} FROM crews WHERE id=%s", (int(crew_id),))
            crews = self._attach_members(cur, fetchall(cur))
            return crews[0] if crews else None

    def create_crew(
        self,
        *,
        crew_name: str,
        utility_contract_id: int,
        supervisor_id: str,
        equipment_assigned: Sequence[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO crews(crew_name, utility_contract_id, supervisor_id, active, equipment_assigned)
                VALUES(%s,%s,%s,1,%s)
                """,
                (crew_name, int(utility_contract_id), supervisor_id or None, json.dumps(list(equipment_assigned))),
            )
            return int(cur.lastrowid)

    def update_crew(
        self,
        *,
        crew_id: int,
        crew_name: str,
        active: bool,
        equipment_assigned: Sequence[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE crews SET crew_name=%s, active=%s, equipment_assigned=%s WHERE id=%s",
                (crew_name, 1 if active else 0, json.dumps(list(equipment_assigned)), int(crew_id)),
            )
            return cur.rowcount > 0

    def delete_crew(self, crew_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM crews WHERE id=%s", (int(crew_id),))
            return cur.rowcount > 0

    def add_member(self, *, crew_id: int, name: str, role: str, hourly_rate: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO crew_members(crew_id, name, role, hourly_rate, active) VALUES(%s,%s,%s,%s,1)",
                (int(crew_id), name, role, float(hourly_rate)),
            )
            return int(cur.lastrowid)

    def remove_member(self, *, crew_id: int, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM crew_members WHERE id=%s AND crew_id=%s", (int(member_id), int(crew_id)))
            return cur.rowcount > 0
