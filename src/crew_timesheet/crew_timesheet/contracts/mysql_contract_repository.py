from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import UtilityContract
from .repository import ContractRepository

_COLUMNS = "id, utility_name, storm_event, region, contract_number, active, start_date, end_date"


def _to_contract(row: dict) -> UtilityContract:
    return UtilityContract(
        id=int(row["id"]),
        utility_name=row["utility_name"],
        storm_event=row["storm_event"],
        region=row["region"],
        contract_number=row["contract_number"],
        active=bool(row.get("active", True)),
        start_date=normalize_mysql_date(row["start_date"]),
        end_date=normalize_mysql_date(row.get("end_date")),
    )


class MySQLContractRepository(ContractRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[UtilityContract]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM utility_contracts ORDER BY utility_name")
            return [_to_contract(r) for r in fetchall(cur)]

    def get_by_id(self, contract_id: int) -> Optional[UtilityContract]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM utility_contracts WHERE id=%s", (int(contract_id),))
            row = fetchone(cur)
            return _to_contract(row) if row else None
