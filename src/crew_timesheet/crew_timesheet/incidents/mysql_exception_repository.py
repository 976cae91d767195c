from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ExceptionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeException
from .repository import ExceptionRepository

_COLUMNS = (
    "id, time_entry_id, flagged_by, reason, description, status, "
    "admin_notes, resolved_by, resolved_at, created_at"
)


def _to_exception(row: dict) -> TimeException:
    return TimeException(
        id=int(row["id"]),
        time_entry_id=int(row["time_entry_id"]),
        flagged_by=row["flagged_by"],
        reason=row["reason"],
        description=row["description"],
        status=ExceptionStatus(row["status"]),
        created_at=row["created_at"],
        admin_notes=row.get("admin_notes"),
        resolved_by=row.get("resolved_by"),
        resolved_at=row.get("resolved_at"),
    )


class MySQLExceptionRepository(ExceptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimeException]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM exceptions ORDER BY created_at DESC, id DESC")
            return [_to_exception(r) for r in fetchall(cur)]

    def get_by_id(self, exception_id: int) -> Optional[TimeException]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM exceptions WHERE id=%s", (int(exception_id),))
            row = fetchone(cur)
            return _to_exception(row) if row else None

    def create(self, *, time_entry_id: int, flagged_by: str, reason: str, description: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO exceptions(time_entry_id, flagged_by, reason, description, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(time_entry_id), flagged_by, reason, description, ExceptionStatus.SUBMITTED.value),
            )
            return int(cur.lastrowid)

    def update_status(
        self,
        *,
        exception_id: int,
        status: ExceptionStatus,
        admin_notes: Optional[str] = None,
        resolved_by: Optional[str] = None,
        resolved_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE exceptions
                SET status=%s,
                    admin_notes=COALESCE(%s, admin_notes),
                    resolved_by=%s,
                    resolved_at=%s
                WHERE id=%s
                """,
                (status.value, admin_notes, resolved_by, resolved_at, int(exception_id)),
            )
            return cur.rowcount > 0
