from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TimeEntryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decode_json_list,
    fetchall,
    fetchone,
    in_clause,
    normalize_mysql_date,
    normalize_mysql_time,
)
from .model import GPSPoint, NewTimeEntry, TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = """
    id, crew_id, member_id, date, start_time, end_time, work_package_id,
    hours_regular, hours_overtime, status, comments, gps_locations,
    submitted_by, submitted_at, location, work_description
"""


def _to_entry(row: dict) -> TimeEntry:
    return TimeEntry(
        id=int(row["id"]),
        crew_id=int(row["crew_id"]),
        member_id=int(row["member_id"]),
        date=normalize_mysql_date(row["date"]),
        start_time=normalize_mysql_time(row["start_time"]),
        end_time=normalize_mysql_time(row["end_time"]),
        hours_regular=float(row.get("hours_regular") or 0),
        hours_overtime=float(row.get("hours_overtime") or 0),
        status=TimeEntryStatus(row["status"]),
        location=row.get("location") or "",
        work_description=row.get("work_description") or "",
        work_package_id=row.get("work_package_id"),
        comments=row.get("comments"),
        gps_locations=tuple(
            GPSPoint(
                latitude=float(p["latitude"]),
                longitude=float(p["longitude"]),
                timestamp=str(p.get("timestamp", "")),
                accuracy=p.get("accuracy"),
            )
            for p in decode_json_list(row.get("gps_locations"))
        ),
        submitted_by=row.get("submitted_by") or "",
        submitted_at=row.get("submitted_at"),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries ORDER BY date DESC, id DESC")
            return [_to_entry(r) for r in fetchall(cur)]

    def list_by_crew(self, crew_id: int) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_entries WHERE crew_id=%s ORDER BY date DESC, id DESC",
                (int(crew_id),),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE id=%s", (int(entry_id),))
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def list_for_members_between(
        self,
        *,
        member_ids: Sequence[int],
        start_date: date,
        end_date: date,
    ) -> Sequence[TimeEntry]:
        if not member_ids:
            return []
        ids = [int(m) for m in member_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE member_id IN ({in_clause(ids)}) AND date BETWEEN %s AND %s
                ORDER BY member_id, date, id
                """,
                (*ids, start_date, end_date),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def create_entry(
        self,
        entry: NewTimeEntry,
        *,
        status: TimeEntryStatus,
        submitted_by: Optional[str],
        submitted_at: Optional[datetime],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(
                    crew_id, member_id, date, start_time, end_time, work_package_id,
                    hours_regular, hours_overtime, status, comments, gps_locations,
                    submitted_by, submitted_at, location, work_description
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,'[]',%s,%s,%s,%s)
                """,
                (
                    entry.crew_id,
                    entry.member_id,
                    entry.date,
                    entry.start_time,
                    entry.end_time,
                    entry.work_package_id,
                    entry.hours_regular,
                    entry.hours_overtime,
                    status.value,
                    entry.comments,
                    submitted_by,
                    submitted_at,
                    entry.location,
                    entry.work_description,
                ),
            )
            return int(cur.lastrowid)

    def update_status(
        self,
        *,
        entry_id: int,
        status: TimeEntryStatus,
        submitted_by: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET status=%s,
                    submitted_by=COALESCE(%s, submitted_by),
                    submitted_at=COALESCE(%s, submitted_at)
                WHERE id=%s
                """,
                (status.value, submitted_by, submitted_at, int(entry_id)),
            )
            return cur.rowcount > 0
