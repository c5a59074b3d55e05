from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.notifier import LiveQuery
from ..database.sqlite_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_date,
    from_db_datetime,
    to_db_date,
    to_db_datetime,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

_TABLE = "attendance_records"
_COLUMNS = "record_id, student_id, group_id, record_date, status, notes, recorded_at"

_UPSERT = f"""
    INSERT INTO {_TABLE}(record_id, student_id, group_id, record_date, status, notes, recorded_at)
    VALUES(?,?,?,?,?,?,?)
    ON CONFLICT(record_id) DO UPDATE SET
        student_id=excluded.student_id, group_id=excluded.group_id, record_date=excluded.record_date,
        status=excluded.status, notes=excluded.notes, recorded_at=excluded.recorded_at
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        student_id=int(r["student_id"]),
        group_id=int(r["group_id"]),
        record_date=from_db_date(r["record_date"]),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        recorded_at=from_db_datetime(r["recorded_at"]),
    )


def _params(rec: AttendanceRecord) -> tuple:
    return (
        rec.record_id or None,
        int(rec.student_id),
        int(rec.group_id),
        to_db_date(rec.record_date),
        AttendanceStatus(rec.status).value,
        rec.notes,
        to_db_datetime(rec.recorded_at),
    )


class SQLiteAttendanceRepository(AttendanceRepository):
    """Attendance records keyed by ISO day strings, so date ranges are plain BETWEEN."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _live(self, fetch) -> LiveQuery:
        return LiveQuery(self._conn_factory.notifier, (_TABLE,), fetch)

    def _select(self, where: str, params: tuple, order: str = "record_date DESC") -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM {_TABLE} WHERE {where} ORDER BY {order}", params)
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM {_TABLE} WHERE record_id=?", (int(record_id),))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_by_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        return self._select("student_id=?", (int(student_id),))

    def list_by_group(self, group_id: int) -> Sequence[AttendanceRecord]:
        return self._select("group_id=?", (int(group_id),))

    def list_by_group_and_date(self, group_id: int, day: date) -> Sequence[AttendanceRecord]:
        return self._select("group_id=? AND record_date=?", (int(group_id), to_db_date(day)), order="student_id")

    def watch_by_group_and_date(self, group_id: int, day: date) -> LiveQuery[Sequence[AttendanceRecord]]:
        return self._live(lambda: self.list_by_group_and_date(group_id, day))

    def get_by_student_and_date(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM {_TABLE} WHERE student_id=? AND record_date=?",
                (int(student_id), to_db_date(day)),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_by_group_in_range(self, group_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        return self._select(
            "group_id=? AND record_date BETWEEN ? AND ?",
            (int(group_id), to_db_date(start), to_db_date(end)),
        )

    def list_by_student_in_range(self, student_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        return self._select(
            "student_id=? AND record_date BETWEEN ? AND ?",
            (int(student_id), to_db_date(start), to_db_date(end)),
        )

    def count_by_student_and_status(
        self,
        student_id: int,
        status: AttendanceStatus,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        sql = f"SELECT COUNT(*) AS n FROM {_TABLE} WHERE student_id=? AND status=?"
        params: tuple = (int(student_id), AttendanceStatus(status).value)
        if start is not None and end is not None:
            sql += " AND record_date BETWEEN ? AND ?"
            params += (to_db_date(start), to_db_date(end))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return int(fetchone(cur)["n"])

    def count_by_student_in_range(self, student_id: int, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS n FROM {_TABLE} WHERE student_id=? AND record_date BETWEEN ? AND ?",
                (int(student_id), to_db_date(start), to_db_date(end)),
            )
            return int(fetchone(cur)["n"])

    def distinct_dates_for_group(self, group_id: int) -> Sequence[date]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT DISTINCT record_date FROM {_TABLE} WHERE group_id=? ORDER BY record_date DESC",
                (int(group_id),),
            )
            return [from_db_date(r["record_date"]) for r in fetchall(cur)]

    def insert(self, record: AttendanceRecord) -> int:
        with db_cursor(self._conn_factory, changes=(_TABLE,)) as (_, cur):
            cur.execute(_UPSERT, _params(record))
            return int(record.record_id or cur.lastrowid)

    def insert_many(self, records: Sequence[AttendanceRecord]) -> None:
        with db_cursor(self._conn_factory, changes=(_TABLE,)) as (_, cur):
            cur.executemany(_UPSERT, [_params(r) for r in records])

    def update(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory, changes=(_TABLE,)) as (_, cur):
            cur.execute(
                f"""
                UPDATE {_TABLE}
                SET student_id=?, group_id=?, record_date=?, status=?, notes=?, recorded_at=?
                WHERE record_id=?
                """,
                _params(record)[1:] + (int(record.record_id),),
            )
            return cur.rowcount > 0

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=(_TABLE,)) as (_, cur):
            cur.execute(f"DELETE FROM {_TABLE} WHERE record_id=?", (int(record_id),))
            return cur.rowcount > 0

    def delete_by_group_and_date(self, group_id: int, day: date) -> int:
        with db_cursor(self._conn_factory, changes=(_TABLE,)) as (_, cur):
            cur.execute(
                f"DELETE FROM {_TABLE} WHERE group_id=? AND record_date=?",
                (int(group_id), to_db_date(day)),
            )
            return cur.rowcount

    def delete_by_student(self, student_id: int) -> int:
        with db_cursor(self._conn_factory, changes=(_TABLE,)) as (_, cur):
            cur.execute(f"DELETE FROM {_TABLE} WHERE student_id=?", (int(student_id),))
            return cur.rowcount
