from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.notifier import LiveQuery
from ..database.sqlite_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime, with_cascades
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = "teacher_id, name, surname, email, password, phone, photo_path, is_active, created_at"


def _to_teacher(r: Dict[str, Any]) -> Teacher:
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        surname=r["surname"],
        email=r.get("email") or "",
        password=r.get("password") or "",
        phone=r.get("phone"),
        photo_path=r.get("photo_path"),
        is_active=bool(r.get("is_active", 1)),
        created_at=from_db_datetime(r["created_at"]),
    )


class SQLiteTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE is_active=1 ORDER BY surname, name")
            return [_to_teacher(r) for r in fetchall(cur)]

    def watch_active(self) -> LiveQuery[Sequence[Teacher]]:
        return LiveQuery(self._conn_factory.notifier, ("teachers",), self.list_active)

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=?", (int(teacher_id),))
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    def watch_by_id(self, teacher_id: int) -> LiveQuery[Optional[Teacher]]:
        return LiveQuery(self._conn_factory.notifier, ("teachers",), lambda: self.get_by_id(teacher_id))

    def get_by_email(self, email: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teachers WHERE lower(email)=lower(?) ORDER BY is_active DESC, teacher_id",
                (email.strip(),),
            )
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    def insert(self, teacher: Teacher) -> int:
        with db_cursor(self._conn_factory, changes=("teachers",)) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(teacher_id, name, surname, email, password, phone, photo_path, is_active, created_at)
                VALUES(?,?,?,?,?,?,?,?,?)
                ON CONFLICT(teacher_id) DO UPDATE SET
                    name=excluded.name, surname=excluded.surname, email=excluded.email,
                    password=excluded.password, phone=excluded.phone, photo_path=excluded.photo_path,
                    is_active=excluded.is_active, created_at=excluded.created_at
                """,
                (
                    teacher.teacher_id or None,
                    teacher.name,
                    teacher.surname,
                    teacher.email,
                    teacher.password,
                    teacher.phone,
                    teacher.photo_path,
                    int(teacher.is_active),
                    to_db_datetime(teacher.created_at),
                ),
            )
            return int(teacher.teacher_id or cur.lastrowid)

    def update(self, teacher: Teacher) -> bool:
        with db_cursor(self._conn_factory, changes=("teachers",)) as (_, cur):
            cur.execute(
                """
                UPDATE teachers
                SET name=?, surname=?, email=?, password=?, phone=?, photo_path=?, is_active=?
                WHERE teacher_id=?
                """,
                (
                    teacher.name,
                    teacher.surname,
                    teacher.email,
                    teacher.password,
                    teacher.phone,
                    teacher.photo_path,
                    int(teacher.is_active),
                    int(teacher.teacher_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=with_cascades("teachers")) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE teacher_id=?", (int(teacher_id),))
            return cur.rowcount > 0

    def deactivate(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=("teachers",)) as (_, cur):
            cur.execute("UPDATE teachers SET is_active=0 WHERE teacher_id=?", (int(teacher_id),))
            return cur.rowcount > 0

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM teachers WHERE is_active=1")
            return int(fetchone(cur)["n"])
