from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.notifier import LiveQuery
from ..database.sqlite_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime, with_cascades
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, surname, code, email, photo_path, group_id, is_active, created_at"

_UPSERT = """
    INSERT INTO students(student_id, name, surname, code, email, photo_path, group_id, is_active, created_at)
    VALUES(?,?,?,?,?,?,?,?,?)
    ON CONFLICT(student_id) DO UPDATE SET
        name=excluded.name, surname=excluded.surname, code=excluded.code, email=excluded.email,
        photo_path=excluded.photo_path, group_id=excluded.group_id,
        is_active=excluded.is_active, created_at=excluded.created_at
"""


def _to_student(r: Dict[str, Any]) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        surname=r["surname"],
        code=r["code"],
        email=r.get("email"),
        photo_path=r.get("photo_path"),
        group_id=int(r["group_id"]),
        is_active=bool(r.get("is_active", 1)),
        created_at=from_db_datetime(r["created_at"]),
    )


def _params(s: Student) -> tuple:
    return (
        s.student_id or None,
        s.name,
        s.surname,
        s.code,
        s.email,
        s.photo_path,
        int(s.group_id),
        int(s.is_active),
        to_db_datetime(s.created_at),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _live(self, fetch) -> LiveQuery:
        return LiveQuery(self._conn_factory.notifier, ("students",), fetch)

    def list_active(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE is_active=1 ORDER BY surname, name")
            return [_to_student(r) for r in fetchall(cur)]

    def watch_active(self) -> LiveQuery[Sequence[Student]]:
        return self._live(self.list_active)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=?", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def watch_by_id(self, student_id: int) -> LiveQuery[Optional[Student]]:
        return self._live(lambda: self.get_by_id(student_id))

    def list_by_group(self, group_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE group_id=? AND is_active=1 ORDER BY surname, name",
                (int(group_id),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def watch_by_group(self, group_id: int) -> LiveQuery[Sequence[Student]]:
        return self._live(lambda: self.list_by_group(group_id))

    def get_by_code(self, code: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE code=?", (code,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def search(self, query: str) -> Sequence[Student]:
        pattern = f"%{_escape_like(query.strip().lower())}%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM students
                WHERE (lower(name) LIKE ? ESCAPE '\\'
                       OR lower(surname) LIKE ? ESCAPE '\\'
                       OR lower(code) LIKE ? ESCAPE '\\')
                  AND is_active=1
                ORDER BY surname, name
                """,
                (pattern, pattern, pattern),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def watch_search(self, query: str) -> LiveQuery[Sequence[Student]]:
        return self._live(lambda: self.search(query))

    def insert(self, student: Student) -> int:
        with db_cursor(self._conn_factory, changes=("students",)) as (_, cur):
            cur.execute(_UPSERT, _params(student))
            return int(student.student_id or cur.lastrowid)

    def insert_many(self, students: Sequence[Student]) -> None:
        with db_cursor(self._conn_factory, changes=("students",)) as (_, cur):
            cur.executemany(_UPSERT, [_params(s) for s in students])

    def update(self, student: Student) -> bool:
        with db_cursor(self._conn_factory, changes=("students",)) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=?, surname=?, code=?, email=?, photo_path=?, group_id=?, is_active=?
                WHERE student_id=?
                """,
                (
                    student.name,
                    student.surname,
                    student.code,
                    student.email,
                    student.photo_path,
                    int(student.group_id),
                    int(student.is_active),
                    int(student.student_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=with_cascades("students")) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=?", (int(student_id),))
            return cur.rowcount > 0

    def deactivate(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=("students",)) as (_, cur):
            cur.execute("UPDATE students SET is_active=0 WHERE student_id=?", (int(student_id),))
            return cur.rowcount > 0

    def transfer(self, student_id: int, new_group_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=("students",)) as (_, cur):
            cur.execute(
                "UPDATE students SET group_id=? WHERE student_id=?",
                (int(new_group_id), int(student_id)),
            )
            return cur.rowcount > 0

    def count_by_group(self, group_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM students WHERE group_id=? AND is_active=1",
                (int(group_id),),
            )
            return int(fetchone(cur)["n"])

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students WHERE is_active=1")
            return int(fetchone(cur)["n"])
