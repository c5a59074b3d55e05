from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.notifier import LiveQuery
from ..database.sqlite_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime, with_cascades
from .model import Group
from .repository import GroupRepository

_COLUMNS = "group_id, name, subject, schedule, description, teacher_id, is_active, created_at"


def _to_group(r: Dict[str, Any]) -> Group:
    return Group(
        group_id=int(r["group_id"]),
        name=r["name"],
        subject=r["subject"],
        schedule=r.get("schedule"),
        description=r.get("description"),
        teacher_id=int(r["teacher_id"]),
        is_active=bool(r.get("is_active", 1)),
        created_at=from_db_datetime(r["created_at"]),
    )


class SQLiteGroupRepository(GroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _live(self, fetch) -> LiveQuery:
        return LiveQuery(self._conn_factory.notifier, ("class_groups",), fetch)

    def list_active(self) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM class_groups WHERE is_active=1 ORDER BY name")
            return [_to_group(r) for r in fetchall(cur)]

    def watch_active(self) -> LiveQuery[Sequence[Group]]:
        return self._live(self.list_active)

    def get_by_id(self, group_id: int) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM class_groups WHERE group_id=?", (int(group_id),))
            row = fetchone(cur)
            return _to_group(row) if row else None

    def watch_by_id(self, group_id: int) -> LiveQuery[Optional[Group]]:
        return self._live(lambda: self.get_by_id(group_id))

    def list_by_teacher(self, teacher_id: int) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM class_groups WHERE teacher_id=? AND is_active=1 ORDER BY name",
                (int(teacher_id),),
            )
            return [_to_group(r) for r in fetchall(cur)]

    def watch_by_teacher(self, teacher_id: int) -> LiveQuery[Sequence[Group]]:
        return self._live(lambda: self.list_by_teacher(teacher_id))

    def insert(self, group: Group) -> int:
        with db_cursor(self._conn_factory, changes=("class_groups",)) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_groups(group_id, name, subject, schedule, description, teacher_id, is_active, created_at)
                VALUES(?,?,?,?,?,?,?,?)
                ON CONFLICT(group_id) DO UPDATE SET
                    name=excluded.name, subject=excluded.subject, schedule=excluded.schedule,
                    description=excluded.description, teacher_id=excluded.teacher_id,
                    is_active=excluded.is_active, created_at=excluded.created_at
                """,
                (
                    group.group_id or None,
                    group.name,
                    group.subject,
                    group.schedule,
                    group.description,
                    int(group.teacher_id),
                    int(group.is_active),
                    to_db_datetime(group.created_at),
                ),
            )
            return int(group.group_id or cur.lastrowid)

    def update(self, group: Group) -> bool:
        with db_cursor(self._conn_factory, changes=("class_groups",)) as (_, cur):
            cur.execute(
                """
                UPDATE class_groups
                SET name=?, subject=?, schedule=?, description=?, teacher_id=?, is_active=?
                WHERE group_id=?
                """,
                (
                    group.name,
                    group.subject,
                    group.schedule,
                    group.description,
                    int(group.teacher_id),
                    int(group.is_active),
                    int(group.group_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, group_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=with_cascades("class_groups")) as (_, cur):
            cur.execute("DELETE FROM class_groups WHERE group_id=?", (int(group_id),))
            return cur.rowcount > 0

    def deactivate(self, group_id: int) -> bool:
        with db_cursor(self._conn_factory, changes=("class_groups",)) as (_, cur):
            cur.execute("UPDATE class_groups SET is_active=0 WHERE group_id=?", (int(group_id),))
            return cur.rowcount > 0

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM class_groups WHERE is_active=1")
            return int(fetchone(cur)["n"])

    def count_by_teacher(self, teacher_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM class_groups WHERE teacher_id=? AND is_active=1",
                (int(teacher_id),),
            )
            return int(fetchone(cur)["n"])
