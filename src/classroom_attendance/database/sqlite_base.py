from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from ..core.exceptions import DuplicateCodeError, StorageError
from .connection import DatabaseConnection

# Tables whose rows disappear through ON DELETE CASCADE when a parent row is deleted.
CASCADES = {
    "teachers": ("class_groups", "students", "attendance_records"),
    "class_groups": ("students", "attendance_records"),
    "students": ("attendance_records",),
}

DUPLICATE_CODE_MESSAGE = "A student with that code already exists"


def with_cascades(table: str) -> tuple:
    return (table,) + CASCADES.get(table, ())


def translate_integrity_error(exc: sqlite3.IntegrityError) -> Exception:
    text = str(exc)
    if "UNIQUE constraint" in text and "students.code" in text:
        return DuplicateCodeError(DUPLICATE_CODE_MESSAGE)
    return StorageError(text)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, changes: Iterable[str] = ()):
    """Run one unit of work and notify live queries once it is committed."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except sqlite3.IntegrityError as exc:
        conn.rollback()
        raise translate_integrity_error(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

    changes = tuple(changes)
    if changes:
        conn_factory.notifier.publish(changes)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(sep=" ") if value else None


def from_db_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def to_db_date(value: date) -> str:
    return from_db_date(value).isoformat()


def from_db_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
