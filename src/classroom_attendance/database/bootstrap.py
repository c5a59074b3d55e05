from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..common.datetime_utils import now_local
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

DEMO_TEACHER = {
    "name": "María",
    "surname": "González",
    "email": "maria.gonzalez@catolica.edu.sv",
    "password": "demo1234",
    "phone": "7890-1234",
}

DEMO_GROUPS = [
    ("Matemáticas I", "Matemáticas", "Lunes y Miércoles 8:00-10:00", "Álgebra y geometría básica"),
    ("Programación Java", "Programación", "Martes y Jueves 10:00-12:00", "Fundamentos de Java y POO"),
    ("Base de Datos", "Informática", "Viernes 14:00-18:00", "SQL, diseño y normalización"),
    ("Inglés Técnico", "Idiomas", "Lunes 14:00-16:00", "Inglés para carreras técnicas"),
]

# (group index, name, surname, code)
DEMO_STUDENTS = [
    (0, "Juan", "Pérez", "2024-0001"),
    (0, "Ana", "Martínez", "2024-0002"),
    (0, "Carlos", "López", "2024-0003"),
    (0, "Laura", "Hernández", "2024-0004"),
    (0, "Miguel", "García", "2024-0005"),
    (1, "Sofia", "Ramírez", "2024-0006"),
    (1, "Diego", "Torres", "2024-0007"),
    (1, "Valeria", "Flores", "2024-0008"),
    (1, "Roberto", "Morales", "2024-0009"),
    (1, "Patricia", "Castro", "2024-0010"),
    (1, "Fernando", "Ruiz", "2024-0011"),
    (2, "Andrea", "Vargas", "2024-0012"),
    (2, "José", "Mendoza", "2024-0013"),
    (2, "Gabriela", "Rojas", "2024-0014"),
    (3, "Ricardo", "Navarro", "2024-0015"),
    (3, "Lucía", "Ortega", "2024-0016"),
]


def _email_for(name: str, surname: str) -> str:
    plain = str.maketrans("áéíóúÁÉÍÓÚñÑ", "aeiouAEIOUnN")
    return f"{name}.{surname}".translate(plain).lower() + "@catolica.edu.sv"


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Path] = None) -> None:
    sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    conn = conn_factory.connect()
    try:
        conn.executescript(sql)
        conn.commit()
    finally:
        conn.close()


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row["name"] for row in cur.fetchall()]
    finally:
        conn.close()


def seed_sample_data(conn_factory: DatabaseConnection) -> int:
    """Insert the demo teacher, her groups and their students.

    Safe to run repeatedly: existing rows (matched by email, group name and
    student code) are left alone. Returns the demo teacher's id.
    """
    created_at = now_local().isoformat(sep=" ")
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SELECT teacher_id FROM teachers WHERE lower(email)=?", (DEMO_TEACHER["email"],))
        row = cur.fetchone()
        if row:
            teacher_id = int(row["teacher_id"])
        else:
            cur.execute(
                """
                INSERT INTO teachers(name, surname, email, password, phone, is_active, created_at)
                VALUES(?,?,?,?,?,1,?)
                """,
                (
                    DEMO_TEACHER["name"],
                    DEMO_TEACHER["surname"],
                    DEMO_TEACHER["email"],
                    DEMO_TEACHER["password"],
                    DEMO_TEACHER["phone"],
                    created_at,
                ),
            )
            teacher_id = int(cur.lastrowid)

        group_ids = []
        for name, subject, schedule, description in DEMO_GROUPS:
            cur.execute("SELECT group_id FROM class_groups WHERE teacher_id=? AND name=?", (teacher_id, name))
            row = cur.fetchone()
            if row:
                group_ids.append(int(row["group_id"]))
                continue
            cur.execute(
                """
                INSERT INTO class_groups(name, subject, schedule, description, teacher_id, is_active, created_at)
                VALUES(?,?,?,?,?,1,?)
                """,
                (name, subject, schedule, description, teacher_id, created_at),
            )
            group_ids.append(int(cur.lastrowid))

        for group_index, name, surname, code in DEMO_STUDENTS:
            cur.execute(
                """
                INSERT INTO students(name, surname, code, email, group_id, is_active, created_at)
                VALUES(?,?,?,?,?,1,?)
                ON CONFLICT(code) DO NOTHING
                """,
                (name, surname, code, _email_for(name, surname), group_ids[group_index], created_at),
            )

        conn.commit()
    finally:
        conn.close()

    conn_factory.notifier.publish(("teachers", "class_groups", "students"))
    logger.info("Sample data ready for teacher %s", teacher_id)
    return teacher_id
