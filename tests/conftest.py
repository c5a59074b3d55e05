from __future__ import annotations

import pytest

from classroom_attendance.container import build_container
from classroom_attendance.database.bootstrap import apply_schema
from classroom_attendance.database.connection import DBConfig, DatabaseConnection


@pytest.fixture
def conn(tmp_path):
    c = DatabaseConnection(DBConfig(path=str(tmp_path / "attendance.db")))
    apply_schema(c)
    yield c
    c.close()


@pytest.fixture
def container(conn, tmp_path):
    return build_container(
        conn=conn,
        reports_dir=tmp_path / "reportes",
        photos_dir=tmp_path / "photos",
        temp_photos_dir=tmp_path / "temp_photos",
    )


@pytest.fixture
def teacher(container):
    return container.auth_service.register(
        name="María",
        surname="González",
        email="maria@example.com",
        password="secret",
        confirm_password="secret",
    )


@pytest.fixture
def math_group(container, teacher):
    return container.group_service.create(teacher, name="Math 101", subject="Mathematics")


@pytest.fixture
def roster(container, math_group):
    svc = container.student_service
    return [
        svc.create(group_id=math_group.group_id, name="Ana", surname="Alvarez", code="A-001"),
        svc.create(group_id=math_group.group_id, name="Bruno", surname="Benitez", code="B-002"),
        svc.create(group_id=math_group.group_id, name="Carla", surname="Castro", code="C-003"),
    ]
