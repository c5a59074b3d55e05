from __future__ import annotations

from flask import Flask

from ..common.http import login_required, ok, payload
from ..container import Container
from ..teachers.model import TeacherSession


def register(app: Flask, container: Container) -> None:
    groups = container.group_service

    @app.get("/api/groups")
    @login_required
    def list_groups(teacher: TeacherSession):
        items = groups.list_for(teacher)
        return ok(groups=items, count=len(items))

    @app.post("/api/groups")
    @login_required
    def create_group(teacher: TeacherSession):
        data = payload()
        group = groups.create(
            teacher,
            name=data.get("name", ""),
            subject=data.get("subject", ""),
            schedule=data.get("schedule"),
            description=data.get("description"),
        )
        return ok("Group created", group=group), 201

    @app.get("/api/groups/<int:group_id>")
    @login_required
    def group_detail(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        detail = groups.detail(group_id)
        return ok(group=detail.group, students=detail.students, stats=detail.stats)

    @app.put("/api/groups/<int:group_id>")
    @login_required
    def update_group(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        data = payload()
        group = groups.update(
            group_id,
            name=data.get("name", ""),
            subject=data.get("subject", ""),
            schedule=data.get("schedule"),
            description=data.get("description"),
        )
        return ok("Group updated", group=group)

    @app.post("/api/groups/<int:group_id>/deactivate")
    @login_required
    def deactivate_group(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        groups.deactivate(group_id)
        return ok("Group removed")

    @app.delete("/api/groups/<int:group_id>")
    @login_required
    def delete_group(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        groups.delete(group_id)
        return ok("Group deleted")
