from __future__ import annotations

from flask import Flask, request

from ..common.http import int_field, login_required, ok, payload
from ..container import Container
from ..teachers.model import TeacherSession


def register(app: Flask, container: Container) -> None:
    groups = container.group_service
    students = container.student_service

    def _owned_student(teacher: TeacherSession, student_id: int):
        student = students.get(student_id)
        groups.get_owned(teacher, student.group_id)
        return student

    @app.get("/api/groups/<int:group_id>/students")
    @login_required
    def roster(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        items = students.roster(group_id)
        return ok(students=items, count=len(items))

    @app.post("/api/groups/<int:group_id>/students")
    @login_required
    def add_student(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        data = payload()
        student = students.create(
            group_id=group_id,
            name=data.get("name", ""),
            surname=data.get("surname", ""),
            code=data.get("code", ""),
            email=data.get("email"),
        )
        return ok("Student added", student=student), 201

    @app.get("/api/students")
    @login_required
    def search_students(teacher: TeacherSession):
        own = {g.group_id for g in groups.list_for(teacher)}
        items = [s for s in students.search(request.args.get("q", "")) if s.group_id in own]
        return ok(students=items, count=len(items))

    @app.get("/api/students/<int:student_id>")
    @login_required
    def get_student(teacher: TeacherSession, student_id: int):
        return ok(student=_owned_student(teacher, student_id))

    @app.put("/api/students/<int:student_id>")
    @login_required
    def update_student(teacher: TeacherSession, student_id: int):
        _owned_student(teacher, student_id)
        data = payload()
        student = students.update(
            student_id,
            name=data.get("name", ""),
            surname=data.get("surname", ""),
            code=data.get("code", ""),
            email=data.get("email"),
        )
        return ok("Student updated", student=student)

    @app.delete("/api/students/<int:student_id>")
    @login_required
    def remove_student(teacher: TeacherSession, student_id: int):
        _owned_student(teacher, student_id)
        students.deactivate(student_id)
        return ok("Student removed")

    @app.post("/api/students/<int:student_id>/transfer")
    @login_required
    def transfer_student(teacher: TeacherSession, student_id: int):
        _owned_student(teacher, student_id)
        new_group_id = int_field(payload(), "group_id")
        groups.get_owned(teacher, new_group_id)
        student = students.transfer(student_id, new_group_id)
        return ok("Student transferred", student=student)
