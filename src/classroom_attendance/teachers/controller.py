from __future__ import annotations

from flask import Flask, request, session

from ..common.http import fail, login_required, ok, payload, start_session
from ..container import Container
from .model import Teacher, TeacherSession


def _profile(teacher: Teacher) -> dict:
    return {
        "teacher_id": teacher.teacher_id,
        "name": teacher.name,
        "surname": teacher.surname,
        "full_name": teacher.full_name,
        "email": teacher.email,
        "phone": teacher.phone,
        "photo_path": teacher.photo_path,
        "created_at": teacher.created_at,
    }


def register(app: Flask, container: Container) -> None:
    @app.post("/api/auth/login")
    def login():
        data = payload()
        teacher = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        start_session(teacher)
        return ok("Signed in", teacher=teacher)

    @app.post("/api/auth/register")
    def register_teacher():
        data = payload()
        teacher = container.auth_service.register(
            name=data.get("name", ""),
            surname=data.get("surname", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            confirm_password=data.get("confirm_password", ""),
            phone=data.get("phone"),
        )
        start_session(teacher)
        return ok("Account created", teacher=teacher), 201

    @app.post("/api/auth/logout")
    def logout():
        session.clear()
        return ok("Signed out")

    @app.get("/api/profile")
    @login_required
    def profile(teacher: TeacherSession):
        return ok(profile=_profile(container.teacher_service.get(teacher)))

    @app.put("/api/profile")
    @login_required
    def update_profile(teacher: TeacherSession):
        data = payload()
        updated = container.teacher_service.update_profile(
            teacher,
            name=data.get("name", ""),
            surname=data.get("surname", ""),
            email=data.get("email", ""),
            phone=data.get("phone"),
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
            confirm_new_password=data.get("confirm_new_password", ""),
        )
        session["email"] = updated.email
        session["name"] = updated.full_name
        return ok("Profile updated", profile=_profile(updated))

    @app.post("/api/profile/photo")
    @login_required
    def upload_photo(teacher: TeacherSession):
        file = request.files.get("photo")
        if not file or not file.filename:
            return fail("Choose a photo to upload")
        updated = container.teacher_service.set_photo(teacher, file.stream)
        return ok("Photo updated", profile=_profile(updated))

    @app.delete("/api/profile/photo")
    @login_required
    def delete_photo(teacher: TeacherSession):
        updated = container.teacher_service.remove_photo(teacher)
        return ok("Photo removed", profile=_profile(updated))
