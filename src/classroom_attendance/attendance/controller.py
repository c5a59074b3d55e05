from __future__ import annotations

from collections.abc import Mapping

from flask import Flask

from ..common.datetime_utils import to_day, today
from ..common.http import day_arg, fail, login_required, ok, payload
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..i18n.locale import status_label
from ..teachers.model import TeacherSession
from .presentation import style_for
from .session import AttendanceSession, Empty, Error, Success


def _parse_statuses(raw) -> dict:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValidationError(
            "statuses must be an object mapping student id to status",
            {"statuses": "Expected an object such as {\"12\": \"PRESENT\"}"},
        )
    statuses = {}
    for student_id, value in raw.items():
        try:
            statuses[int(student_id)] = AttendanceStatus(str(value).upper())
        except ValueError as exc:
            raise ValidationError(f"Invalid status for student {student_id}: {value}") from exc
    return statuses


def _student_row(att: AttendanceSession, student, language) -> dict:
    status = att.status_of(student.student_id)
    return {
        "student_id": student.student_id,
        "full_name": student.full_name,
        "code": student.code,
        "status": status,
        "label": status_label(status, language) if status else None,
        "color": style_for(status).color if status else None,
    }


def _render(att: AttendanceSession, language) -> dict:
    state = att.state
    body = {"group_id": att.group_id, "date": att.day, "summary": att.summary()}
    if isinstance(state, Success):
        body["state"] = "success"
        body["group_name"] = state.group_name
        body["students"] = [_student_row(att, s, language) for s in state.students]
    elif isinstance(state, Empty):
        body["state"] = "empty"
        body["group_name"] = state.group_name
    elif isinstance(state, Error):
        body["state"] = "error"
        body["error"] = state.message
    else:
        body["state"] = "loading"
    return body


def register(app: Flask, container: Container) -> None:
    groups = container.group_service
    attendance = container.attendance_service

    @app.get("/api/groups/<int:group_id>/attendance")
    @login_required
    def attendance_day(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        att = container.attendance_session(group_id, day_arg())
        return ok(**_render(att, container.language))

    @app.post("/api/groups/<int:group_id>/attendance")
    @login_required
    def save_attendance(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        data = payload()
        att = container.attendance_session(group_id, day_arg())
        if data.get("mark_all_present"):
            att.mark_all_present()
        for student_id, status in _parse_statuses(data.get("statuses")).items():
            att.set_status(student_id, status)

        result = att.save()
        if not result.ok:
            return fail(result.message, 409, **_render(att, container.language))
        att.load()
        return ok(result.message, **_render(att, container.language))

    @app.delete("/api/groups/<int:group_id>/attendance")
    @login_required
    def clear_attendance(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        removed = attendance.clear_day(group_id, day_arg())
        return ok("Attendance cleared", removed=removed)

    @app.get("/api/groups/<int:group_id>/attendance/days")
    @login_required
    def recorded_days(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        return ok(days=attendance.recorded_days(group_id))

    @app.get("/api/students/<int:student_id>/attendance")
    @login_required
    def student_attendance(teacher: TeacherSession, student_id: int):
        student = container.student_service.get(student_id)
        groups.get_owned(teacher, student.group_id)
        end = day_arg("end", today())
        start = day_arg("start", to_day(end).replace(day=1))
        return ok(
            student_id=student_id,
            start=start,
            end=end,
            percentage=attendance.attendance_percentage(student_id, start, end),
            records=attendance.history(student_id),
        )
