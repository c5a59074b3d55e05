from __future__ import annotations

from flask import Flask, request, send_file

from ..common.datetime_utils import start_of_month, today
from ..common.http import day_arg, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from ..teachers.model import TeacherSession
from .model import GroupReport


def _report_json(report: GroupReport) -> dict:
    return {
        "group_id": report.group_id,
        "start": report.start,
        "end": report.end,
        "total_students": report.total_students,
        "recorded_days": report.recorded_days,
        "total_records": report.total_records,
        "present": report.present,
        "absent": report.absent,
        "late": report.late,
        "excused": report.excused,
        "present_pct": round(report.present_pct, 2),
        "absent_pct": round(report.absent_pct, 2),
        "late_pct": round(report.late_pct, 2),
        "excused_pct": round(report.excused_pct, 2),
        "overall_attendance": round(report.overall_attendance, 2),
    }


def register(app: Flask, container: Container) -> None:
    groups = container.group_service
    reports = container.report_service

    def _range():
        end = day_arg("end", today())
        start = day_arg("start", start_of_month(end))
        return start, end

    def _exporter():
        try:
            return container.exporter_for(request.args.get("format", "pdf"))
        except ValueError as exc:
            raise ValidationError(str(exc), {"format": "Use pdf or xlsx"}) from exc

    @app.get("/api/groups/<int:group_id>/report")
    @login_required
    def group_report(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        start, end = _range()
        return ok(report=_report_json(reports.group_report(group_id, start, end)))

    @app.get("/api/groups/<int:group_id>/report/export")
    @login_required
    def export_group_report(teacher: TeacherSession, group_id: int):
        groups.get_owned(teacher, group_id)
        start, end = _range()
        exporter = _exporter()
        path = reports.export_group(exporter, group_id, start, end)
        return send_file(path.resolve(), mimetype=exporter.mime_type, as_attachment=True, download_name=path.name)

    @app.get("/api/students/<int:student_id>/report")
    @login_required
    def student_report(teacher: TeacherSession, student_id: int):
        student = container.student_service.get(student_id)
        groups.get_owned(teacher, student.group_id)
        start, end = _range()
        stats = reports.student_report(student_id, start, end)
        return ok(stats=stats, percentage=round(stats.percentage, 2), start=start, end=end)

    @app.get("/api/students/<int:student_id>/report/export")
    @login_required
    def export_student_report(teacher: TeacherSession, student_id: int):
        student = container.student_service.get(student_id)
        groups.get_owned(teacher, student.group_id)
        start, end = _range()
        exporter = _exporter()
        path = reports.export_student(exporter, student_id, start, end)
        return send_file(path.resolve(), mimetype=exporter.mime_type, as_attachment=True, download_name=path.name)
