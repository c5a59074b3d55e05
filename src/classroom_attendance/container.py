from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .attendance.service import AttendanceService
from .attendance.session import AttendanceSession
from .attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from .common.datetime_utils import DayLike
from .core.constants import PHOTOS_DIR, REPORTS_DIR, TEMP_PHOTOS_DIR
from .core.enums import Language
from .database.connection import DBConfig, DatabaseConnection
from .groups.service import GroupService
from .groups.sqlite_group_repository import SQLiteGroupRepository
from .i18n.locale import resolve_language
from .media.image_store import ImageStore
from .reports.exporters.base import ReportExporter
from .reports.exporters.excel_exporter import ExcelReportExporter
from .reports.exporters.pdf_exporter import PdfReportExporter
from .reports.service import ReportService, ReportSession
from .students.service import StudentService
from .students.sqlite_student_repository import SQLiteStudentRepository
from .teachers.model import TeacherSession
from .teachers.service import AuthService, TeacherService
from .teachers.sqlite_teacher_repository import SQLiteTeacherRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    teachers_repo: SQLiteTeacherRepository
    groups_repo: SQLiteGroupRepository
    students_repo: SQLiteStudentRepository
    attendance_repo: SQLiteAttendanceRepository

    images: ImageStore

    auth_service: AuthService
    teacher_service: TeacherService
    group_service: GroupService
    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService

    excel_exporter: ExcelReportExporter
    pdf_exporter: PdfReportExporter
    language: Language

    def exporter_for(self, fmt: str) -> ReportExporter:
        fmt = (fmt or "").lower()
        if fmt in {"xlsx", "excel"}:
            return self.excel_exporter
        if fmt == "pdf":
            return self.pdf_exporter
        raise ValueError(f"Unsupported report format: {fmt}")

    def attendance_session(self, group_id: int, day: DayLike) -> AttendanceSession:
        return AttendanceSession(group_id, day, self.attendance_service)

    def report_session(self, session: TeacherSession, *, day: Optional[DayLike] = None) -> ReportSession:
        return ReportSession(self.report_service, self.group_service.list_for(session), day=day)


def build_container(
    *,
    db_config: Optional[dict] = None,
    conn: Optional[DatabaseConnection] = None,
    reports_dir: Union[str, Path] = REPORTS_DIR,
    photos_dir: Union[str, Path] = PHOTOS_DIR,
    temp_photos_dir: Union[str, Path] = TEMP_PHOTOS_DIR,
    language: str = "es",
) -> Container:
    if conn is None:
        if db_config is None:
            raise ValueError("build_container needs db_config or conn")
        conn = DatabaseConnection.get_instance(DBConfig(path=str(db_config["path"])))

    teachers_repo = SQLiteTeacherRepository(conn)
    groups_repo = SQLiteGroupRepository(conn)
    students_repo = SQLiteStudentRepository(conn)
    attendance_repo = SQLiteAttendanceRepository(conn)

    images = ImageStore(photos_dir, temp_photos_dir)
    lang = resolve_language(language)

    return Container(
        conn=conn,
        teachers_repo=teachers_repo,
        groups_repo=groups_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        images=images,
        auth_service=AuthService(teachers_repo),
        teacher_service=TeacherService(teachers_repo, images),
        group_service=GroupService(groups_repo, students_repo),
        student_service=StudentService(students_repo, groups_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, groups_repo),
        report_service=ReportService(attendance_repo, students_repo, groups_repo),
        excel_exporter=ExcelReportExporter(reports_dir, language=lang),
        pdf_exporter=PdfReportExporter(reports_dir, language=lang),
        language=lang,
    )
