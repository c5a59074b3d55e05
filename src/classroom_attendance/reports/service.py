from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DayLike, to_day, today
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..groups.model import Group
from ..groups.repository import GroupRepository
from ..students.repository import StudentRepository
from .exporters.base import ReportExporter
from .model import GroupExportData, GroupReport, StudentExportData, StudentStats

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, attendance: AttendanceRepository, students: StudentRepository, groups: GroupRepository):
        self._attendance = attendance
        self._students = students
        self._groups = groups

    def group_report(self, group_id: int, start: DayLike, end: DayLike) -> GroupReport:
        start, end = to_day(start), to_day(end)
        total_students = len(self._students.list_by_group(group_id))
        records = self._attendance.list_by_group_in_range(group_id, start, end)
        statuses = [r.status for r in records]

        return GroupReport(
            group_id=int(group_id),
            start=start,
            end=end,
            total_students=total_students,
            recorded_days=len({r.record_date for r in records}),
            total_records=len(records),
            present=statuses.count(AttendanceStatus.PRESENT),
            absent=statuses.count(AttendanceStatus.ABSENT),
            late=statuses.count(AttendanceStatus.LATE),
            excused=statuses.count(AttendanceStatus.EXCUSED),
        )

    def student_report(self, student_id: int, start: DayLike, end: DayLike) -> StudentStats:
        start, end = to_day(start), to_day(end)
        return StudentStats.from_records(self._attendance.list_by_student_in_range(student_id, start, end))

    def _require_group(self, group_id: int) -> Group:
        group = self._groups.get_by_id(group_id)
        if not group:
            raise NotFoundError("Group not found")
        return group

    def export_data(self, group_id: int, start: DayLike, end: DayLike) -> GroupExportData:
        start, end = to_day(start), to_day(end)
        group = self._require_group(group_id)
        students = self._students.list_by_group(group_id)
        if not students:
            raise ValidationError("The group has no students")

        by_student: Dict[int, List[AttendanceRecord]] = defaultdict(list)
        for record in self._attendance.list_by_group_in_range(group_id, start, end):
            by_student[record.student_id].append(record)

        return GroupExportData(
            group=group,
            students=list(students),
            records_by_student=dict(by_student),
            start=start,
            end=end,
        )

    def student_export_data(self, student_id: int, start: DayLike, end: DayLike) -> StudentExportData:
        start, end = to_day(start), to_day(end)
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        group = self._require_group(student.group_id)
        records = sorted(
            self._attendance.list_by_student_in_range(student_id, start, end),
            key=lambda r: r.record_date,
        )
        return StudentExportData(student=student, group=group, records=records, start=start, end=end)

    def export_group(self, exporter: ReportExporter, group_id: int, start: DayLike, end: DayLike) -> Path:
        path = exporter.export_group(self.export_data(group_id, start, end))
        logger.info("Exported group %s report to %s", group_id, path)
        return path

    def export_student(self, exporter: ReportExporter, student_id: int, start: DayLike, end: DayLike) -> Path:
        path = exporter.export_student(self.student_export_data(student_id, start, end))
        logger.info("Exported student %s report to %s", student_id, path)
        return path


class ReportSession:
    """Report screen state: selected group, day range and the last report.

    Moving one endpoint past the other drags the other endpoint along, so
    the range never inverts.
    """

    def __init__(self, reports: ReportService, groups: Sequence[Group] = (), *, day: Optional[DayLike] = None):
        self._reports = reports
        self.groups = list(groups)
        self.selected_group_id: Optional[int] = None
        self.start_date = to_day(day) if day is not None else today()
        self.end_date = self.start_date
        self.report: Optional[GroupReport] = None
        self.is_loading = False
        if self.groups:
            self.select_group(self.groups[0].group_id)

    def select_group(self, group_id: int) -> Optional[GroupReport]:
        self.selected_group_id = int(group_id)
        return self.generate()

    def set_start_date(self, day: DayLike) -> Optional[GroupReport]:
        self.start_date = to_day(day)
        if self.start_date > self.end_date:
            self.end_date = self.start_date
        return self.generate()

    def set_end_date(self, day: DayLike) -> Optional[GroupReport]:
        self.end_date = to_day(day)
        if self.end_date < self.start_date:
            self.start_date = self.end_date
        return self.generate()

    def generate(self) -> Optional[GroupReport]:
        if self.selected_group_id is None:
            return None
        self.is_loading = True
        try:
            self.report = self._reports.group_report(self.selected_group_id, self.start_date, self.end_date)
        except Exception:
            logger.exception("Failed to build report for group %s", self.selected_group_id)
            self.report = None
        finally:
            self.is_loading = False
        return self.report

    def export(self, exporter: ReportExporter) -> Path:
        if self.selected_group_id is None:
            raise ValidationError("Select a group to generate the report")
        return self._reports.export_group(exporter, self.selected_group_id, self.start_date, self.end_date)
