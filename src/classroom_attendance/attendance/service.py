from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import DayLike, now_local, to_day
from ..common.validators import FieldErrors, validate_notes
from ..core.enums import AttendanceStatus
from ..database.notifier import LiveQuery
from ..groups.model import Group
from ..groups.repository import GroupRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, students: StudentRepository, groups: GroupRepository):
        self._attendance = attendance
        self._students = students
        self._groups = groups

    # ---- lookups used by the attendance screen -----------------------------

    def get_group(self, group_id: int) -> Optional[Group]:
        return self._groups.get_by_id(group_id)

    def roster(self, group_id: int) -> Sequence[Student]:
        return self._students.list_by_group(group_id)

    def statuses_for_day(self, group_id: int, day: DayLike) -> Dict[int, AttendanceStatus]:
        return {r.student_id: r.status for r in self._attendance.list_by_group_and_date(group_id, to_day(day))}

    def watch_day(self, group_id: int, day: DayLike) -> LiveQuery[Sequence[AttendanceRecord]]:
        return self._attendance.watch_by_group_and_date(group_id, to_day(day))

    def history(self, student_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_student(student_id)

    def recorded_days(self, group_id: int) -> Sequence[date]:
        return self._attendance.distinct_dates_for_group(group_id)

    # ---- writes -------------------------------------------------------------

    def record(
        self,
        *,
        student_id: int,
        group_id: int,
        day: DayLike,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Write one student's status for a day.

        An existing record for (student, day) is updated in place: same id,
        new status and a fresh ``recorded_at``. Otherwise a record is inserted.
        """
        errors = FieldErrors()
        errors.check("notes", validate_notes(notes))
        errors.raise_if_any()

        day = to_day(day)
        status = AttendanceStatus(status)
        existing = self._attendance.get_by_student_and_date(student_id, day)
        if existing:
            updated = replace(
                existing,
                status=status,
                notes=notes if notes is not None else existing.notes,
                recorded_at=now_local(),
            )
            self._attendance.update(updated)
            return updated

        record = AttendanceRecord(
            student_id=int(student_id),
            group_id=int(group_id),
            record_date=day,
            status=status,
            notes=notes,
        )
        record_id = self._attendance.insert(record)
        return replace(record, record_id=record_id)

    def save_day(self, group_id: int, day: DayLike, statuses: Mapping[int, AttendanceStatus]) -> int:
        """Persist the chosen statuses of a group's roster for one day.

        Students without a chosen status are left untouched, as are records
        that already exist for them. Returns how many records were written.
        """
        day = to_day(day)
        written = 0
        for student in self._students.list_by_group(group_id):
            status = statuses.get(student.student_id)
            if status is None:
                continue
            self.record(student_id=student.student_id, group_id=group_id, day=day, status=status)
            written += 1
        logger.info("Saved %s attendance records for group %s on %s", written, group_id, day)
        return written

    def clear_day(self, group_id: int, day: DayLike) -> int:
        return self._attendance.delete_by_group_and_date(group_id, to_day(day))

    # ---- statistics -----------------------------------------------------------

    def attendance_percentage(self, student_id: int, start: DayLike, end: DayLike) -> float:
        """Share of PRESENT records among all of a student's records in range."""
        start, end = to_day(start), to_day(end)
        total = self._attendance.count_by_student_in_range(student_id, start, end)
        if total == 0:
            return 0.0
        present = self._attendance.count_by_student_and_status(student_id, AttendanceStatus.PRESENT, start, end)
        return present / total * 100
