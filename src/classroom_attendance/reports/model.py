from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..groups.model import Group
from ..students.model import Student


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


@dataclass(frozen=True)
class StudentStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0

    @property
    def percentage(self) -> float:
        return _percent(self.present, self.total)

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "StudentStats":
        statuses = [r.status for r in records]
        return cls(
            total=len(statuses),
            present=statuses.count(AttendanceStatus.PRESENT),
            absent=statuses.count(AttendanceStatus.ABSENT),
            late=statuses.count(AttendanceStatus.LATE),
            excused=statuses.count(AttendanceStatus.EXCUSED),
        )


@dataclass(frozen=True)
class GroupReport:
    """Aggregated attendance of one group over an inclusive day range.

    ``*_pct`` values are shares of the records found. ``overall_attendance``
    is PRESENT records over every (student, recorded day) slot.
    """

    group_id: int
    start: date
    end: date
    total_students: int
    recorded_days: int
    total_records: int
    present: int
    absent: int
    late: int
    excused: int

    @property
    def present_pct(self) -> float:
        return _percent(self.present, self.total_records)

    @property
    def absent_pct(self) -> float:
        return _percent(self.absent, self.total_records)

    @property
    def late_pct(self) -> float:
        return _percent(self.late, self.total_records)

    @property
    def excused_pct(self) -> float:
        return _percent(self.excused, self.total_records)

    @property
    def overall_attendance(self) -> float:
        return _percent(self.present, self.total_students * self.recorded_days)


@dataclass(frozen=True)
class GroupExportData:
    group: Group
    students: Sequence[Student]
    records_by_student: Dict[int, Sequence[AttendanceRecord]]
    start: date
    end: date

    def stats_for(self, student_id: int) -> StudentStats:
        return StudentStats.from_records(self.records_by_student.get(student_id, ()))

    def totals(self) -> StudentStats:
        return StudentStats.from_records(r for records in self.records_by_student.values() for r in records)


@dataclass(frozen=True)
class StudentExportData:
    student: Student
    group: Group
    records: Sequence[AttendanceRecord]
    start: date
    end: date

    @property
    def stats(self) -> StudentStats:
        return StudentStats.from_records(self.records)
