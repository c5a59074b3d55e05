from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..database.notifier import LiveQuery
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_group(self, group_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_group_and_date(self, group_id: int, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def watch_by_group_and_date(self, group_id: int, day: date) -> LiveQuery[Sequence[AttendanceRecord]]:
        raise NotImplementedError

    def get_by_student_and_date(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_group_in_range(self, group_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_student_in_range(self, student_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_student_and_status(
        self,
        student_id: int,
        status: AttendanceStatus,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def count_by_student_in_range(self, student_id: int, start: date, end: date) -> int:
        raise NotImplementedError

    def distinct_dates_for_group(self, group_id: int) -> Sequence[date]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def insert_many(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

    def delete_by_group_and_date(self, group_id: int, day: date) -> int:
        raise NotImplementedError

    def delete_by_student(self, student_id: int) -> int:
        raise NotImplementedError
