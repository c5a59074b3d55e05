from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..database.notifier import LiveQuery
from .model import Student


class StudentRepository(Protocol):
    def list_active(self) -> Sequence[Student]:
        raise NotImplementedError

    def watch_active(self) -> LiveQuery[Sequence[Student]]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def watch_by_id(self, student_id: int) -> LiveQuery[Optional[Student]]:
        raise NotImplementedError

    def list_by_group(self, group_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def watch_by_group(self, group_id: int) -> LiveQuery[Sequence[Student]]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Student]:
        raise NotImplementedError

    def search(self, query: str) -> Sequence[Student]:
        raise NotImplementedError

    def watch_search(self, query: str) -> LiveQuery[Sequence[Student]]:
        raise NotImplementedError

    def insert(self, student: Student) -> int:
        raise NotImplementedError

    def insert_many(self, students: Sequence[Student]) -> None:
        raise NotImplementedError

    def update(self, student: Student) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError

    def deactivate(self, student_id: int) -> bool:
        raise NotImplementedError

    def transfer(self, student_id: int, new_group_id: int) -> bool:
        raise NotImplementedError

    def count_by_group(self, group_id: int) -> int:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
