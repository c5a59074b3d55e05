from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..database.notifier import LiveQuery
from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for Teacher.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def list_active(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def watch_active(self) -> LiveQuery[Sequence[Teacher]]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def watch_by_id(self, teacher_id: int) -> LiveQuery[Optional[Teacher]]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def insert(self, teacher: Teacher) -> int:
        raise NotImplementedError

    def update(self, teacher: Teacher) -> bool:
        raise NotImplementedError

    def delete(self, teacher_id: int) -> bool:
        raise NotImplementedError

    def deactivate(self, teacher_id: int) -> bool:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
