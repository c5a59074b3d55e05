from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..database.notifier import LiveQuery
from .model import Group


class GroupRepository(Protocol):
    def list_active(self) -> Sequence[Group]:
        raise NotImplementedError

    def watch_active(self) -> LiveQuery[Sequence[Group]]:
        raise NotImplementedError

    def get_by_id(self, group_id: int) -> Optional[Group]:
        raise NotImplementedError

    def watch_by_id(self, group_id: int) -> LiveQuery[Optional[Group]]:
        raise NotImplementedError

    def list_by_teacher(self, teacher_id: int) -> Sequence[Group]:
        raise NotImplementedError

    def watch_by_teacher(self, teacher_id: int) -> LiveQuery[Sequence[Group]]:
        raise NotImplementedError

    def insert(self, group: Group) -> int:
        raise NotImplementedError

    def update(self, group: Group) -> bool:
        raise NotImplementedError

    def delete(self, group_id: int) -> bool:
        """Hard delete; students and attendance records cascade."""

        raise NotImplementedError

    def deactivate(self, group_id: int) -> bool:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def count_by_teacher(self, teacher_id: int) -> int:
        raise NotImplementedError
