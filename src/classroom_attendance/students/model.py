from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local


@dataclass(frozen=True)
class Student:
    """Domain entity: Student. ``code`` is unique across all groups."""

    name: str
    surname: str
    code: str
    group_id: int
    email: Optional[str] = None
    photo_path: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=now_local)
    student_id: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"
