from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local


@dataclass(frozen=True)
class Teacher:
    """Domain entity: Teacher.

    Note: plain data object (no DB access code). ``email`` is the login
    identifier and ``password`` is kept as entered.
    """

    name: str
    surname: str
    email: str = ""
    password: str = ""
    phone: Optional[str] = None
    photo_path: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=now_local)
    teacher_id: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"


@dataclass(frozen=True)
class TeacherSession:
    """The acting teacher, passed explicitly to whatever needs it."""

    teacher_id: int
    email: str
    full_name: str
