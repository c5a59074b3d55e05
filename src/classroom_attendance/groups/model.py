from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local


@dataclass(frozen=True)
class Group:
    """Domain entity: a class group owned by one teacher."""

    name: str
    subject: str
    teacher_id: int
    schedule: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=now_local)
    group_id: int = 0


@dataclass(frozen=True)
class GroupStats:
    total_students: int
    active_students: int
