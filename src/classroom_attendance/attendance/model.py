from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's status on one calendar day.

    At most one record exists per (student_id, record_date).
    """

    student_id: int
    group_id: int
    record_date: date
    status: AttendanceStatus
    notes: Optional[str] = None
    recorded_at: datetime = field(default_factory=now_local)
    record_id: int = 0


@dataclass(frozen=True)
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    unset: int = 0
