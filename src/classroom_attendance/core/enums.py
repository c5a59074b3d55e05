from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status stored per student and calendar day."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class Language(str, Enum):
    """Supported interface languages."""

    SPANISH = "es"
    ENGLISH = "en"
    PORTUGUESE = "pt"
