from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..core.enums import AttendanceStatus
from ..i18n.locale import STATUS_KEYS


@dataclass(frozen=True)
class StatusStyle:
    label_key: str
    short: str
    color: str
    background: str
    icon: str


STATUS_STYLES: Dict[AttendanceStatus, StatusStyle] = {
    AttendanceStatus.PRESENT: StatusStyle(STATUS_KEYS[AttendanceStatus.PRESENT], "P", "#4CAF50", "#E8F5E9", "check_circle"),
    AttendanceStatus.ABSENT: StatusStyle(STATUS_KEYS[AttendanceStatus.ABSENT], "A", "#F44336", "#FFEBEE", "cancel"),
    AttendanceStatus.LATE: StatusStyle(STATUS_KEYS[AttendanceStatus.LATE], "T", "#FF9800", "#FFF3E0", "access_time"),
    AttendanceStatus.EXCUSED: StatusStyle(STATUS_KEYS[AttendanceStatus.EXCUSED], "J", "#2196F3", "#E3F2FD", "description"),
}


def style_for(status: AttendanceStatus) -> StatusStyle:
    return STATUS_STYLES[AttendanceStatus(status)]
