"""Attendance-taking workflow for one group on one day.

The session loads the roster and any saved statuses, lets the caller mark
students in memory, and writes the choices on ``save()``. Observers added
with ``add_listener`` are called with the session after every change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Union

from ..common.datetime_utils import DayLike, to_day
from ..core.enums import AttendanceStatus
from ..students.model import Student
from .model import AttendanceSummary
from .service import AttendanceService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Empty:
    group_name: str


@dataclass(frozen=True)
class Success:
    group_name: str
    students: Sequence[Student]


@dataclass(frozen=True)
class Error:
    message: str


SessionState = Union[Loading, Empty, Success, Error]


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    message: str


class AttendanceSession:
    def __init__(self, group_id: int, day: DayLike, attendance: AttendanceService, *, autoload: bool = True):
        self.group_id = int(group_id)
        self.day = to_day(day)
        self._attendance = attendance
        self._state: SessionState = Loading()
        self._statuses: Dict[int, AttendanceStatus] = {}
        self._listeners: List[Callable[["AttendanceSession"], None]] = []
        self.is_saving = False
        if autoload:
            self.load()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def statuses(self) -> Dict[int, AttendanceStatus]:
        return dict(self._statuses)

    def add_listener(self, listener: Callable[["AttendanceSession"], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        self._notify()

    def load(self) -> SessionState:
        self._set_state(Loading())
        try:
            group = self._attendance.get_group(self.group_id)
            if group is None:
                self._set_state(Error("Group not found"))
                return self._state

            students = self._attendance.roster(self.group_id)
            if not students:
                self._set_state(Empty(group.name))
                return self._state

            self._statuses = self._attendance.statuses_for_day(self.group_id, self.day)
            self._set_state(Success(group_name=group.name, students=list(students)))
        except Exception as exc:
            logger.exception("Failed to load attendance for group %s on %s", self.group_id, self.day)
            self._set_state(Error(str(exc) or "Unknown error"))
        return self._state

    def set_status(self, student_id: int, status: AttendanceStatus) -> None:
        self._statuses[int(student_id)] = AttendanceStatus(status)
        self._notify()

    def mark_all_present(self) -> None:
        if not isinstance(self._state, Success):
            return
        self._statuses = {s.student_id: AttendanceStatus.PRESENT for s in self._state.students}
        self._notify()

    def clear_all(self) -> None:
        self._statuses = {}
        self._notify()

    def change_date(self, new_day: DayLike) -> SessionState:
        self.day = to_day(new_day)
        return self.load()

    def save(self) -> SaveResult:
        if not isinstance(self._state, Success):
            return SaveResult(False, "Invalid state")

        self.is_saving = True
        self._notify()
        try:
            self._attendance.save_day(self.group_id, self.day, self._statuses)
            return SaveResult(True, "Attendance saved")
        except Exception as exc:
            # Records written before the failure stay written.
            logger.exception("Failed to save attendance for group %s on %s", self.group_id, self.day)
            return SaveResult(False, str(exc) or "Error saving attendance")
        finally:
            self.is_saving = False
            self._notify()

    def summary(self) -> AttendanceSummary:
        values = list(self._statuses.values())
        roster_size = len(self._state.students) if isinstance(self._state, Success) else 0
        return AttendanceSummary(
            present=values.count(AttendanceStatus.PRESENT),
            absent=values.count(AttendanceStatus.ABSENT),
            late=values.count(AttendanceStatus.LATE),
            excused=values.count(AttendanceStatus.EXCUSED),
            unset=roster_size - len(values) if roster_size else 0,
        )

    def status_of(self, student_id: int) -> Optional[AttendanceStatus]:
        return self._statuses.get(int(student_id))
