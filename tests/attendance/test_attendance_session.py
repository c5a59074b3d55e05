from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from classroom_attendance.attendance.model import AttendanceSummary
from classroom_attendance.attendance.session import AttendanceSession, Empty, Error, Loading, SaveResult, Success
from classroom_attendance.core.enums import AttendanceStatus

DAY = date(2024, 3, 4)
P, A, L = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE


def test_loads_roster_into_success(container, math_group, roster):
    session = container.attendance_session(math_group.group_id, DAY)

    assert isinstance(session.state, Success)
    assert session.state.group_name == "Math 101"
    assert [s.code for s in session.state.students] == ["A-001", "B-002", "C-003"]
    assert session.statuses == {}
    assert session.summary() == AttendanceSummary(unset=3)


def test_partial_save_persists_only_marked_students(container, math_group, roster):
    a, b, c = roster
    session = container.attendance_session(math_group.group_id, DAY)
    session.set_status(a.student_id, P)
    session.set_status(b.student_id, A)

    assert session.save() == SaveResult(True, "Attendance saved")

    reloaded = container.attendance_session(math_group.group_id, DAY)
    assert reloaded.statuses == {a.student_id: P, b.student_id: A}
    assert reloaded.summary() == AttendanceSummary(present=1, absent=1, unset=1)


def test_resave_updates_existing_record_in_place(container, math_group, roster):
    a, b, _ = roster
    first = container.attendance_session(math_group.group_id, DAY)
    first.set_status(a.student_id, P)
    first.set_status(b.student_id, A)
    first.save()
    original = container.attendance_repo.get_by_student_and_date(a.student_id, DAY)

    second = container.attendance_session(math_group.group_id, DAY)
    second.set_status(a.student_id, L)
    assert second.save().ok

    third = container.attendance_session(math_group.group_id, DAY)
    assert third.statuses == {a.student_id: L, b.student_id: A}
    records = container.attendance_repo.list_by_group_and_date(math_group.group_id, DAY)
    assert len([r for r in records if r.student_id == a.student_id]) == 1
    assert container.attendance_repo.get_by_student_and_date(a.student_id, DAY).record_id == original.record_id


def test_save_is_idempotent_and_refreshes_recorded_at(container, math_group, roster, monkeypatch):
    session = container.attendance_session(math_group.group_id, DAY)
    session.mark_all_present()
    session.save()
    before = container.attendance_repo.list_by_group_and_date(math_group.group_id, DAY)

    later = datetime(2030, 1, 1, 9, 0)
    monkeypatch.setattr("classroom_attendance.attendance.service.now_local", lambda: later)
    session.save()
    after = container.attendance_repo.list_by_group_and_date(math_group.group_id, DAY)

    assert [(r.record_id, r.status) for r in after] == [(r.record_id, r.status) for r in before]
    assert all(r.recorded_at == later for r in after)


def test_mark_all_present_then_clear_all(container, math_group, roster):
    session = container.attendance_session(math_group.group_id, DAY)

    session.mark_all_present()
    assert session.summary() == AttendanceSummary(present=3, unset=0)

    session.clear_all()
    assert session.summary() == AttendanceSummary(unset=3)


def test_set_status_last_write_wins(container, math_group, roster):
    a = roster[0]
    session = container.attendance_session(math_group.group_id, DAY)
    session.set_status(a.student_id, P)
    session.set_status(a.student_id, AttendanceStatus.EXCUSED)

    assert session.status_of(a.student_id) == AttendanceStatus.EXCUSED
    assert session.summary() == AttendanceSummary(excused=1, unset=2)


def test_change_date_reloads_statuses_for_new_day(container, math_group, roster):
    a = roster[0]
    session = container.attendance_session(math_group.group_id, DAY)
    session.set_status(a.student_id, P)
    session.save()

    session.change_date(DAY + timedelta(days=1))
    assert isinstance(session.state, Success)
    assert session.statuses == {}

    session.change_date(DAY)
    assert session.statuses == {a.student_id: P}


def test_group_without_students_is_empty_and_cannot_save(container, teacher):
    group = container.group_service.create(teacher, name="Empty Room", subject="None")
    session = container.attendance_session(group.group_id, DAY)

    assert session.state == Empty("Empty Room")
    session.mark_all_present()
    assert session.statuses == {}
    assert session.save() == SaveResult(False, "Invalid state")


def test_missing_group_is_an_error(container):
    session = container.attendance_session(404, DAY)
    assert session.state == Error("Group not found")
    assert session.save() == SaveResult(False, "Invalid state")


class ExplodingAttendance:
    def get_group(self, group_id):
        raise RuntimeError("database is locked")


def test_unexpected_load_failure_becomes_error_state():
    session = AttendanceSession(1, DAY, ExplodingAttendance())
    assert session.state == Error("database is locked")


def test_failed_save_reports_message_and_clears_saving_flag(container, math_group, roster, monkeypatch):
    session = container.attendance_session(math_group.group_id, DAY)
    session.mark_all_present()

    def fail(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(container.attendance_service, "save_day", fail)
    result = session.save()

    assert result == SaveResult(False, "disk full")
    assert session.is_saving is False


def test_listeners_see_state_transitions(container, math_group, roster):
    session = AttendanceSession(math_group.group_id, DAY, container.attendance_service, autoload=False)
    states = []
    remove = session.add_listener(lambda s: states.append(type(s.state)))

    session.load()
    saving_flags = []
    session.add_listener(lambda s: saving_flags.append(s.is_saving))
    session.mark_all_present()
    session.save()
    remove()
    session.clear_all()

    assert states[:2] == [Loading, Success]
    assert len(states) == 5
    assert saving_flags == [False, True, False, False]


@pytest.mark.parametrize("status", list(AttendanceStatus))
def test_every_status_round_trips_through_storage(container, math_group, roster, status):
    a = roster[0]
    session = container.attendance_session(math_group.group_id, DAY)
    session.set_status(a.student_id, status)
    session.save()

    assert container.attendance_session(math_group.group_id, DAY).statuses == {a.student_id: status}
