from __future__ import annotations

from datetime import date

import pytest

from classroom_attendance.attendance.presentation import STATUS_STYLES, style_for
from classroom_attendance.core.enums import AttendanceStatus
from classroom_attendance.core.exceptions import ValidationError

D1, D2, D3 = date(2024, 3, 4), date(2024, 3, 5), date(2024, 3, 6)


def test_percentage_is_zero_without_records(container, roster):
    assert container.attendance_service.attendance_percentage(roster[0].student_id, D1, D3) == 0.0


def test_percentage_counts_present_over_all_records_in_range(container, math_group, roster):
    svc = container.attendance_service
    a = roster[0]
    svc.record(student_id=a.student_id, group_id=math_group.group_id, day=D1, status=AttendanceStatus.PRESENT)
    svc.record(student_id=a.student_id, group_id=math_group.group_id, day=D2, status=AttendanceStatus.LATE)
    svc.record(student_id=a.student_id, group_id=math_group.group_id, day=D3, status=AttendanceStatus.PRESENT)
    svc.record(student_id=a.student_id, group_id=math_group.group_id, day=date(2024, 4, 1), status=AttendanceStatus.ABSENT)

    assert svc.attendance_percentage(a.student_id, D1, D3) == pytest.approx(200 / 3)
    assert svc.attendance_percentage(a.student_id, D3, D1) == pytest.approx(200 / 3)
    assert svc.attendance_percentage(a.student_id, D2, D2) == 0.0


def test_inverted_range_matches_no_records(container, math_group, roster):
    a = roster[0]
    container.attendance_service.record(
        student_id=a.student_id, group_id=math_group.group_id, day=D1, status=AttendanceStatus.PRESENT
    )

    assert container.attendance_service.attendance_percentage(a.student_id, D1, D2) == 100.0
    assert container.attendance_service.attendance_percentage(a.student_id, D2, D1) == 0.0


def test_watch_day_follows_saves_and_clears(container, math_group, roster):
    a, b, _ = roster
    seen = []
    unsubscribe = container.attendance_service.watch_day(math_group.group_id, D1).subscribe(seen.append)
    assert seen == [[]]

    container.attendance_service.save_day(math_group.group_id, D1, {a.student_id: AttendanceStatus.PRESENT})
    container.attendance_service.save_day(math_group.group_id, D2, {b.student_id: AttendanceStatus.ABSENT})
    assert [(r.student_id, r.status) for r in seen[-1]] == [(a.student_id, AttendanceStatus.PRESENT)]
    assert len(seen) == 2

    container.attendance_service.clear_day(math_group.group_id, D1)
    assert seen[-1] == []
    unsubscribe()


def test_record_keeps_notes_unless_replaced(container, math_group, roster):
    svc = container.attendance_service
    a = roster[0]
    first = svc.record(student_id=a.student_id, group_id=math_group.group_id, day=D1, status=AttendanceStatus.EXCUSED, notes="Medical")
    second = svc.record(student_id=a.student_id, group_id=math_group.group_id, day=D1, status=AttendanceStatus.LATE)

    assert second.record_id == first.record_id
    assert second.notes == "Medical"
    assert svc.history(a.student_id)[0].status == AttendanceStatus.LATE


def test_record_rejects_long_notes(container, math_group, roster):
    with pytest.raises(ValidationError):
        container.attendance_service.record(
            student_id=roster[0].student_id,
            group_id=math_group.group_id,
            day=D1,
            status=AttendanceStatus.PRESENT,
            notes="x" * 201,
        )


def test_save_day_skips_unmarked_and_foreign_students(container, math_group, roster):
    a, b, c = roster
    written = container.attendance_service.save_day(
        math_group.group_id,
        D1,
        {a.student_id: AttendanceStatus.PRESENT, 9999: AttendanceStatus.ABSENT},
    )

    assert written == 1
    assert container.attendance_service.statuses_for_day(math_group.group_id, D1) == {a.student_id: AttendanceStatus.PRESENT}


def test_clear_day_removes_only_that_day(container, math_group, roster):
    svc = container.attendance_service
    svc.save_day(math_group.group_id, D1, {s.student_id: AttendanceStatus.PRESENT for s in roster})
    svc.save_day(math_group.group_id, D2, {s.student_id: AttendanceStatus.ABSENT for s in roster})

    assert svc.clear_day(math_group.group_id, D1) == 3
    assert svc.recorded_days(math_group.group_id) == [D2]


def test_every_status_has_a_presentation_style():
    assert set(STATUS_STYLES) == set(AttendanceStatus)
    assert style_for(AttendanceStatus.PRESENT).color == "#4CAF50"
    assert style_for("LATE").short == "T"
