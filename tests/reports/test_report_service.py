from __future__ import annotations

from datetime import date

import pytest

from classroom_attendance.core.enums import AttendanceStatus
from classroom_attendance.core.exceptions import NotFoundError, ValidationError
from classroom_attendance.reports.service import ReportSession

D1, D2 = date(2024, 3, 4), date(2024, 3, 5)
P, A = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT


@pytest.fixture
def pair_group(container, teacher):
    group = container.group_service.create(teacher, name="Physics", subject="Science")
    a = container.student_service.create(group_id=group.group_id, name="Ana", surname="Arce", code="P-001")
    b = container.student_service.create(group_id=group.group_id, name="Beto", surname="Bravo", code="P-002")
    container.attendance_service.save_day(group.group_id, D1, {a.student_id: P, b.student_id: A})
    container.attendance_service.save_day(group.group_id, D2, {a.student_id: A, b.student_id: P})
    return group


def test_two_day_report_splits_evenly(container, pair_group):
    report = container.report_service.group_report(pair_group.group_id, D1, D2)

    assert report.total_students == 2
    assert report.recorded_days == 2
    assert report.total_records == 4
    assert (report.present, report.absent, report.late, report.excused) == (2, 2, 0, 0)
    assert report.present_pct == pytest.approx(50.0)
    assert report.absent_pct == pytest.approx(50.0)
    assert report.late_pct == 0.0
    assert report.overall_attendance == pytest.approx(50.0)


def test_overall_attendance_uses_every_student_and_recorded_day(container, math_group, roster):
    a = roster[0]
    container.attendance_service.save_day(math_group.group_id, D1, {a.student_id: P})

    report = container.report_service.group_report(math_group.group_id, D1, D2)

    assert report.present_pct == pytest.approx(100.0)
    assert report.overall_attendance == pytest.approx(100 / 3)


def test_report_with_no_records_is_all_zero(container, math_group, roster):
    report = container.report_service.group_report(math_group.group_id, D1, D2)

    assert report.total_records == 0
    assert report.recorded_days == 0
    assert report.present_pct == 0.0
    assert report.overall_attendance == 0.0


def test_inverted_range_yields_empty_report(container, pair_group):
    report = container.report_service.group_report(pair_group.group_id, D2, D1)

    assert (report.start, report.end) == (D2, D1)
    assert report.total_records == 0
    assert report.recorded_days == 0
    assert report.present_pct == 0.0
    assert report.overall_attendance == 0.0
    assert container.report_service.student_report(
        container.student_service.search("P-001")[0].student_id, D2, D1
    ).total == 0


def test_everyone_present_one_day_and_absent_the_next(container, teacher):
    group = container.group_service.create(teacher, name="Chemistry", subject="Science")
    a = container.student_service.create(group_id=group.group_id, name="Ana", surname="Arce", code="Q-001")
    b = container.student_service.create(group_id=group.group_id, name="Beto", surname="Bravo", code="Q-002")
    container.attendance_service.save_day(group.group_id, D1, {a.student_id: P, b.student_id: P})
    container.attendance_service.save_day(group.group_id, D2, {a.student_id: A, b.student_id: A})

    report = container.report_service.group_report(group.group_id, D1, D2)

    assert (report.total_records, report.present, report.absent) == (4, 2, 2)
    assert report.present_pct == pytest.approx(50.0)
    assert report.absent_pct == pytest.approx(50.0)
    assert report.overall_attendance == pytest.approx(50.0)


def test_student_report(container, pair_group):
    a = container.student_service.search("P-001")[0]
    stats = container.report_service.student_report(a.student_id, D1, D2)

    assert (stats.total, stats.present, stats.absent) == (2, 1, 1)
    assert stats.percentage == pytest.approx(50.0)


def test_export_data_groups_records_by_student(container, pair_group):
    data = container.report_service.export_data(pair_group.group_id, D1, D2)

    assert [s.code for s in data.students] == ["P-001", "P-002"]
    assert {sid: len(records) for sid, records in data.records_by_student.items()} == {
        data.students[0].student_id: 2,
        data.students[1].student_id: 2,
    }
    assert data.totals().total == 4


def test_export_data_errors(container, teacher):
    with pytest.raises(NotFoundError, match="Group not found"):
        container.report_service.export_data(999, D1, D2)

    empty = container.group_service.create(teacher, name="Empty Room", subject="None")
    with pytest.raises(ValidationError, match="The group has no students"):
        container.report_service.export_data(empty.group_id, D1, D2)


def test_report_session_moves_other_endpoint_when_range_inverts(container, teacher, pair_group):
    session = container.report_session(teacher, day=D1)
    assert session.selected_group_id == pair_group.group_id
    assert session.report.total_records == 2

    session.set_end_date(date(2024, 3, 1))
    assert (session.start_date, session.end_date) == (date(2024, 3, 1), date(2024, 3, 1))

    session.set_start_date(D2)
    assert (session.start_date, session.end_date) == (D2, D2)
    assert session.report.total_records == 2
    assert session.is_loading is False


class BrokenReports:
    def group_report(self, group_id, start, end):
        raise RuntimeError("boom")


def test_report_session_yields_none_when_aggregation_fails():
    session = ReportSession(BrokenReports(), day=D1)
    session.selected_group_id = 1

    assert session.generate() is None
    assert session.report is None
    assert session.is_loading is False


def test_report_session_export_requires_group(container):
    session = ReportSession(container.report_service, day=D1)
    with pytest.raises(ValidationError, match="Select a group"):
        session.export(container.pdf_exporter)
