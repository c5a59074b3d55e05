from __future__ import annotations

from datetime import date

import pytest
from openpyxl import load_workbook

from classroom_attendance.core.enums import AttendanceStatus
from classroom_attendance.reports.exporters.excel_exporter import ExcelReportExporter
from classroom_attendance.reports.exporters.pdf_exporter import PdfReportExporter

D1, D2 = date(2024, 3, 4), date(2024, 3, 5)


@pytest.fixture
def recorded(container, math_group, roster):
    a, b, c = roster
    svc = container.attendance_service
    svc.save_day(math_group.group_id, D1, {a.student_id: AttendanceStatus.PRESENT, b.student_id: AttendanceStatus.ABSENT})
    svc.save_day(math_group.group_id, D2, {a.student_id: AttendanceStatus.LATE, b.student_id: AttendanceStatus.PRESENT})
    return math_group


def _cell_values(path):
    wb = load_workbook(path)
    values = set()
    for ws in wb.worksheets:
        for row in ws.iter_rows(values_only=True):
            values.update(v for v in row if v is not None)
    return wb.sheetnames, values


def test_excel_group_report(container, recorded, tmp_path):
    path = container.report_service.export_group(container.excel_exporter, recorded.group_id, D1, D2)

    assert path.parent == tmp_path / "reportes"
    assert path.name.startswith(f"reporte_grupo_{recorded.group_id}_")
    assert path.suffix == ".xlsx"

    sheets, values = _cell_values(path)
    assert sheets == ["Asistencia Grupo"]
    assert "REPORTE DE ASISTENCIA DEL GRUPO" in values
    assert {"Ana Alvarez", "A-001", "C-003", "Porcentaje", "50.0%", "0.0%"} <= values
    assert "04/03/2024 - 05/03/2024" in values


def test_excel_student_report_in_english(container, recorded, roster, tmp_path):
    exporter = ExcelReportExporter(tmp_path / "out", language="en")
    path = container.report_service.export_student(exporter, roster[0].student_id, D1, D2)

    assert path.name.startswith("reporte_A-001_")
    sheets, values = _cell_values(path)
    assert sheets == ["Attendance"]
    assert {"ATTENDANCE REPORT", "Present", "Late", "04/03/2024", "50.00%"} <= values


def test_pdf_reports_are_written(container, recorded, roster, tmp_path):
    exporter = PdfReportExporter(tmp_path / "pdf")

    group_pdf = container.report_service.export_group(exporter, recorded.group_id, D1, D2)
    student_pdf = container.report_service.export_student(exporter, roster[1].student_id, D1, D2)

    for path in (group_pdf, student_pdf):
        assert path.suffix == ".pdf"
        assert path.read_bytes().startswith(b"%PDF")
    assert student_pdf.name.startswith("reporte_B-002_")


def test_exporter_lookup_by_format(container):
    assert container.exporter_for("xlsx") is container.excel_exporter
    assert container.exporter_for("PDF") is container.pdf_exporter
    with pytest.raises(ValueError):
        container.exporter_for("csv")
