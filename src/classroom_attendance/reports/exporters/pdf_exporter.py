from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ...attendance.presentation import style_for
from ...common.datetime_utils import format_date, now_local
from ...core.constants import DATE_TIME_FORMAT, PDF_MIME_TYPE
from ..model import GroupExportData, StudentExportData
from .base import ReportExporter


def _info_table(pairs: Sequence[Tuple[str, str]]) -> Table:
    table = Table([list(p) for p in pairs], colWidths=[140, 300], hAlign="LEFT")
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return table


def _data_table(header: list, rows: Sequence[list], col_widths: List[int]) -> Table:
    table = Table([header] + [[str(v) for v in row] for row in rows], colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.darkblue),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ]
        )
    )
    return table


class PdfReportExporter(ReportExporter):
    """PDF reports built from reportlab platypus tables."""

    extension = "pdf"
    mime_type = PDF_MIME_TYPE

    def __init__(self, output_dir, **kwargs):
        super().__init__(output_dir, **kwargs)
        styles = getSampleStyleSheet()
        self._styles = styles
        self._title_style = ParagraphStyle(
            "ReportTitle",
            parent=styles["Heading1"],
            fontSize=18,
            alignment=TA_CENTER,
            textColor=colors.darkblue,
            spaceAfter=12,
        )

    def _build(self, path: Path, story: list) -> Path:
        story.append(Spacer(1, 20))
        story.append(Paragraph(format_date(now_local(), DATE_TIME_FORMAT), self._styles["Normal"]))
        SimpleDocTemplate(str(path), pagesize=A4, title=path.stem).build(story)
        return path

    def export_group(self, data: GroupExportData) -> Path:
        path = self.group_path(data)
        header = self.group_header()
        header[-1] = "%"
        story = [
            Paragraph(self._t("group_report_title"), self._title_style),
            _info_table(self.group_info(data)),
            Spacer(1, 16),
            _data_table(header, self.group_rows(data), [28, 150, 70, 45, 60, 60, 60, 45]),
            Spacer(1, 16),
            Paragraph(self._t("general_statistics"), self._styles["Heading2"]),
            _info_table(self.group_statistics(data)),
        ]
        return self._build(path, story)

    def export_student(self, data: StudentExportData) -> Path:
        path = self.student_path(data)
        table = _data_table(self.student_header(), self.student_rows(data), [30, 100, 100, 220])
        # Status cells take the status background color.
        for offset, record in enumerate(data.records, start=1):
            table.setStyle(
                TableStyle([("BACKGROUND", (2, offset), (2, offset), colors.HexColor(style_for(record.status).background))])
            )
        story = [
            Paragraph(self._t("student_report_title"), self._title_style),
            _info_table(self.student_info(data)),
            Spacer(1, 16),
            table,
            Spacer(1, 16),
            Paragraph(self._t("statistics"), self._styles["Heading2"]),
            _info_table(self.student_statistics(data)),
        ]
        return self._build(path, story)
