from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from ...core.constants import EXCEL_MIME_TYPE
from ..model import GroupExportData, StudentExportData
from .base import ReportExporter

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(fill_type="solid", start_color="1F3864", end_color="1F3864")
_BOLD = Font(bold=True)
_TITLE_FONT = Font(bold=True, size=16)


def _pairs_frame(pairs: Sequence[Tuple[str, str]]) -> pd.DataFrame:
    return pd.DataFrame(list(pairs), columns=["label", "value"])


def _autosize(ws) -> None:
    widths = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
    for column, width in widths.items():
        ws.column_dimensions[get_column_letter(column)].width = min(width + 2, 60)


class ExcelReportExporter(ReportExporter):
    """xlsx reports through pandas with the openpyxl engine."""

    extension = "xlsx"
    mime_type = EXCEL_MIME_TYPE

    def _write_sheet(
        self,
        writer: pd.ExcelWriter,
        sheet: str,
        title: str,
        info: List[Tuple[str, str]],
        header: list,
        rows: Sequence[list],
        stats_title: str,
        stats: List[Tuple[str, str]],
    ) -> None:
        # Layout: title, blank, info rows, blank, table, blank, statistics.
        info_row = 2
        table_row = info_row + len(info) + 1
        stats_row = table_row + len(rows) + 2

        pd.DataFrame([[title]]).to_excel(writer, sheet_name=sheet, index=False, header=False, startrow=0)
        _pairs_frame(info).to_excel(writer, sheet_name=sheet, index=False, header=False, startrow=info_row)
        pd.DataFrame(list(rows), columns=header).to_excel(writer, sheet_name=sheet, index=False, startrow=table_row)
        pd.DataFrame([[stats_title]]).to_excel(writer, sheet_name=sheet, index=False, header=False, startrow=stats_row)
        _pairs_frame(stats).to_excel(writer, sheet_name=sheet, index=False, header=False, startrow=stats_row + 1)

        ws = writer.sheets[sheet]
        ws.cell(row=1, column=1).font = _TITLE_FONT
        for offset in range(len(info)):
            ws.cell(row=info_row + 1 + offset, column=1).font = _BOLD
        for column in range(1, len(header) + 1):
            cell = ws.cell(row=table_row + 1, column=column)
            cell.font = _HEADER_FONT
            cell.fill = _HEADER_FILL
        for offset in range(len(stats) + 1):
            ws.cell(row=stats_row + 1 + offset, column=1).font = _BOLD
        _autosize(ws)

    def export_group(self, data: GroupExportData) -> Path:
        path = self.group_path(data)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            self._write_sheet(
                writer,
                self._t("sheet_group"),
                self._t("group_report_title"),
                self.group_info(data),
                self.group_header(),
                self.group_rows(data),
                self._t("general_statistics"),
                self.group_statistics(data),
            )
        return path

    def export_student(self, data: StudentExportData) -> Path:
        path = self.student_path(data)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            self._write_sheet(
                writer,
                self._t("sheet_student"),
                self._t("student_report_title"),
                self.student_info(data),
                self.student_header(),
                self.student_rows(data),
                self._t("statistics"),
                self.student_statistics(data),
            )
        return path
