from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence, Tuple

from werkzeug.utils import secure_filename

from ...common.datetime_utils import format_date, now_local
from ...i18n.locale import DEFAULT_LANGUAGE, LanguageLike, resolve_language, status_label, translate
from ..model import GroupExportData, StudentExportData

Row = List[object]


class ReportExporter(ABC):
    """Writes group and student attendance reports into ``output_dir``.

    File names follow ``reporte_grupo_<id>_<millis>.<ext>`` and
    ``reporte_<code>_<millis>.<ext>``.
    """

    extension: str = ""
    mime_type: str = ""

    def __init__(self, output_dir: str | Path, *, language: LanguageLike = DEFAULT_LANGUAGE):
        self.output_dir = Path(output_dir)
        self.language = resolve_language(language)

    @abstractmethod
    def export_group(self, data: GroupExportData) -> Path:
        raise NotImplementedError

    @abstractmethod
    def export_student(self, data: StudentExportData) -> Path:
        raise NotImplementedError

    def _t(self, key: str) -> str:
        return translate(key, self.language)

    def _target(self, stem: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        millis = int(now_local().timestamp() * 1000)
        return self.output_dir / f"{stem}_{millis}.{self.extension}"

    def group_path(self, data: GroupExportData) -> Path:
        return self._target(f"reporte_grupo_{data.group.group_id}")

    def student_path(self, data: StudentExportData) -> Path:
        return self._target(f"reporte_{secure_filename(data.student.code) or data.student.student_id}")

    # ---- table content shared by every format ------------------------------

    def _period(self, start, end) -> str:
        return f"{format_date(start)} - {format_date(end)}"

    def group_info(self, data: GroupExportData) -> List[Tuple[str, str]]:
        return [
            (f"{self._t('group')}:", data.group.name),
            (f"{self._t('subject')}:", data.group.subject),
            (f"{self._t('schedule')}:", data.group.schedule or self._t("not_available")),
            (f"{self._t('period')}:", self._period(data.start, data.end)),
        ]

    def group_header(self) -> Row:
        keys = ("number", "student", "code", "total", "present_plural", "absent_plural", "late_plural", "percentage")
        return [self._t(k) for k in keys]

    def group_rows(self, data: GroupExportData) -> Sequence[Row]:
        rows: List[Row] = []
        for index, student in enumerate(data.students, start=1):
            stats = data.stats_for(student.student_id)
            rows.append(
                [
                    index,
                    student.full_name,
                    student.code,
                    stats.total,
                    stats.present,
                    stats.absent,
                    stats.late,
                    f"{stats.percentage:.1f}%",
                ]
            )
        return rows

    def group_statistics(self, data: GroupExportData) -> List[Tuple[str, str]]:
        totals = data.totals()
        return [
            (f"{self._t('total_students')}:", str(len(data.students))),
            (f"{self._t('total_records')}:", str(totals.total)),
            (f"{self._t('total_present')}:", str(totals.present)),
            (f"{self._t('total_absent')}:", str(totals.absent)),
            (f"{self._t('average_percentage')}:", f"{totals.percentage:.2f}%"),
        ]

    def student_info(self, data: StudentExportData) -> List[Tuple[str, str]]:
        return [
            (f"{self._t('student')}:", data.student.full_name),
            (f"{self._t('code')}:", data.student.code),
            (f"{self._t('group')}:", data.group.name),
            (f"{self._t('subject')}:", data.group.subject),
            (f"{self._t('period')}:", self._period(data.start, data.end)),
        ]

    def student_header(self) -> Row:
        return [self._t(k) for k in ("number", "date", "status", "notes")]

    def student_rows(self, data: StudentExportData) -> Sequence[Row]:
        return [
            [index, format_date(record.record_date), status_label(record.status, self.language), record.notes or "-"]
            for index, record in enumerate(data.records, start=1)
        ]

    def student_statistics(self, data: StudentExportData) -> List[Tuple[str, str]]:
        stats = data.stats
        return [
            (f"{self._t('total_classes')}:", str(stats.total)),
            (f"{self._t('present_plural')}:", str(stats.present)),
            (f"{self._t('absent_plural')}:", str(stats.absent)),
            (f"{self._t('late_plural')}:", str(stats.late)),
            (f"{self._t('excused_plural')}:", str(stats.excused)),
            (f"{self._t('attendance_percentage')}:", f"{stats.percentage:.2f}%"),
        ]
