"""Language codes and UI/report label lookup.

Labels are display-only; stored data always uses the enum values.
"""

from __future__ import annotations

from typing import Dict, Union

from ..core.enums import AttendanceStatus, Language

DEFAULT_LANGUAGE = Language.SPANISH

LANGUAGE_NAMES: Dict[Language, str] = {
    Language.SPANISH: "Español",
    Language.ENGLISH: "English",
    Language.PORTUGUESE: "Português",
}

STATUS_KEYS: Dict[AttendanceStatus, str] = {
    AttendanceStatus.PRESENT: "status_present",
    AttendanceStatus.ABSENT: "status_absent",
    AttendanceStatus.LATE: "status_late",
    AttendanceStatus.EXCUSED: "status_excused",
}

_MESSAGES: Dict[Language, Dict[str, str]] = {
    Language.SPANISH: {
        "status_present": "Presente",
        "status_absent": "Ausente",
        "status_late": "Tardanza",
        "status_excused": "Justificado",
        "student_report_title": "REPORTE DE ASISTENCIA",
        "group_report_title": "REPORTE DE ASISTENCIA DEL GRUPO",
        "statistics": "ESTADÍSTICAS",
        "general_statistics": "ESTADÍSTICAS GENERALES",
        "student": "Estudiante",
        "code": "Código",
        "group": "Grupo",
        "subject": "Materia",
        "schedule": "Horario",
        "period": "Período",
        "number": "N°",
        "date": "Fecha",
        "status": "Estado",
        "notes": "Notas",
        "total": "Total",
        "present_plural": "Presentes",
        "absent_plural": "Ausentes",
        "late_plural": "Tardanzas",
        "excused_plural": "Justificados",
        "percentage": "Porcentaje",
        "total_classes": "Total de clases",
        "attendance_percentage": "Porcentaje de asistencia",
        "total_students": "Total de estudiantes",
        "total_records": "Total de registros",
        "total_present": "Total presentes",
        "total_absent": "Total ausentes",
        "average_percentage": "Porcentaje promedio",
        "sheet_group": "Asistencia Grupo",
        "sheet_student": "Asistencia",
        "sheet_statistics": "Estadísticas",
        "not_available": "N/A",
    },
    Language.ENGLISH: {
        "status_present": "Present",
        "status_absent": "Absent",
        "status_late": "Late",
        "status_excused": "Excused",
        "student_report_title": "ATTENDANCE REPORT",
        "group_report_title": "GROUP ATTENDANCE REPORT",
        "statistics": "STATISTICS",
        "general_statistics": "GENERAL STATISTICS",
        "student": "Student",
        "code": "Code",
        "group": "Group",
        "subject": "Subject",
        "schedule": "Schedule",
        "period": "Period",
        "number": "No.",
        "date": "Date",
        "status": "Status",
        "notes": "Notes",
        "total": "Total",
        "present_plural": "Present",
        "absent_plural": "Absent",
        "late_plural": "Late",
        "excused_plural": "Excused",
        "percentage": "Percentage",
        "total_classes": "Total classes",
        "attendance_percentage": "Attendance percentage",
        "total_students": "Total students",
        "total_records": "Total records",
        "total_present": "Total present",
        "total_absent": "Total absent",
        "average_percentage": "Average percentage",
        "sheet_group": "Group Attendance",
        "sheet_student": "Attendance",
        "sheet_statistics": "Statistics",
        "not_available": "N/A",
    },
    Language.PORTUGUESE: {
        "status_present": "Presente",
        "status_absent": "Ausente",
        "status_late": "Atraso",
        "status_excused": "Justificado",
        "student_report_title": "RELATÓRIO DE FREQUÊNCIA",
        "group_report_title": "RELATÓRIO DE FREQUÊNCIA DO GRUPO",
        "statistics": "ESTATÍSTICAS",
        "general_statistics": "ESTATÍSTICAS GERAIS",
        "student": "Estudante",
        "code": "Código",
        "group": "Grupo",
        "subject": "Disciplina",
        "schedule": "Horário",
        "period": "Período",
        "number": "N°",
        "date": "Data",
        "status": "Situação",
        "notes": "Notas",
        "total": "Total",
        "present_plural": "Presentes",
        "absent_plural": "Ausentes",
        "late_plural": "Atrasos",
        "excused_plural": "Justificados",
        "percentage": "Porcentagem",
        "total_classes": "Total de aulas",
        "attendance_percentage": "Porcentagem de frequência",
        "total_students": "Total de estudantes",
        "total_records": "Total de registros",
        "total_present": "Total presentes",
        "total_absent": "Total ausentes",
        "average_percentage": "Porcentagem média",
        "sheet_group": "Frequência Grupo",
        "sheet_student": "Frequência",
        "sheet_statistics": "Estatísticas",
        "not_available": "N/D",
    },
}

LanguageLike = Union[Language, str]


def is_supported_language(code: str) -> bool:
    return code in {lang.value for lang in Language}


def resolve_language(code: LanguageLike) -> Language:
    """Map a language code to ``Language``, falling back to Spanish."""
    if isinstance(code, Language):
        return code
    if code and is_supported_language(code.lower()):
        return Language(code.lower())
    return DEFAULT_LANGUAGE


def language_name(code: LanguageLike) -> str:
    return LANGUAGE_NAMES[resolve_language(code)]


def translate(key: str, language: LanguageLike = DEFAULT_LANGUAGE) -> str:
    messages = _MESSAGES[resolve_language(language)]
    return messages.get(key, _MESSAGES[DEFAULT_LANGUAGE].get(key, key))


def status_label(status: AttendanceStatus, language: LanguageLike = DEFAULT_LANGUAGE) -> str:
    return translate(STATUS_KEYS[AttendanceStatus(status)], language)
