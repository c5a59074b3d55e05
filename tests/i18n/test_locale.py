from __future__ import annotations

from classroom_attendance.core.enums import AttendanceStatus, Language
from classroom_attendance.i18n.locale import (
    is_supported_language,
    language_name,
    resolve_language,
    status_label,
    translate,
)


def test_supported_languages():
    assert all(is_supported_language(code) for code in ("es", "en", "pt"))
    assert not is_supported_language("fr")


def test_language_names():
    assert language_name("es") == "Español"
    assert language_name(Language.ENGLISH) == "English"
    assert language_name("pt") == "Português"


def test_unknown_language_falls_back_to_spanish():
    assert resolve_language("fr") is Language.SPANISH
    assert resolve_language("EN") is Language.ENGLISH


def test_status_labels():
    assert status_label(AttendanceStatus.PRESENT) == "Presente"
    assert status_label(AttendanceStatus.LATE, "en") == "Late"
    assert status_label(AttendanceStatus.EXCUSED, "pt") == "Justificado"
    assert status_label("ABSENT", "es") == "Ausente"


def test_translate_unknown_key_returns_key():
    assert translate("no_such_key", "en") == "no_such_key"
