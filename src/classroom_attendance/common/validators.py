"""Form validation rules.

Each ``validate_*`` function returns an error message, or ``None`` when the
value is acceptable. ``FieldErrors`` collects them per field so a service
can reject the whole form before touching storage.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from ..core.constants import (
    MAX_CODE_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_PHONE_DIGITS,
    MAX_SCHEDULE_LENGTH,
    MIN_CODE_LENGTH,
    MIN_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_PHONE_DIGITS,
)
from ..core.exceptions import ValidationError

_LETTERS_RE = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s]+$")
_CODE_RE = re.compile(r"^[a-zA-Z0-9-]+$")
_EMAIL_RE = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_PHONE_RE = re.compile(r"^[0-9-]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", {field_name: f"{field_name} is required"})
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        message = f"{field_name} must have at least {min_len} characters"
        raise ValidationError(message, {field_name: message})
    return value


def _length_error(value: str, label: str, min_len: int, max_len: int) -> Optional[str]:
    if len(value) < min_len:
        return f"{label} must have at least {min_len} characters"
    if len(value) > max_len:
        return f"{label} cannot exceed {max_len} characters"
    return None


def validate_group_name(name: str) -> Optional[str]:
    if not name or not name.strip():
        return "Group name is required"
    return _length_error(name.strip(), "Name", MIN_NAME_LENGTH, MAX_NAME_LENGTH)


def validate_subject(subject: str) -> Optional[str]:
    if not subject or not subject.strip():
        return "Subject is required"
    return _length_error(subject.strip(), "Subject", MIN_NAME_LENGTH, MAX_NAME_LENGTH)


def validate_person_name(value: str, label: str = "Name") -> Optional[str]:
    if not value or not value.strip():
        return f"{label} is required"
    value = value.strip()
    error = _length_error(value, label, MIN_NAME_LENGTH, MAX_NAME_LENGTH)
    if error:
        return error
    if not _LETTERS_RE.match(value):
        return f"{label} must contain only letters"
    return None


def validate_student_code(code: str) -> Optional[str]:
    if not code or not code.strip():
        return "Code is required"
    code = code.strip()
    error = _length_error(code, "Code", MIN_CODE_LENGTH, MAX_CODE_LENGTH)
    if error:
        return error
    if not _CODE_RE.match(code):
        return "Code must be alphanumeric"
    return None


def validate_email(email: Optional[str], *, required: bool = False) -> Optional[str]:
    if not email or not email.strip():
        return "Email is required" if required else None
    if not _EMAIL_RE.match(email.strip()):
        return "Invalid email"
    return None


def validate_phone(phone: Optional[str]) -> Optional[str]:
    if not phone or not phone.strip():
        return None
    phone = phone.strip()
    if not _PHONE_RE.match(phone):
        return "Phone must contain only digits and dashes"
    digits = len(phone.replace("-", ""))
    if digits < MIN_PHONE_DIGITS:
        return f"Phone must have at least {MIN_PHONE_DIGITS} digits"
    if digits > MAX_PHONE_DIGITS:
        return f"Phone cannot exceed {MAX_PHONE_DIGITS} digits"
    return None


def validate_password(password: Optional[str]) -> Optional[str]:
    if not password:
        return "Password is required"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must have at least {MIN_PASSWORD_LENGTH} characters"
    return None


def validate_max_length(value: Optional[str], label: str, max_len: int) -> Optional[str]:
    if value and len(value.strip()) > max_len:
        return f"{label} cannot exceed {max_len} characters"
    return None


def validate_schedule(schedule: Optional[str]) -> Optional[str]:
    return validate_max_length(schedule, "Schedule", MAX_SCHEDULE_LENGTH)


def validate_description(description: Optional[str]) -> Optional[str]:
    return validate_max_length(description, "Description", MAX_DESCRIPTION_LENGTH)


def validate_notes(notes: Optional[str]) -> Optional[str]:
    return validate_max_length(notes, "Notes", MAX_NOTES_LENGTH)


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class FieldErrors:
    """Collects per-field messages and raises them together."""

    def __init__(self) -> None:
        self._errors: Dict[str, str] = {}

    def check(self, field: str, message: Optional[str]) -> None:
        if message and field not in self._errors:
            self._errors[field] = message

    def __bool__(self) -> bool:
        return bool(self._errors)

    def raise_if_any(self) -> None:
        if self._errors:
            first = next(iter(self._errors.values()))
            raise ValidationError(first, self._errors)
