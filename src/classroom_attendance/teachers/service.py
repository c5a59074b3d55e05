from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.validators import (
    FieldErrors,
    blank_to_none,
    validate_email,
    validate_password,
    validate_person_name,
    validate_phone,
)
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..media.image_store import ImageStore
from .model import Teacher, TeacherSession
from .repository import TeacherRepository

logger = logging.getLogger(__name__)


def _to_session(teacher: Teacher) -> TeacherSession:
    return TeacherSession(teacher_id=teacher.teacher_id, email=teacher.email, full_name=teacher.full_name)


class AuthService:
    """Use case: register and authenticate teachers.

    Passwords are stored and compared as plain strings, matching how
    existing teacher records were created.
    """

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def authenticate(self, email: str, password: str) -> TeacherSession:
        errors = FieldErrors()
        errors.check("email", "Email is required" if not (email or "").strip() else None)
        errors.check("password", "Password is required" if not password else None)
        errors.raise_if_any()

        teacher = self._teachers.get_by_email(email)
        if not teacher or not teacher.is_active:
            raise AuthenticationError("No teacher found with this email")
        if teacher.password != password:
            raise AuthenticationError("Invalid credentials")

        logger.info("Teacher %s signed in", teacher.teacher_id)
        return _to_session(teacher)

    def register(
        self,
        *,
        name: str,
        surname: str,
        email: str,
        password: str,
        confirm_password: str,
        phone: Optional[str] = None,
    ) -> TeacherSession:
        errors = FieldErrors()
        errors.check("name", "Name is required" if not (name or "").strip() else None)
        errors.check("surname", "Surname is required" if not (surname or "").strip() else None)
        errors.check("email", validate_email(email, required=True))
        errors.check("password", validate_password(password))
        if not confirm_password:
            errors.check("confirm_password", "Confirm your password")
        elif password != confirm_password:
            errors.check("confirm_password", "Passwords do not match")
        errors.check("phone", validate_phone(phone))
        errors.raise_if_any()

        if self._teachers.get_by_email(email):
            raise ValidationError("This email is already registered", {"email": "This email is already registered"})

        teacher = Teacher(
            name=name.strip(),
            surname=surname.strip(),
            email=email.strip().lower(),
            password=password,
            phone=blank_to_none(phone),
        )
        teacher_id = self._teachers.insert(teacher)
        logger.info("Registered teacher %s", teacher_id)
        return _to_session(replace(teacher, teacher_id=teacher_id))


class TeacherService:
    """Use case: view and edit the signed-in teacher's profile."""

    def __init__(self, teachers: TeacherRepository, images: Optional[ImageStore] = None):
        self._teachers = teachers
        self._images = images

    def get(self, session: TeacherSession) -> Teacher:
        teacher = self._teachers.get_by_id(session.teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def update_profile(
        self,
        session: TeacherSession,
        *,
        name: str,
        surname: str,
        email: str = "",
        phone: Optional[str] = None,
        current_password: str = "",
        new_password: str = "",
        confirm_new_password: str = "",
    ) -> Teacher:
        teacher = self.get(session)

        errors = FieldErrors()
        errors.check("name", validate_person_name(name, "Name"))
        errors.check("surname", validate_person_name(surname, "Surname"))
        errors.check("email", validate_email(email))
        errors.check("phone", validate_phone(phone))

        password = teacher.password
        if current_password or new_password or confirm_new_password:
            if not current_password:
                errors.check("current_password", "Enter your current password")
            elif current_password != teacher.password:
                errors.check("current_password", "Current password is incorrect")
            if not new_password:
                errors.check("new_password", "Enter a new password")
            else:
                errors.check("new_password", validate_password(new_password))
            if new_password != confirm_new_password:
                errors.check("confirm_new_password", "Passwords do not match")
            password = new_password
        errors.raise_if_any()

        if email and email.strip():
            owner = self._teachers.get_by_email(email)
            if owner and owner.teacher_id != teacher.teacher_id:
                raise ValidationError("This email is already registered", {"email": "This email is already registered"})

        updated = replace(
            teacher,
            name=name.strip(),
            surname=surname.strip(),
            email=email.strip().lower() if email and email.strip() else teacher.email,
            phone=blank_to_none(phone),
            password=password,
        )
        self._teachers.update(updated)
        return updated

    def set_photo(self, session: TeacherSession, source) -> Teacher:
        if self._images is None:
            raise ValidationError("Photo storage is not configured")
        teacher = self.get(session)
        path = self._images.save_image(source)
        if teacher.photo_path:
            self._images.delete_image(teacher.photo_path)
        updated = replace(teacher, photo_path=path)
        self._teachers.update(updated)
        return updated

    def remove_photo(self, session: TeacherSession) -> Teacher:
        teacher = self.get(session)
        if teacher.photo_path and self._images is not None:
            self._images.delete_image(teacher.photo_path)
        updated = replace(teacher, photo_path=None)
        self._teachers.update(updated)
        return updated

    def deactivate(self, session: TeacherSession) -> None:
        if not self._teachers.deactivate(session.teacher_id):
            raise NotFoundError("Teacher not found")
