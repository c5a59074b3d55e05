from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import FieldErrors, blank_to_none, validate_email, validate_person_name, validate_student_code
from ..core.exceptions import NotFoundError
from ..database.notifier import LiveQuery
from ..groups.repository import GroupRepository
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: manage a group's roster."""

    def __init__(self, students: StudentRepository, groups: GroupRepository):
        self._students = students
        self._groups = groups

    def _validate(self, *, name: str, surname: str, code: str, email: Optional[str]) -> None:
        errors = FieldErrors()
        errors.check("name", validate_person_name(name, "Name"))
        errors.check("surname", validate_person_name(surname, "Surname"))
        errors.check("code", validate_student_code(code))
        errors.check("email", validate_email(email))
        errors.raise_if_any()

    def _require_group(self, group_id: int) -> None:
        if not self._groups.get_by_id(group_id):
            raise NotFoundError("Group not found")

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create(self, *, group_id: int, name: str, surname: str, code: str, email: Optional[str] = None) -> Student:
        """Add a student to a group.

        A code already used by any student (in any group) raises
        ``DuplicateCodeError`` from the store and nothing is written.
        """
        self._validate(name=name, surname=surname, code=code, email=email)
        self._require_group(group_id)

        student = Student(
            name=name.strip(),
            surname=surname.strip(),
            code=code.strip(),
            email=blank_to_none(email),
            group_id=int(group_id),
        )
        student_id = self._students.insert(student)
        logger.info("Added student %s to group %s", student_id, group_id)
        return replace(student, student_id=student_id)

    def update(self, student_id: int, *, name: str, surname: str, code: str, email: Optional[str] = None) -> Student:
        self._validate(name=name, surname=surname, code=code, email=email)
        existing = self.get(student_id)

        updated = replace(
            existing,
            name=name.strip(),
            surname=surname.strip(),
            code=code.strip(),
            email=blank_to_none(email),
        )
        self._students.update(updated)
        return updated

    def deactivate(self, student_id: int) -> None:
        if not self._students.deactivate(student_id):
            raise NotFoundError("Student not found")

    def delete(self, student_id: int) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError("Student not found")

    def transfer(self, student_id: int, new_group_id: int) -> Student:
        self.get(student_id)
        self._require_group(new_group_id)
        self._students.transfer(student_id, new_group_id)
        logger.info("Transferred student %s to group %s", student_id, new_group_id)
        return self.get(student_id)

    def roster(self, group_id: int) -> Sequence[Student]:
        return self._students.list_by_group(group_id)

    def watch_roster(self, group_id: int) -> LiveQuery[Sequence[Student]]:
        return self._students.watch_by_group(group_id)

    def search(self, query: str) -> Sequence[Student]:
        if not query or not query.strip():
            return self._students.list_active()
        return self._students.search(query)

    def count_active(self) -> int:
        return self._students.count_active()
