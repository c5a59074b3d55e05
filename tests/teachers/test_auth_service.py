from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from classroom_attendance.core.exceptions import AuthenticationError, ValidationError
from classroom_attendance.teachers.model import Teacher, TeacherSession
from classroom_attendance.teachers.service import AuthService, TeacherService


class InMemoryTeachers:
    def __init__(self):
        self._by_id: dict[int, Teacher] = {}
        self._next_id = 1

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self._by_id.get(int(teacher_id))

    def get_by_email(self, email: str) -> Optional[Teacher]:
        for t in self._by_id.values():
            if t.email.lower() == email.strip().lower():
                return t
        return None

    def insert(self, teacher: Teacher) -> int:
        tid = teacher.teacher_id or self._next_id
        self._next_id = max(self._next_id, tid) + 1
        self._by_id[tid] = replace(teacher, teacher_id=tid)
        return tid

    def update(self, teacher: Teacher) -> bool:
        if teacher.teacher_id not in self._by_id:
            return False
        self._by_id[teacher.teacher_id] = teacher
        return True

    def deactivate(self, teacher_id: int) -> bool:
        t = self._by_id.get(teacher_id)
        if not t:
            return False
        self._by_id[teacher_id] = replace(t, is_active=False)
        return True


def _register(auth: AuthService, **overrides) -> TeacherSession:
    data = dict(
        name="Lucía",
        surname="Ortega",
        email="Lucia.Ortega@School.edu",
        password="1234",
        confirm_password="1234",
        phone="7890-1234",
    )
    data.update(overrides)
    return auth.register(**data)


def test_register_stores_email_lowercased():
    repo = InMemoryTeachers()
    session = _register(AuthService(repo))

    stored = repo.get_by_id(session.teacher_id)
    assert stored.email == "lucia.ortega@school.edu"
    assert session.full_name == "Lucía Ortega"


def test_register_rejects_duplicate_email_case_insensitively():
    repo = InMemoryTeachers()
    auth = AuthService(repo)
    _register(auth)

    with pytest.raises(ValidationError) as exc:
        _register(auth, email="LUCIA.ORTEGA@school.edu")
    assert exc.value.errors == {"email": "This email is already registered"}


def test_register_validates_password_and_confirmation():
    auth = AuthService(InMemoryTeachers())

    with pytest.raises(ValidationError) as exc:
        _register(auth, password="123", confirm_password="124")
    assert exc.value.errors["password"] == "Password must have at least 4 characters"
    assert exc.value.errors["confirm_password"] == "Passwords do not match"


def test_authenticate_matches_email_case_insensitively():
    repo = InMemoryTeachers()
    auth = AuthService(repo)
    registered = _register(auth)

    session = auth.authenticate("lucia.ortega@SCHOOL.edu", "1234")
    assert session == registered


def test_authenticate_wrong_password():
    auth = AuthService(InMemoryTeachers())
    _register(auth)

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        auth.authenticate("lucia.ortega@school.edu", "4321")


def test_authenticate_unknown_or_inactive_teacher():
    repo = InMemoryTeachers()
    auth = AuthService(repo)
    session = _register(auth)

    with pytest.raises(AuthenticationError, match="No teacher found with this email"):
        auth.authenticate("nobody@school.edu", "1234")

    repo.deactivate(session.teacher_id)
    with pytest.raises(AuthenticationError, match="No teacher found with this email"):
        auth.authenticate("lucia.ortega@school.edu", "1234")


def test_authenticate_requires_both_fields():
    auth = AuthService(InMemoryTeachers())
    with pytest.raises(ValidationError) as exc:
        auth.authenticate("", "")
    assert set(exc.value.errors) == {"email", "password"}


def test_update_profile_changes_password_only_with_current_password():
    repo = InMemoryTeachers()
    session = _register(AuthService(repo))
    profiles = TeacherService(repo)

    with pytest.raises(ValidationError) as exc:
        profiles.update_profile(
            session,
            name="Lucía",
            surname="Ortega",
            current_password="wrong",
            new_password="abcd",
            confirm_new_password="abcd",
        )
    assert exc.value.errors == {"current_password": "Current password is incorrect"}
    assert repo.get_by_id(session.teacher_id).password == "1234"

    updated = profiles.update_profile(
        session,
        name="Lucía",
        surname="Ortega Ruiz",
        phone="",
        current_password="1234",
        new_password="abcd",
        confirm_new_password="abcd",
    )
    assert updated.password == "abcd"
    assert updated.surname == "Ortega Ruiz"
    assert updated.phone is None
    assert updated.email == "lucia.ortega@school.edu"


def test_update_profile_without_password_fields_keeps_password():
    repo = InMemoryTeachers()
    session = _register(AuthService(repo))

    updated = TeacherService(repo).update_profile(session, name="Lucy", surname="Ortega", email="lucy@school.edu")
    assert updated.password == "1234"
    assert updated.email == "lucy@school.edu"


def test_update_profile_rejects_email_of_another_teacher():
    repo = InMemoryTeachers()
    auth = AuthService(repo)
    lucia = _register(auth)
    _register(auth, name="Pablo", surname="Reyes", email="pablo@school.edu")
    profiles = TeacherService(repo)

    with pytest.raises(ValidationError) as exc:
        profiles.update_profile(lucia, name="Lucía", surname="Ortega", email="PABLO@school.edu")
    assert exc.value.errors == {"email": "This email is already registered"}
    assert repo.get_by_id(lucia.teacher_id).email == "lucia.ortega@school.edu"

    kept = profiles.update_profile(lucia, name="Lucía", surname="Ortega", email="Lucia.Ortega@School.edu")
    assert kept.email == "lucia.ortega@school.edu"
