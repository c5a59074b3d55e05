from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..common.validators import (
    FieldErrors,
    blank_to_none,
    validate_description,
    validate_group_name,
    validate_schedule,
    validate_subject,
)
from ..core.exceptions import NotFoundError
from ..database.notifier import LiveQuery
from ..students.model import Student
from ..students.repository import StudentRepository
from ..teachers.model import TeacherSession
from .model import Group, GroupStats
from .repository import GroupRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupDetail:
    group: Group
    students: Sequence[Student]
    stats: GroupStats


class GroupService:
    """Use case: create, edit and remove the acting teacher's groups."""

    def __init__(self, groups: GroupRepository, students: StudentRepository):
        self._groups = groups
        self._students = students

    def _validate(self, *, name: str, subject: str, schedule: Optional[str], description: Optional[str]) -> None:
        errors = FieldErrors()
        errors.check("name", validate_group_name(name))
        errors.check("subject", validate_subject(subject))
        errors.check("schedule", validate_schedule(schedule))
        errors.check("description", validate_description(description))
        errors.raise_if_any()

    def get(self, group_id: int) -> Group:
        group = self._groups.get_by_id(group_id)
        if not group:
            raise NotFoundError("Group not found")
        return group

    def create(
        self,
        session: TeacherSession,
        *,
        name: str,
        subject: str,
        schedule: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Group:
        self._validate(name=name, subject=subject, schedule=schedule, description=description)
        group = Group(
            name=name.strip(),
            subject=subject.strip(),
            schedule=blank_to_none(schedule),
            description=blank_to_none(description),
            teacher_id=session.teacher_id,
        )
        group_id = self._groups.insert(group)
        logger.info("Teacher %s created group %s", session.teacher_id, group_id)
        return replace(group, group_id=group_id)

    def update(
        self,
        group_id: int,
        *,
        name: str,
        subject: str,
        schedule: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Group:
        self._validate(name=name, subject=subject, schedule=schedule, description=description)
        updated = replace(
            self.get(group_id),
            name=name.strip(),
            subject=subject.strip(),
            schedule=blank_to_none(schedule),
            description=blank_to_none(description),
        )
        self._groups.update(updated)
        return updated

    def deactivate(self, group_id: int) -> None:
        """Remove a group from the lists; its history stays referenceable."""
        if not self._groups.deactivate(group_id):
            raise NotFoundError("Group not found")

    def delete(self, group_id: int) -> None:
        """Hard delete. Students and attendance records go with it."""
        if not self._groups.delete(group_id):
            raise NotFoundError("Group not found")
        logger.info("Deleted group %s", group_id)

    def list_for(self, session: TeacherSession) -> Sequence[Group]:
        return self._groups.list_by_teacher(session.teacher_id)

    def watch_for(self, session: TeacherSession) -> LiveQuery[Sequence[Group]]:
        return self._groups.watch_by_teacher(session.teacher_id)

    def list_active(self) -> Sequence[Group]:
        return self._groups.list_active()

    def detail(self, group_id: int) -> GroupDetail:
        group = self.get(group_id)
        students = self._students.list_by_group(group_id)
        stats = GroupStats(
            total_students=len(students),
            active_students=sum(1 for s in students if s.is_active),
        )
        return GroupDetail(group=group, students=students, stats=stats)

    def count_for(self, session: TeacherSession) -> int:
        return self._groups.count_by_teacher(session.teacher_id)

    def get_owned(self, session: TeacherSession, group_id: int) -> Group:
        """Like ``get`` but hides groups that belong to another teacher."""
        group = self.get(group_id)
        if group.teacher_id != session.teacher_id:
            raise NotFoundError("Group not found")
        return group
