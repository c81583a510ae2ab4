from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.validators import optional_text, require_name_list, require_non_empty, require_non_negative
from ..core.constants import DEFAULT_TEACHING_ALLOWANCE, DEFAULT_TRANSPORT_ALLOWANCE
from ..core.enums import TeacherStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Teacher
from .repository import TeacherRepository
from .subject_model import Subject
from .subject_repository import SubjectRepository

logger = logging.getLogger(__name__)


def _parse_status(value) -> TeacherStatus:
    try:
        return TeacherStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown teacher status: {value!r}") from None


class TeacherService:
    """Use case: register and maintain teacher records (admin)."""

    def __init__(self, teachers: TeacherRepository, subjects: SubjectRepository):
        self._teachers = teachers
        self._subjects = subjects

    def list_all(self) -> Sequence[Teacher]:
        return self._teachers.list_all()

    def get(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(int(teacher_id))
        if not teacher:
            raise NotFoundError(f"Teacher {teacher_id} does not exist")
        return teacher

    def subjects_for(self, teacher_id: int) -> Sequence[Subject]:
        self.get(teacher_id)
        return self._subjects.list_for_teacher(int(teacher_id))

    def list_subjects(self) -> Sequence[Subject]:
        return self._subjects.list_all()

    def register(
        self,
        *,
        name: str,
        phone: str,
        email: Optional[str] = None,
        teaching_allowance: Optional[int] = None,
        transport_allowance: Optional[int] = None,
        status: TeacherStatus | str = TeacherStatus.ACTIVE,
        notes: Optional[str] = None,
        date_joined: Optional[date] = None,
        subjects: Iterable[str] | str | None = (),
    ) -> int:
        name = require_non_empty(name, "Name")
        phone = require_non_empty(phone, "Phone")
        subject_names = require_name_list(subjects, "Subjects")

        teaching = DEFAULT_TEACHING_ALLOWANCE if teaching_allowance is None else teaching_allowance
        transport = DEFAULT_TRANSPORT_ALLOWANCE if transport_allowance is None else transport_allowance

        teacher_id = self._teachers.create(
            name=name,
            phone=phone,
            email=optional_text(email, "Email"),
            teaching_allowance=require_non_negative(teaching, "Teaching allowance"),
            transport_allowance=require_non_negative(transport, "Transport allowance"),
            status=_parse_status(status),
            date_joined=date_joined or date.today(),
            notes=optional_text(notes, "Notes"),
        )

        # Links follow the teacher row in separate statements; link() is insert-if-absent.
        for subject_name in subject_names:
            subject_id = self._subjects.get_or_create(subject_name)
            self._subjects.link(teacher_id=teacher_id, subject_id=subject_id)

        logger.info("registered teacher %s (%s)", teacher_id, name)
        return teacher_id

    def update(self, teacher_id: int, **changes) -> Teacher:
        self.get(teacher_id)

        clean: dict = {}
        for key, value in changes.items():
            if key in ("name", "phone"):
                clean[key] = require_non_empty(value, key.capitalize())
            elif key in ("email", "notes"):
                clean[key] = optional_text(value, key.capitalize())
            elif key in ("teaching_allowance", "transport_allowance"):
                clean[key] = None if value is None else require_non_negative(value, key.replace("_", " ").capitalize())
            elif key == "status":
                clean[key] = _parse_status(value)
            else:
                raise ValidationError(f"Field {key!r} cannot be edited")

        if clean:
            self._teachers.update(teacher_id=int(teacher_id), changes=clean)
        return self.get(teacher_id)

    def deactivate(self, teacher_id: int) -> Teacher:
        """Teachers are never deleted; they are marked inactive."""
        return self.update(teacher_id, status=TeacherStatus.INACTIVE)
