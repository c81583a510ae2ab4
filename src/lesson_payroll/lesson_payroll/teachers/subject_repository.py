from __future__ import annotations

from typing import Protocol, Sequence

from .subject_model import Subject


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def get_or_create(self, name: str) -> int:
        """Return subject_id for ``name``, inserting the subject on first reference."""

        raise NotImplementedError

    def link(self, *, teacher_id: int, subject_id: int) -> None:
        raise NotImplementedError

    def list_for_teacher(self, teacher_id: int) -> Sequence[Subject]:
        raise NotImplementedError
