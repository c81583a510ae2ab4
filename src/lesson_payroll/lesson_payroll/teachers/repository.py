from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import TeacherStatus
from .model import Teacher


class TeacherRepository(Protocol):
    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        phone: str,
        email: Optional[str],
        teaching_allowance: Optional[int],
        transport_allowance: Optional[int],
        status: TeacherStatus,
        date_joined: date,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, *, teacher_id: int, changes: dict) -> bool:
        """Apply a partial update. Keys are column names already validated by the service."""

        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
