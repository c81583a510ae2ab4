from __future__ import annotations

from datetime import date
from typing import Collection, Mapping, Optional, Protocol, Sequence, Set

from ..core.enums import AttendanceStatus
from .model import AttendanceWeekRow


class AttendanceRepository(Protocol):
    def create(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        week_number: int,
        academic_year: int,
        timetable_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def list_week(self, *, week_number: int, academic_year: int) -> Sequence[AttendanceWeekRow]:
        raise NotImplementedError

    def distinct_active_teacher_ids(
        self,
        *,
        week_number: int,
        academic_year: int,
        statuses: Collection[AttendanceStatus],
    ) -> Set[int]:
        """Teachers currently active with at least one record in one of ``statuses``."""

        raise NotImplementedError

    def count_by_status(self, *, week_number: int, academic_year: int) -> Mapping[AttendanceStatus, int]:
        raise NotImplementedError
