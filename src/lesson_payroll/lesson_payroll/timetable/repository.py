from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import TimetableEntry


class TimetableRepository(Protocol):
    def upsert(
        self,
        *,
        day_of_week: int,
        start_time: time,
        end_time: time,
        week_number: int,
        academic_year: int,
        subject_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        is_break: bool = False,
    ) -> int:
        """Create or replace the slot keyed by (day, start, week, year).

        Returns timetable_id.
        """

        raise NotImplementedError

    def list_week(self, *, week_number: int, academic_year: int) -> Sequence[TimetableEntry]:
        raise NotImplementedError

    def count_lessons(self, *, week_number: int, academic_year: int) -> int:
        """Non-break slots only."""

        raise NotImplementedError
