from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DAY_NAMES


@dataclass(frozen=True)
class TimetableEntry:
    """One scheduled slot; unique per (day_of_week, start_time, week_number, academic_year)."""

    timetable_id: int
    day_of_week: int
    start_time: time
    end_time: time
    week_number: int
    academic_year: int
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    is_break: bool = False

    def to_dict(self) -> dict:
        return {
            "timetable_id": self.timetable_id,
            "day_of_week": self.day_of_week,
            "day_name": DAY_NAMES[self.day_of_week],
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "subject_name": self.subject_name or "",
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher_name or "",
            "is_break": self.is_break,
            "week_number": self.week_number,
            "academic_year": self.academic_year,
        }
