from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Sequence

from ..common.validators import optional_text, require_academic_year, require_int, require_week_number
from ..core.exceptions import ValidationError
from ..teachers.subject_repository import SubjectRepository
from .model import TimetableEntry
from .repository import TimetableRepository


def _parse_time(value: time | str, field_name: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM") from None


class TimetableService:
    def __init__(self, timetable: TimetableRepository, subjects: SubjectRepository):
        self._timetable = timetable
        self._subjects = subjects

    def schedule(
        self,
        *,
        day_of_week: int,
        start_time: time | str,
        end_time: time | str,
        week_number: int,
        academic_year: int,
        subject_name: Optional[str] = None,
        teacher_id: Optional[int] = None,
        is_break: bool = False,
    ) -> int:
        week = require_week_number(week_number)
        year = require_academic_year(academic_year)
        day = require_int(day_of_week, "Day of week must be an integer")
        if day < 0 or day > 6:
            raise ValidationError("Day of week must be between 0 (Sunday) and 6 (Saturday)")

        start = _parse_time(start_time, "Start time")
        end = _parse_time(end_time, "End time")
        if start >= end:
            raise ValidationError("Start time must be before end time")

        subject_name = optional_text(subject_name, "Subject name")
        if is_break or not teacher_id:
            teacher_id = None
        else:
            teacher_id = require_int(teacher_id, "Teacher id must be an integer")

        subject_id = None
        if subject_name and not is_break:
            subject_id = self._subjects.get_or_create(subject_name)

        return self._timetable.upsert(
            day_of_week=day,
            start_time=start,
            end_time=end,
            week_number=week,
            academic_year=year,
            subject_id=subject_id,
            teacher_id=teacher_id,
            is_break=bool(is_break),
        )

    def list_week(self, week_number: int, academic_year: int) -> Sequence[TimetableEntry]:
        return self._timetable.list_week(
            week_number=require_week_number(week_number),
            academic_year=require_academic_year(academic_year),
        )
