from __future__ import annotations

from datetime import date
from typing import Optional, Sequence, Set

from ..common.datetime_utils import week_number_for
from ..common.validators import require_academic_year, require_week_number
from ..core.constants import QUALIFYING_ATTENDANCE
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..teachers.repository import TeacherRepository
from .model import AttendanceWeekRow
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, teachers: TeacherRepository):
        self._attendance = attendance
        self._teachers = teachers

    def eligible_teachers(self, week_number: int, academic_year: int) -> Set[int]:
        """Active teachers with a present, late or partial record in the week.

        Store failures propagate as DataAccessError.
        """
        week = require_week_number(week_number)
        year = require_academic_year(academic_year)
        return set(
            self._attendance.distinct_active_teacher_ids(
                week_number=week,
                academic_year=year,
                statuses=QUALIFYING_ATTENDANCE,
            )
        )

    def record(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        status: AttendanceStatus | str,
        timetable_id: Optional[int] = None,
        notes: Optional[str] = None,
        week_number: Optional[int] = None,
        academic_year: Optional[int] = None,
    ) -> int:
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {status!r}") from None

        if not self._teachers.get_by_id(int(teacher_id)):
            raise NotFoundError(f"Teacher {teacher_id} does not exist")

        week = require_week_number(week_number if week_number is not None else week_number_for(attendance_date))
        year = require_academic_year(academic_year if academic_year is not None else attendance_date.year)

        return self._attendance.create(
            teacher_id=int(teacher_id),
            attendance_date=attendance_date,
            status=status,
            week_number=week,
            academic_year=year,
            timetable_id=int(timetable_id) if timetable_id else None,
            notes=notes.strip() if notes else None,
        )

    def list_week(self, week_number: int, academic_year: int) -> Sequence[AttendanceWeekRow]:
        return self._attendance.list_week(
            week_number=require_week_number(week_number),
            academic_year=require_academic_year(academic_year),
        )
