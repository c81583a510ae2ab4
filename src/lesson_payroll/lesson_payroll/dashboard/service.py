from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, week_number_for
from ..common.validators import require_academic_year, require_week_number
from ..core.enums import AttendanceStatus
from ..payroll.repository import PayrollRepository
from ..teachers.repository import TeacherRepository
from ..timetable.repository import TimetableRepository
from .model import DashboardStats


def attendance_rate(present: int, absent: int) -> int:
    """Percentage of present over present+absent, 0 when nothing was recorded."""
    denominator = present + absent
    if denominator <= 0:
        return 0
    return int(round(100 * present / denominator))


class DashboardService:
    """Read-only weekly rollups."""

    def __init__(
        self,
        teachers: TeacherRepository,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        timetable: TimetableRepository,
        *,
        timezone_name: Optional[str] = None,
    ):
        self._teachers = teachers
        self._payroll = payroll
        self._attendance = attendance
        self._timetable = timetable
        self._timezone_name = timezone_name

    def stats(self, week_number: int, academic_year: int) -> DashboardStats:
        week = require_week_number(week_number)
        year = require_academic_year(academic_year)

        counts = self._attendance.count_by_status(week_number=week, academic_year=year)
        return DashboardStats(
            active_teachers=self._teachers.count_active(),
            weekly_payroll=self._payroll.sum_total(week_number=week, academic_year=year),
            attendance_rate=attendance_rate(
                counts.get(AttendanceStatus.PRESENT, 0),
                counts.get(AttendanceStatus.ABSENT, 0),
            ),
            weekly_lessons=self._timetable.count_lessons(week_number=week, academic_year=year),
            current_week=week,
            current_year=year,
        )

    def current_stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or now_local(self._timezone_name).date()
        return self.stats(week_number_for(today), today.year)
