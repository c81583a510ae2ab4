from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi điểm danh một tiết dạy.

    Immutable once recorded.
    """

    attendance_id: int
    teacher_id: int
    attendance_date: date
    status: AttendanceStatus
    week_number: int
    academic_year: int
    timetable_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceWeekRow:
    """Read-model for the weekly attendance listing."""

    attendance_id: int
    teacher_id: int
    teacher_name: Optional[str]
    attendance_date: date
    status: AttendanceStatus
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher_name or "-",
            "attendance_date": self.attendance_date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "notes": self.notes or "",
        }
