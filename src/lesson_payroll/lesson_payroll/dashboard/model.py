from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardStats:
    active_teachers: int
    weekly_payroll: int
    attendance_rate: int
    weekly_lessons: int
    current_week: int
    current_year: int

    def to_dict(self) -> dict:
        return {
            "active_teachers": self.active_teachers,
            "weekly_payroll": self.weekly_payroll,
            "attendance_rate": self.attendance_rate,
            "weekly_lessons": self.weekly_lessons,
            "current_week": self.current_week,
            "current_year": self.current_year,
        }
