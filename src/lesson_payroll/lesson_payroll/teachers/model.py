from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import TeacherStatus


@dataclass(frozen=True)
class Teacher:
    """Thực thể miền (domain): Giáo viên.

    Allowances are weekly amounts in whole currency units. ``None`` means the
    teacher has no personal rate and the payment schedule default applies.
    """

    teacher_id: int
    name: str
    phone: str
    email: Optional[str]
    teaching_allowance: Optional[int]
    transport_allowance: Optional[int]
    status: TeacherStatus
    date_joined: date
    notes: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == TeacherStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "teacher_id": self.teacher_id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email or "",
            "teaching_allowance": self.teaching_allowance,
            "transport_allowance": self.transport_allowance,
            "status": self.status.value,
            "date_joined": self.date_joined.strftime("%Y-%m-%d"),
            "notes": self.notes or "",
        }
