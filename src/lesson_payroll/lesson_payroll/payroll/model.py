from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import PaymentStatus, PaymentType


@dataclass(frozen=True)
class PayrollRecord:
    """Thực thể miền (domain): Bảng lương tuần của một giáo viên.

    At most one record exists per (teacher_id, week_number, academic_year).
    """

    teacher_id: int
    week_number: int
    academic_year: int
    teaching_allowance: int = 0
    transport_allowance: int = 0
    bonus: int = 0
    deduction: int = 0
    total_amount: int = 0
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_date: Optional[date] = None
    processed_date: Optional[datetime] = None
    payroll_id: Optional[int] = None

    def recomputed(self) -> "PayrollRecord":
        total = self.teaching_allowance + self.transport_allowance + self.bonus - self.deduction
        return replace(self, total_amount=total)

    def to_dict(self) -> dict:
        return {
            "payroll_id": self.payroll_id,
            "teacher_id": self.teacher_id,
            "week_number": self.week_number,
            "academic_year": self.academic_year,
            "teaching_allowance": self.teaching_allowance,
            "transport_allowance": self.transport_allowance,
            "bonus": self.bonus,
            "deduction": self.deduction,
            "total_amount": self.total_amount,
            "payment_status": self.payment_status.value,
            "payment_date": self.payment_date.strftime("%Y-%m-%d") if self.payment_date else None,
            "processed_date": self.processed_date.isoformat(sep=" ") if self.processed_date else None,
        }


@dataclass(frozen=True)
class PayrollWeekRow:
    """Read-model: payroll record joined with the teacher's name."""

    record: PayrollRecord
    teacher_name: Optional[str]

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["teacher_name"] = self.teacher_name or "-"
        return data


@dataclass(frozen=True)
class PaymentTransaction:
    """Append-only audit entry: a payment of ``amount`` happened."""

    teacher_id: int
    amount: int
    payment_type: PaymentType
    payment_date: date
    scheduled_day: str
    week_number: int
    academic_year: int
    reference_number: str
    transaction_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "teacher_id": self.teacher_id,
            "amount": self.amount,
            "payment_type": self.payment_type.value,
            "payment_date": self.payment_date.strftime("%Y-%m-%d"),
            "scheduled_day": self.scheduled_day,
            "week_number": self.week_number,
            "academic_year": self.academic_year,
            "reference_number": self.reference_number,
        }


@dataclass(frozen=True)
class PayrollRunSummary:
    total_amount: int
    teacher_count: int
    payment_date: date

    def to_dict(self) -> dict:
        return {
            "total_amount": self.total_amount,
            "teacher_count": self.teacher_count,
            "payment_date": self.payment_date.strftime("%Y-%m-%d"),
        }
