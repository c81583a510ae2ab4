from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import weekday_sunday_first
from ...core.constants import DAY_NAMES
from ...core.enums import PaymentKind, PaymentStatus, PaymentType
from ...teachers.model import Teacher
from ..model import PayrollRecord


class PaymentPolicy(ABC):
    """Strategy Pattern: what one kind of weekly payroll run pays, and when.

    Each kind owns exactly one allowance field of PayrollRecord and may only
    be processed on one day of the week.
    """

    kind: PaymentKind
    payment_type: PaymentType
    allowed_weekday: int
    reference_prefix: str

    @property
    def scheduled_day(self) -> str:
        return DAY_NAMES[self.allowed_weekday]

    def is_allowed_on(self, day: date) -> bool:
        return weekday_sunday_first(day) == self.allowed_weekday

    @abstractmethod
    def allowance_of(self, teacher: Teacher) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def _with_amount(self, record: PayrollRecord, amount: int) -> PayrollRecord:
        raise NotImplementedError

    def apply(self, record: PayrollRecord, amount: int, *, processed_at: datetime, payment_date: date) -> PayrollRecord:
        """Overwrite this kind's field only; the other allowance, bonus and deduction stay as they are."""
        updated = replace(
            self._with_amount(record, amount),
            payment_status=PaymentStatus.PROCESSED,
            processed_date=processed_at,
            payment_date=payment_date,
        )
        return updated.recomputed()

    def reference_number(self, *, teacher_id: int, week_number: int, academic_year: int, processed_at: datetime) -> str:
        return f"{self.reference_prefix}-{academic_year}W{week_number:02d}-T{teacher_id}-{processed_at:%Y%m%d%H%M%S%f}"
