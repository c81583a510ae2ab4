from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ...core.constants import FRIDAY
from ...core.enums import PaymentKind, PaymentType
from ...teachers.model import Teacher
from ..model import PayrollRecord
from .base import PaymentPolicy


class TeachingPolicy(PaymentPolicy):
    """Teaching allowance, paid on Fridays."""

    kind = PaymentKind.TEACHING
    payment_type = PaymentType.TEACHING_ALLOWANCE
    allowed_weekday = FRIDAY
    reference_prefix = "TCH"

    def allowance_of(self, teacher: Teacher) -> Optional[int]:
        return teacher.teaching_allowance

    def _with_amount(self, record: PayrollRecord, amount: int) -> PayrollRecord:
        return replace(record, teaching_allowance=int(amount))
