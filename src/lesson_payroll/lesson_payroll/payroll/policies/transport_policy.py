from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ...core.constants import SUNDAY
from ...core.enums import PaymentKind, PaymentType
from ...teachers.model import Teacher
from ..model import PayrollRecord
from .base import PaymentPolicy


class TransportPolicy(PaymentPolicy):
    """Transport allowance, paid on Sundays."""

    kind = PaymentKind.TRANSPORT
    payment_type = PaymentType.TRANSPORT_ALLOWANCE
    allowed_weekday = SUNDAY
    reference_prefix = "TRN"

    def allowance_of(self, teacher: Teacher) -> Optional[int]:
        return teacher.transport_allowance

    def _with_amount(self, record: PayrollRecord, amount: int) -> PayrollRecord:
        return replace(record, transport_allowance=int(amount))
