from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PaymentType


@dataclass(frozen=True)
class PaymentScheduleEntry:
    payment_type: PaymentType
    day_of_week: int
    default_amount: int
