from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentType
from .model import PaymentScheduleEntry


class SettingsRepository(Protocol):
    def list_payment_schedule(self) -> Sequence[PaymentScheduleEntry]:
        raise NotImplementedError

    def default_amount(self, payment_type: PaymentType) -> Optional[int]:
        """Organisation-wide amount used when a teacher has no personal rate.

        Looks at payment_schedule first, then the ``default_<payment_type>`` key of system_config.
        """

        raise NotImplementedError
