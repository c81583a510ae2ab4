from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PaymentKind
from .policies.base import PaymentPolicy
from .policies.teaching_policy import TeachingPolicy
from .policies.transport_policy import TransportPolicy


@dataclass
class PaymentPolicyFactory:
    """Factory Pattern: choose the payment policy for a payroll run kind."""

    def for_kind(self, kind: PaymentKind) -> PaymentPolicy:
        if kind == PaymentKind.TRANSPORT:
            return TransportPolicy()
        if kind == PaymentKind.TEACHING:
            return TeachingPolicy()
        raise ValueError(f"No payment policy for {kind!r}")
