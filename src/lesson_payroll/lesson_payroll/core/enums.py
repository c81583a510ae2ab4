from __future__ import annotations

from enum import Enum


class TeacherStatus(str, Enum):
    """Vòng đời giáo viên: không bao giờ xoá cứng, chỉ chuyển sang inactive."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on-leave"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    PARTIAL = "partial"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    PROCESSED = "processed"


class PaymentType(str, Enum):
    """Loại giao dịch ghi trong sổ thanh toán (append-only)."""

    TEACHING_ALLOWANCE = "teaching_allowance"
    TRANSPORT_ALLOWANCE = "transport_allowance"
    BONUS = "bonus"
    DEDUCTION = "deduction"
    ADVANCE = "advance"


class PaymentKind(str, Enum):
    """Kind of weekly payroll run."""

    TRANSPORT = "transport"
    TEACHING = "teaching"
