from datetime import date, datetime

import pytest

from src.lesson_payroll.lesson_payroll.core.enums import PaymentKind, PaymentStatus
from src.lesson_payroll.lesson_payroll.payroll.factory import PaymentPolicyFactory
from src.lesson_payroll.lesson_payroll.payroll.model import PayrollRecord
from src.lesson_payroll.lesson_payroll.payroll.policies.teaching_policy import TeachingPolicy
from src.lesson_payroll.lesson_payroll.payroll.policies.transport_policy import TransportPolicy


def test_factory_picks_policy_by_kind():
    factory = PaymentPolicyFactory()

    assert isinstance(factory.for_kind(PaymentKind.TRANSPORT), TransportPolicy)
    assert isinstance(factory.for_kind(PaymentKind.TEACHING), TeachingPolicy)


@pytest.mark.parametrize(
    "policy, allowed",
    [(TransportPolicy(), date(2025, 3, 9)), (TeachingPolicy(), date(2025, 3, 7))],
)
def test_each_policy_has_a_single_pay_day(policy, allowed):
    week = [date(2025, 3, d) for d in range(3, 10)]

    assert [d for d in week if policy.is_allowed_on(d)] == [allowed]


def test_apply_overwrites_only_own_field():
    record = PayrollRecord(teacher_id=1, week_number=10, academic_year=2025, teaching_allowance=20000, transport_allowance=1)
    processed_at = datetime(2025, 3, 9, 9, 0)

    updated = TransportPolicy().apply(record, 12000, processed_at=processed_at, payment_date=processed_at.date())

    assert updated.transport_allowance == 12000
    assert updated.teaching_allowance == 20000
    assert updated.total_amount == 32000
    assert updated.payment_status == PaymentStatus.PROCESSED
    assert updated.processed_date == processed_at


def test_reference_number_encodes_kind_teacher_week_and_time():
    ref = TeachingPolicy().reference_number(
        teacher_id=7, week_number=3, academic_year=2025, processed_at=datetime(2025, 1, 17, 8, 15, 0, 123)
    )

    assert ref == "TCH-2025W03-T7-20250117081500000123"
