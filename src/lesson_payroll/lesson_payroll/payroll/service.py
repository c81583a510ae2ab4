from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..common.validators import require_academic_year, require_payment_kind, require_week_number
from ..core.constants import DEFAULT_TEACHING_ALLOWANCE, DEFAULT_TRANSPORT_ALLOWANCE
from ..core.enums import PaymentKind, PaymentType
from ..core.exceptions import DataAccessError, PersistenceError, SchedulingViolation
from ..settings.model import PaymentScheduleEntry
from ..settings.repository import SettingsRepository
from .factory import PaymentPolicyFactory
from .model import PaymentTransaction, PayrollRecord, PayrollRunSummary, PayrollWeekRow
from .policies.base import PaymentPolicy
from .repository import PayrollRepository, PayrollUnitOfWork

logger = logging.getLogger(__name__)

_BUILTIN_DEFAULTS = {
    PaymentType.TRANSPORT_ALLOWANCE: DEFAULT_TRANSPORT_ALLOWANCE,
    PaymentType.TEACHING_ALLOWANCE: DEFAULT_TEACHING_ALLOWANCE,
}


class PayrollReconciler:
    """Use case: turn a week's attendance into payroll records and payment transactions.

    A run for one kind (transport on Sundays, teaching on Fridays):

    * upserts exactly one PayrollRecord per eligible teacher for the week,
      overwriting only that kind's allowance;
    * appends one PaymentTransaction per teacher on every run, so re-running
      a week leaves the ledger unchanged but adds audit entries;
    * happens inside a single unit of work. Nothing is visible unless every
      teacher was written.

    The day-of-week gate compares ``today`` (the caller's date, not the target
    week) with the kind's pay day. It can be switched off with
    ``enforce_payment_day=False`` for supervised backfills.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceService,
        settings: SettingsRepository,
        *,
        policy_factory: Optional[PaymentPolicyFactory] = None,
        enforce_payment_day: bool = True,
        timezone_name: Optional[str] = None,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._settings = settings
        self._policies = policy_factory or PaymentPolicyFactory()
        self._enforce_payment_day = bool(enforce_payment_day)
        self._timezone_name = timezone_name

    def process(
        self,
        kind: PaymentKind | str,
        week_number: int,
        academic_year: int,
        today: Optional[date] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PayrollRunSummary:
        kind = require_payment_kind(kind)
        week = require_week_number(week_number)
        year = require_academic_year(academic_year)

        now = now or now_local(self._timezone_name)
        today = today or now.date()
        policy = self._policies.for_kind(kind)

        if self._enforce_payment_day and not policy.is_allowed_on(today):
            logger.warning(
                "rejected %s payroll for week %s/%s: %s is not a %s", kind.value, week, year, today, policy.scheduled_day
            )
            raise SchedulingViolation(f"{kind.value.capitalize()} payments can only be processed on {policy.scheduled_day}s")

        logger.info("processing %s payroll for week %s/%s", kind.value, week, year)

        try:
            eligible = sorted(self._attendance.eligible_teachers(week, year))
            if not eligible:
                logger.info("no eligible teachers for week %s/%s", week, year)
                return PayrollRunSummary(total_amount=0, teacher_count=0, payment_date=today)

            default_amount = self._default_amount(policy)

            with self._payroll.unit_of_work() as uow:
                teachers = uow.teachers_by_id(eligible)
                for teacher_id in eligible:
                    amount = policy.allowance_of(teachers[teacher_id]) if teacher_id in teachers else None
                    if amount is None:
                        amount = default_amount
                    self._pay_teacher(uow, policy, teacher_id, amount, week, year, today=today, now=now)
                total = uow.sum_allowance(kind=kind, week_number=week, academic_year=year)
        except DataAccessError as exc:
            logger.exception("%s payroll for week %s/%s rolled back", kind.value, week, year)
            raise PersistenceError(f"Payroll run failed and was rolled back: {exc}") from exc

        logger.info(
            "%s payroll for week %s/%s committed: %s teachers, total %s", kind.value, week, year, len(eligible), total
        )
        return PayrollRunSummary(total_amount=total, teacher_count=len(eligible), payment_date=today)

    def _default_amount(self, policy: PaymentPolicy) -> int:
        configured = self._settings.default_amount(policy.payment_type)
        if configured is not None:
            return int(configured)
        return _BUILTIN_DEFAULTS[policy.payment_type]

    def _pay_teacher(
        self,
        uow: PayrollUnitOfWork,
        policy: PaymentPolicy,
        teacher_id: int,
        amount: int,
        week: int,
        year: int,
        *,
        today: date,
        now: datetime,
    ) -> None:
        existing = uow.get_record_for_update(teacher_id=teacher_id, week_number=week, academic_year=year)
        if existing is None:
            record = policy.apply(
                PayrollRecord(teacher_id=teacher_id, week_number=week, academic_year=year),
                amount,
                processed_at=now,
                payment_date=today,
            )
            uow.insert_record(record)
        else:
            uow.update_record(policy.apply(existing, amount, processed_at=now, payment_date=today))

        uow.append_transaction(
            PaymentTransaction(
                teacher_id=teacher_id,
                amount=amount,
                payment_type=policy.payment_type,
                payment_date=today,
                scheduled_day=policy.scheduled_day,
                week_number=week,
                academic_year=year,
                reference_number=policy.reference_number(
                    teacher_id=teacher_id, week_number=week, academic_year=year, processed_at=now
                ),
            )
        )


class PayrollService:
    """Read side of payroll: weekly ledger, audit log and pay schedule."""

    def __init__(self, payroll: PayrollRepository, settings: SettingsRepository):
        self._payroll = payroll
        self._settings = settings

    def week_records(self, week_number: int, academic_year: int) -> Sequence[PayrollWeekRow]:
        return self._payroll.list_week(
            week_number=require_week_number(week_number),
            academic_year=require_academic_year(academic_year),
        )

    def transactions_for(self, teacher_id: int) -> Sequence[PaymentTransaction]:
        return self._payroll.list_transactions(teacher_id=int(teacher_id))

    def payment_schedule(self) -> Sequence[PaymentScheduleEntry]:
        return self._settings.list_payment_schedule()
