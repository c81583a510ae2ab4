from __future__ import annotations

from typing import ContextManager, Iterable, Mapping, Optional, Protocol, Sequence

from ..core.enums import PaymentKind
from ..teachers.model import Teacher
from .model import PaymentTransaction, PayrollRecord, PayrollWeekRow


class PayrollUnitOfWork(Protocol):
    """Store operations of one payroll run; all of them commit or roll back together."""

    def teachers_by_id(self, teacher_ids: Iterable[int]) -> Mapping[int, Teacher]:
        raise NotImplementedError

    def get_record_for_update(self, *, teacher_id: int, week_number: int, academic_year: int) -> Optional[PayrollRecord]:
        """Read the (teacher, week, year) row and lock it until the unit of work ends."""

        raise NotImplementedError

    def insert_record(self, record: PayrollRecord) -> int:
        """Insert a new row. The store's unique key rejects a second row for the same key."""

        raise NotImplementedError

    def update_record(self, record: PayrollRecord) -> bool:
        raise NotImplementedError

    def append_transaction(self, transaction: PaymentTransaction) -> int:
        raise NotImplementedError

    def sum_allowance(self, *, kind: PaymentKind, week_number: int, academic_year: int) -> int:
        raise NotImplementedError


class PayrollRepository(Protocol):
    def unit_of_work(self) -> ContextManager[PayrollUnitOfWork]:
        raise NotImplementedError

    def list_week(self, *, week_number: int, academic_year: int) -> Sequence[PayrollWeekRow]:
        raise NotImplementedError

    def sum_total(self, *, week_number: int, academic_year: int) -> int:
        raise NotImplementedError

    def list_transactions(self, *, teacher_id: int) -> Sequence[PaymentTransaction]:
        raise NotImplementedError
