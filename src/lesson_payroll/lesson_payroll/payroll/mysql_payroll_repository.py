from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from ..core.enums import PaymentKind, PaymentStatus, PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..teachers.model import Teacher
from ..teachers.mysql_teacher_repository import TEACHER_COLUMNS, row_to_teacher
from .model import PaymentTransaction, PayrollRecord, PayrollWeekRow
from .repository import PayrollRepository, PayrollUnitOfWork

_RECORD_COLUMNS = (
    "p.payroll_id, p.teacher_id, p.week_number, p.academic_year, p.teaching_allowance, p.transport_allowance, "
    "p.bonus, p.deduction, p.total_amount, p.payment_status, p.payment_date, p.processed_date"
)

_ALLOWANCE_COLUMN = {
    PaymentKind.TRANSPORT: "transport_allowance",
    PaymentKind.TEACHING: "teaching_allowance",
}


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        teacher_id=int(r["teacher_id"]),
        week_number=int(r["week_number"]),
        academic_year=int(r["academic_year"]),
        teaching_allowance=int(r["teaching_allowance"] or 0),
        transport_allowance=int(r["transport_allowance"] or 0),
        bonus=int(r["bonus"] or 0),
        deduction=int(r["deduction"] or 0),
        total_amount=int(r["total_amount"] or 0),
        payment_status=PaymentStatus(r["payment_status"]),
        payment_date=r.get("payment_date"),
        processed_date=r.get("processed_date"),
    )


class MySQLPayrollUnitOfWork(PayrollUnitOfWork):
    """Runs every statement on the single cursor of an open transaction."""

    def __init__(self, cur):
        self._cur = cur

    def teachers_by_id(self, teacher_ids: Iterable[int]) -> Mapping[int, Teacher]:
        ids = [int(t) for t in teacher_ids]
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        self._cur.execute(f"SELECT {TEACHER_COLUMNS} FROM teachers WHERE teacher_id IN ({placeholders})", tuple(ids))
        return {int(r["teacher_id"]): row_to_teacher(r) for r in fetchall(self._cur)}

    def get_record_for_update(self, *, teacher_id: int, week_number: int, academic_year: int) -> Optional[PayrollRecord]:
        self._cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM payroll_weekly p
            WHERE p.teacher_id=%s AND p.week_number=%s AND p.academic_year=%s
            FOR UPDATE
            """,
            (int(teacher_id), int(week_number), int(academic_year)),
        )
        r = fetchone(self._cur)
        return _to_record(r) if r else None

    def insert_record(self, record: PayrollRecord) -> int:
        self._cur.execute(
            """
            INSERT INTO payroll_weekly(
                teacher_id, week_number, academic_year, teaching_allowance, transport_allowance,
                bonus, deduction, total_amount, payment_status, payment_date, processed_date
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                record.teacher_id,
                record.week_number,
                record.academic_year,
                record.teaching_allowance,
                record.transport_allowance,
                record.bonus,
                record.deduction,
                record.total_amount,
                record.payment_status.value,
                record.payment_date,
                record.processed_date,
            ),
        )
        return int(self._cur.lastrowid)

    def update_record(self, record: PayrollRecord) -> bool:
        self._cur.execute(
            """
            UPDATE payroll_weekly
            SET teaching_allowance=%s, transport_allowance=%s, total_amount=%s,
                payment_status=%s, payment_date=%s, processed_date=%s
            WHERE teacher_id=%s AND week_number=%s AND academic_year=%s
            """,
            (
                record.teaching_allowance,
                record.transport_allowance,
                record.total_amount,
                record.payment_status.value,
                record.payment_date,
                record.processed_date,
                record.teacher_id,
                record.week_number,
                record.academic_year,
            ),
        )
        return self._cur.rowcount > 0

    def append_transaction(self, transaction: PaymentTransaction) -> int:
        self._cur.execute(
            """
            INSERT INTO payment_transactions(
                teacher_id, amount, payment_type, payment_date, scheduled_day,
                week_number, academic_year, reference_number
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                transaction.teacher_id,
                transaction.amount,
                transaction.payment_type.value,
                transaction.payment_date,
                transaction.scheduled_day,
                transaction.week_number,
                transaction.academic_year,
                transaction.reference_number,
            ),
        )
        return int(self._cur.lastrowid)

    def sum_allowance(self, *, kind: PaymentKind, week_number: int, academic_year: int) -> int:
        column = _ALLOWANCE_COLUMN[kind]
        self._cur.execute(
            f"""
            SELECT COALESCE(SUM({column}), 0) AS total
            FROM payroll_weekly
            WHERE week_number=%s AND academic_year=%s
            """,
            (int(week_number), int(academic_year)),
        )
        r = fetchone(self._cur)
        return int(r["total"]) if r else 0


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def unit_of_work(self) -> Iterator[MySQLPayrollUnitOfWork]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield MySQLPayrollUnitOfWork(cur)

    def list_week(self, *, week_number: int, academic_year: int) -> Sequence[PayrollWeekRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, t.name AS teacher_name
                FROM payroll_weekly p
                LEFT JOIN teachers t ON t.teacher_id = p.teacher_id
                WHERE p.week_number=%s AND p.academic_year=%s
                ORDER BY p.teacher_id ASC
                """,
                (int(week_number), int(academic_year)),
            )
            return [PayrollWeekRow(record=_to_record(r), teacher_name=r.get("teacher_name")) for r in fetchall(cur)]

    def sum_total(self, *, week_number: int, academic_year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(total_amount), 0) AS total
                FROM payroll_weekly
                WHERE week_number=%s AND academic_year=%s
                """,
                (int(week_number), int(academic_year)),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_transactions(self, *, teacher_id: int) -> Sequence[PaymentTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT transaction_id, teacher_id, amount, payment_type, payment_date, scheduled_day,
                       week_number, academic_year, reference_number
                FROM payment_transactions
                WHERE teacher_id=%s
                ORDER BY transaction_id DESC
                """,
                (int(teacher_id),),
            )
            return [
                PaymentTransaction(
                    transaction_id=int(r["transaction_id"]),
                    teacher_id=int(r["teacher_id"]),
                    amount=int(r["amount"]),
                    payment_type=PaymentType(r["payment_type"]),
                    payment_date=r["payment_date"],
                    scheduled_day=r["scheduled_day"],
                    week_number=int(r["week_number"]),
                    academic_year=int(r["academic_year"]),
                    reference_number=r["reference_number"],
                )
                for r in fetchall(cur)
            ]
