from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date, time
from typing import Optional

import mysql.connector

from src.lesson_payroll.lesson_payroll.attendance.model import AttendanceRecord, AttendanceWeekRow
from src.lesson_payroll.lesson_payroll.core.enums import AttendanceStatus, PaymentKind, PaymentType, TeacherStatus
from src.lesson_payroll.lesson_payroll.core.exceptions import DataAccessError
from src.lesson_payroll.lesson_payroll.payroll.model import PaymentTransaction, PayrollRecord, PayrollWeekRow
from src.lesson_payroll.lesson_payroll.settings.model import PaymentScheduleEntry
from src.lesson_payroll.lesson_payroll.teachers.model import Teacher
from src.lesson_payroll.lesson_payroll.teachers.subject_model import Subject
from src.lesson_payroll.lesson_payroll.timetable.model import TimetableEntry


def make_teacher(
    teacher_id: int,
    *,
    name: str = "",
    teaching_allowance: Optional[int] = 20000,
    transport_allowance: Optional[int] = 12000,
    status: TeacherStatus = TeacherStatus.ACTIVE,
) -> Teacher:
    return Teacher(
        teacher_id=teacher_id,
        name=name or f"Teacher {teacher_id}",
        phone="0999000000",
        email=None,
        teaching_allowance=teaching_allowance,
        transport_allowance=transport_allowance,
        status=status,
        date_joined=date(2024, 9, 1),
    )


class InMemoryTeachers:
    def __init__(self, *teachers: Teacher):
        self.by_id: dict[int, Teacher] = {t.teacher_id: t for t in teachers}

    def list_all(self):
        return [self.by_id[k] for k in sorted(self.by_id)]

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self.by_id.get(int(teacher_id))

    def create(self, *, name, phone, email, teaching_allowance, transport_allowance, status, date_joined, notes=None) -> int:
        teacher_id = max(self.by_id, default=0) + 1
        self.by_id[teacher_id] = Teacher(
            teacher_id=teacher_id,
            name=name,
            phone=phone,
            email=email,
            teaching_allowance=teaching_allowance,
            transport_allowance=transport_allowance,
            status=status,
            date_joined=date_joined,
            notes=notes,
        )
        return teacher_id

    def update(self, *, teacher_id: int, changes: dict) -> bool:
        teacher = self.by_id.get(int(teacher_id))
        if not teacher:
            return False
        self.by_id[int(teacher_id)] = replace(teacher, **changes)
        return True

    def count_active(self) -> int:
        return sum(1 for t in self.by_id.values() if t.status == TeacherStatus.ACTIVE)


class InMemorySubjects:
    def __init__(self):
        self.by_name: dict[str, Subject] = {}
        self.links: set[tuple[int, int]] = set()

    def list_all(self):
        return sorted(self.by_name.values(), key=lambda s: s.subject_name)

    def get_or_create(self, name: str) -> int:
        if name not in self.by_name:
            self.by_name[name] = Subject(subject_id=len(self.by_name) + 1, subject_name=name)
        return self.by_name[name].subject_id

    def link(self, *, teacher_id: int, subject_id: int) -> None:
        self.links.add((int(teacher_id), int(subject_id)))

    def list_for_teacher(self, teacher_id: int):
        ids = {s for t, s in self.links if t == int(teacher_id)}
        return [s for s in self.list_all() if s.subject_id in ids]


class InMemoryAttendance:
    def __init__(self, teachers: InMemoryTeachers):
        self._teachers = teachers
        self.records: list[AttendanceRecord] = []
        self.queries = 0

    def add(self, teacher_id: int, status: AttendanceStatus, *, week: int, year: int, on: date = date(2025, 3, 4)) -> None:
        self.create(teacher_id=teacher_id, attendance_date=on, status=status, week_number=week, academic_year=year)

    def create(self, *, teacher_id, attendance_date, status, week_number, academic_year, timetable_id=None, notes=None) -> int:
        attendance_id = len(self.records) + 1
        self.records.append(
            AttendanceRecord(
                attendance_id=attendance_id,
                teacher_id=teacher_id,
                attendance_date=attendance_date,
                status=status,
                week_number=week_number,
                academic_year=academic_year,
                timetable_id=timetable_id,
                notes=notes,
            )
        )
        return attendance_id

    def list_week(self, *, week_number, academic_year):
        out = []
        for r in self.records:
            if r.week_number == week_number and r.academic_year == academic_year:
                teacher = self._teachers.get_by_id(r.teacher_id)
                out.append(
                    AttendanceWeekRow(
                        attendance_id=r.attendance_id,
                        teacher_id=r.teacher_id,
                        teacher_name=teacher.name if teacher else None,
                        attendance_date=r.attendance_date,
                        status=r.status,
                        notes=r.notes,
                    )
                )
        return out

    def distinct_active_teacher_ids(self, *, week_number, academic_year, statuses):
        self.queries += 1
        ids = set()
        for r in self.records:
            teacher = self._teachers.get_by_id(r.teacher_id)
            if (
                r.week_number == week_number
                and r.academic_year == academic_year
                and r.status in statuses
                and teacher is not None
                and teacher.status == TeacherStatus.ACTIVE
            ):
                ids.add(r.teacher_id)
        return ids

    def count_by_status(self, *, week_number, academic_year):
        counts = {s: 0 for s in AttendanceStatus}
        for r in self.records:
            if r.week_number == week_number and r.academic_year == academic_year:
                counts[r.status] += 1
        return counts


class InMemoryTimetable:
    def __init__(self):
        self.by_slot: dict[tuple[int, time, int, int], TimetableEntry] = {}

    def upsert(self, *, day_of_week, start_time, end_time, week_number, academic_year, subject_id=None, teacher_id=None, is_break=False) -> int:
        key = (day_of_week, start_time, week_number, academic_year)
        existing = self.by_slot.get(key)
        timetable_id = existing.timetable_id if existing else len(self.by_slot) + 1
        self.by_slot[key] = TimetableEntry(
            timetable_id=timetable_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            week_number=week_number,
            academic_year=academic_year,
            subject_id=subject_id,
            teacher_id=teacher_id,
            is_break=is_break,
        )
        return timetable_id

    def list_week(self, *, week_number, academic_year):
        rows = [e for e in self.by_slot.values() if e.week_number == week_number and e.academic_year == academic_year]
        return sorted(rows, key=lambda e: (e.day_of_week, e.start_time))

    def count_lessons(self, *, week_number, academic_year) -> int:
        return sum(1 for e in self.list_week(week_number=week_number, academic_year=academic_year) if not e.is_break)


@dataclass
class FakeSettings:
    defaults: dict[PaymentType, int] = field(default_factory=dict)

    def list_payment_schedule(self):
        days = {PaymentType.TRANSPORT_ALLOWANCE: 0, PaymentType.TEACHING_ALLOWANCE: 5}
        return [
            PaymentScheduleEntry(payment_type=t, day_of_week=days.get(t, 0), default_amount=amount)
            for t, amount in self.defaults.items()
        ]

    def default_amount(self, payment_type: PaymentType) -> Optional[int]:
        return self.defaults.get(payment_type)


class _InMemoryUnitOfWork:
    def __init__(self, ledger: "InMemoryLedger"):
        self._ledger = ledger
        self.records = dict(ledger.records)
        self.transactions = list(ledger.transactions)
        self._appended = 0

    def teachers_by_id(self, teacher_ids):
        return {t: self._ledger.teachers.by_id[t] for t in teacher_ids if t in self._ledger.teachers.by_id}

    def get_record_for_update(self, *, teacher_id, week_number, academic_year):
        return self.records.get((teacher_id, week_number, academic_year))

    def insert_record(self, record: PayrollRecord) -> int:
        key = (record.teacher_id, record.week_number, record.academic_year)
        if key in self.records:
            raise DataAccessError(f"Duplicate entry for key {key}")
        payroll_id = len(self.records) + 1
        self.records[key] = replace(record, payroll_id=payroll_id)
        return payroll_id

    def update_record(self, record: PayrollRecord) -> bool:
        key = (record.teacher_id, record.week_number, record.academic_year)
        if key not in self.records:
            return False
        self.records[key] = record
        return True

    def append_transaction(self, transaction: PaymentTransaction) -> int:
        self._appended += 1
        if self._ledger.fail_on_append == self._appended:
            raise DataAccessError("Lost connection to MySQL server during query")
        if any(t.reference_number == transaction.reference_number for t in self.transactions):
            raise DataAccessError(f"Duplicate reference {transaction.reference_number}")
        transaction = replace(transaction, transaction_id=len(self.transactions) + 1)
        self.transactions.append(transaction)
        return transaction.transaction_id

    def sum_allowance(self, *, kind, week_number, academic_year) -> int:
        field_name = "transport_allowance" if kind == PaymentKind.TRANSPORT else "teaching_allowance"
        return sum(
            getattr(r, field_name)
            for r in self.records.values()
            if r.week_number == week_number and r.academic_year == academic_year
        )


class InMemoryLedger:
    """Payroll store whose unit of work only publishes its writes when the block succeeds."""

    def __init__(self, teachers: InMemoryTeachers):
        self.teachers = teachers
        self.records: dict[tuple[int, int, int], PayrollRecord] = {}
        self.transactions: list[PaymentTransaction] = []
        self.fail_on_append: Optional[int] = None

    @contextmanager
    def unit_of_work(self):
        uow = _InMemoryUnitOfWork(self)
        yield uow
        self.records = uow.records
        self.transactions = uow.transactions

    def seed(self, record: PayrollRecord) -> None:
        self.records[(record.teacher_id, record.week_number, record.academic_year)] = record

    def list_week(self, *, week_number, academic_year):
        return [
            PayrollWeekRow(record=r, teacher_name=self.teachers.by_id[r.teacher_id].name if r.teacher_id in self.teachers.by_id else None)
            for k, r in sorted(self.records.items())
            if r.week_number == week_number and r.academic_year == academic_year
        ]

    def sum_total(self, *, week_number, academic_year) -> int:
        return sum(r.total_amount for r in self.records.values() if r.week_number == week_number and r.academic_year == academic_year)

    def list_transactions(self, *, teacher_id):
        return [t for t in reversed(self.transactions) if t.teacher_id == teacher_id]


class RecordingCursor:
    """DB-API cursor stand-in: records statements and replays one scripted result set per execute."""

    def __init__(self, results=(), fail_on: Optional[str] = None):
        self.results = list(results)
        self.fail_on = fail_on
        self.statements: list[tuple[str, tuple]] = []
        self.lastrowid = 1
        self.rowcount = 1
        self._rows: list[dict] = []

    def execute(self, sql, params=()):
        statement = " ".join(sql.split())
        self.statements.append((statement, tuple(params)))
        if self.fail_on and self.fail_on in statement:
            raise mysql.connector.errors.IntegrityError(msg="Duplicate entry for key")
        self._rows = self.results.pop(0) if self.results else []

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor: RecordingCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=True, buffered=True):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class RecordingConnectionFactory:
    def __init__(self, cursor: RecordingCursor):
        self.connection = RecordingConnection(cursor)

    def connect(self):
        return self.connection
