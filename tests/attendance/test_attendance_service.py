from __future__ import annotations

from datetime import date

import pytest

from src.lesson_payroll.lesson_payroll.attendance.service import AttendanceService
from src.lesson_payroll.lesson_payroll.core.enums import AttendanceStatus, TeacherStatus
from src.lesson_payroll.lesson_payroll.core.exceptions import DataAccessError, NotFoundError, ValidationError
from tests.fakes import InMemoryAttendance, InMemoryTeachers, make_teacher


def build(*teachers):
    teachers_repo = InMemoryTeachers(*teachers)
    attendance_repo = InMemoryAttendance(teachers_repo)
    return AttendanceService(attendance_repo, teachers_repo), attendance_repo


def test_eligible_teachers_counts_present_late_and_partial_once():
    svc, repo = build(make_teacher(1), make_teacher(2), make_teacher(3), make_teacher(4))
    repo.add(1, AttendanceStatus.PRESENT, week=10, year=2025)
    repo.add(1, AttendanceStatus.PRESENT, week=10, year=2025)
    repo.add(2, AttendanceStatus.LATE, week=10, year=2025)
    repo.add(3, AttendanceStatus.PARTIAL, week=10, year=2025)
    repo.add(4, AttendanceStatus.ABSENT, week=10, year=2025)

    assert svc.eligible_teachers(10, 2025) == {1, 2, 3}


def test_inactive_teacher_is_not_eligible_even_with_attendance():
    svc, repo = build(make_teacher(1), make_teacher(2, status=TeacherStatus.INACTIVE))
    repo.add(2, AttendanceStatus.PRESENT, week=10, year=2025)

    assert svc.eligible_teachers(10, 2025) == set()


def test_eligibility_is_scoped_to_week_and_year():
    svc, repo = build(make_teacher(1))
    repo.add(1, AttendanceStatus.PRESENT, week=10, year=2024)
    repo.add(1, AttendanceStatus.PRESENT, week=11, year=2025)

    assert svc.eligible_teachers(10, 2025) == set()


def test_eligibility_rejects_bad_week_before_querying():
    svc, repo = build(make_teacher(1))

    with pytest.raises(ValidationError):
        svc.eligible_teachers(60, 2025)
    assert repo.queries == 0


def test_store_failure_surfaces_as_data_access_error():
    class BrokenAttendance:
        def distinct_active_teacher_ids(self, **kwargs):
            raise DataAccessError("Can't connect to MySQL server")

    svc = AttendanceService(BrokenAttendance(), InMemoryTeachers())

    with pytest.raises(DataAccessError):
        svc.eligible_teachers(10, 2025)


def test_record_derives_week_and_year_from_date():
    svc, repo = build(make_teacher(1))

    svc.record(teacher_id=1, attendance_date=date(2025, 3, 9), status="present")

    rec = repo.records[0]
    assert rec.week_number == 10
    assert rec.academic_year == 2025
    assert rec.status == AttendanceStatus.PRESENT


def test_record_keeps_explicit_week():
    svc, repo = build(make_teacher(1))

    svc.record(teacher_id=1, attendance_date=date(2025, 3, 9), status="late", week_number=9, academic_year=2025, notes="  traffic ")

    assert repo.records[0].week_number == 9
    assert repo.records[0].notes == "traffic"


def test_record_rejects_unknown_status_and_teacher():
    svc, _ = build(make_teacher(1))

    with pytest.raises(ValidationError):
        svc.record(teacher_id=1, attendance_date=date(2025, 3, 9), status="sick")
    with pytest.raises(NotFoundError):
        svc.record(teacher_id=99, attendance_date=date(2025, 3, 9), status="present")


def test_list_week_joins_teacher_names():
    svc, repo = build(make_teacher(1, name="Mr. Juma"))
    repo.add(1, AttendanceStatus.PRESENT, week=10, year=2025)

    rows = svc.list_week(10, 2025)

    assert [r.to_dict()["teacher_name"] for r in rows] == ["Mr. Juma"]
