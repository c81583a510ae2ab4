from __future__ import annotations

from datetime import time

import pytest

from src.lesson_payroll.lesson_payroll.core.exceptions import ValidationError
from src.lesson_payroll.lesson_payroll.timetable.service import TimetableService
from tests.fakes import InMemorySubjects, InMemoryTimetable


def build():
    timetable = InMemoryTimetable()
    subjects = InMemorySubjects()
    return TimetableService(timetable, subjects), timetable, subjects


def test_schedule_parses_times_and_upserts_subject():
    svc, timetable, subjects = build()

    svc.schedule(day_of_week=0, start_time="08:00", end_time="09:00", week_number=10, academic_year=2025, subject_name="Chemistry", teacher_id=1)

    entry = timetable.list_week(week_number=10, academic_year=2025)[0]
    assert entry.start_time == time(8, 0)
    assert entry.subject_id == subjects.by_name["Chemistry"].subject_id
    assert entry.teacher_id == 1


def test_same_slot_is_replaced_not_duplicated():
    svc, timetable, _ = build()

    first = svc.schedule(day_of_week=1, start_time="08:00", end_time="09:00", week_number=10, academic_year=2025, teacher_id=1)
    second = svc.schedule(day_of_week=1, start_time="08:00", end_time="09:30", week_number=10, academic_year=2025, teacher_id=2)

    entries = svc.list_week(10, 2025)
    assert first == second
    assert len(entries) == 1
    assert entries[0].teacher_id == 2


def test_breaks_carry_no_teacher_and_are_not_lessons():
    svc, timetable, subjects = build()

    svc.schedule(day_of_week=2, start_time="10:00", end_time="10:30", week_number=10, academic_year=2025, subject_name="Tea", teacher_id=3, is_break=True)
    svc.schedule(day_of_week=2, start_time="10:30", end_time="11:30", week_number=10, academic_year=2025, subject_name="Biology")

    entries = svc.list_week(10, 2025)
    assert entries[0].is_break and entries[0].teacher_id is None
    assert "Tea" not in subjects.by_name
    assert timetable.count_lessons(week_number=10, academic_year=2025) == 1


@pytest.mark.parametrize(
    "day, start, end",
    [(7, "08:00", "09:00"), (-1, "08:00", "09:00"), (0, "09:00", "08:00"), (0, "8am", "09:00")],
)
def test_schedule_validation(day, start, end):
    svc, _, _ = build()

    with pytest.raises(ValidationError):
        svc.schedule(day_of_week=day, start_time=start, end_time=end, week_number=10, academic_year=2025)


@pytest.mark.parametrize("week, year", [(99, 2025), (10, 25), (10.5, 2025)])
def test_bad_week_or_year_writes_nothing(week, year):
    svc, timetable, subjects = build()

    with pytest.raises(ValidationError):
        svc.schedule(day_of_week=1, start_time="08:00", end_time="09:00", week_number=week, academic_year=year, subject_name="Astronomy")

    assert subjects.by_name == {}
    assert timetable.by_slot == {}
