from __future__ import annotations

from datetime import date
from typing import Collection, Mapping, Optional, Sequence, Set

from ..core.enums import AttendanceStatus, TeacherStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceWeekRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        teacher_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        week_number: int,
        academic_year: int,
        timetable_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(timetable_id, teacher_id, attendance_date, status, notes, week_number, academic_year)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (timetable_id, int(teacher_id), attendance_date, status.value, notes, int(week_number), int(academic_year)),
            )
            return int(cur.lastrowid)

    def list_week(self, *, week_number: int, academic_year: int) -> Sequence[AttendanceWeekRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attendance_id, a.teacher_id, t.name AS teacher_name,
                       a.attendance_date, a.status, a.notes
                FROM attendance a
                LEFT JOIN teachers t ON t.teacher_id = a.teacher_id
                WHERE a.week_number=%s AND a.academic_year=%s
                ORDER BY a.attendance_date ASC, a.attendance_id ASC
                """,
                (int(week_number), int(academic_year)),
            )
            return [
                AttendanceWeekRow(
                    attendance_id=int(r["attendance_id"]),
                    teacher_id=int(r["teacher_id"]),
                    teacher_name=r.get("teacher_name"),
                    attendance_date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]

    def distinct_active_teacher_ids(
        self,
        *,
        week_number: int,
        academic_year: int,
        statuses: Collection[AttendanceStatus],
    ) -> Set[int]:
        if not statuses:
            return set()
        placeholders = ",".join(["%s"] * len(statuses))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT DISTINCT a.teacher_id
                FROM attendance a
                JOIN teachers t ON t.teacher_id = a.teacher_id
                WHERE a.week_number=%s AND a.academic_year=%s
                  AND a.status IN ({placeholders})
                  AND t.status=%s
                """,
                (int(week_number), int(academic_year), *[s.value for s in statuses], TeacherStatus.ACTIVE.value),
            )
            return {int(r["teacher_id"]) for r in fetchall(cur)}

    def count_by_status(self, *, week_number: int, academic_year: int) -> Mapping[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS n
                FROM attendance
                WHERE week_number=%s AND academic_year=%s
                GROUP BY status
                """,
                (int(week_number), int(academic_year)),
            )
            counts = {s: 0 for s in AttendanceStatus}
            for r in fetchall(cur):
                counts[AttendanceStatus(r["status"])] = int(r["n"])
            return counts
