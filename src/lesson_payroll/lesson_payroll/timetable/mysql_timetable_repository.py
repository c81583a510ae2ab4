from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import TimetableEntry
from .repository import TimetableRepository


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        day_of_week: int,
        start_time: time,
        end_time: time,
        week_number: int,
        academic_year: int,
        subject_id: Optional[int] = None,
        teacher_id: Optional[int] = None,
        is_break: bool = False,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable(day_of_week, start_time, end_time, subject_id, teacher_id, is_break, week_number, academic_year)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    end_time=VALUES(end_time),
                    subject_id=VALUES(subject_id),
                    teacher_id=VALUES(teacher_id),
                    is_break=VALUES(is_break)
                """,
                (int(day_of_week), start_time, end_time, subject_id, teacher_id, int(bool(is_break)), int(week_number), int(academic_year)),
            )

            # If it was an update, lastrowid can be 0; fetch timetable_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                """
                SELECT timetable_id FROM timetable
                WHERE day_of_week=%s AND start_time=%s AND week_number=%s AND academic_year=%s
                """,
                (int(day_of_week), start_time, int(week_number), int(academic_year)),
            )
            r = fetchone(cur)
            return int(r["timetable_id"]) if r else 0

    def list_week(self, *, week_number: int, academic_year: int) -> Sequence[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tt.timetable_id, tt.day_of_week, tt.start_time, tt.end_time,
                       tt.subject_id, s.subject_name, tt.teacher_id, t.name AS teacher_name,
                       tt.is_break, tt.week_number, tt.academic_year
                FROM timetable tt
                LEFT JOIN subjects s ON s.subject_id = tt.subject_id
                LEFT JOIN teachers t ON t.teacher_id = tt.teacher_id
                WHERE tt.week_number=%s AND tt.academic_year=%s
                ORDER BY tt.day_of_week ASC, tt.start_time ASC
                """,
                (int(week_number), int(academic_year)),
            )
            return [
                TimetableEntry(
                    timetable_id=int(r["timetable_id"]),
                    day_of_week=int(r["day_of_week"]),
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                    week_number=int(r["week_number"]),
                    academic_year=int(r["academic_year"]),
                    subject_id=r.get("subject_id"),
                    subject_name=r.get("subject_name"),
                    teacher_id=r.get("teacher_id"),
                    teacher_name=r.get("teacher_name"),
                    is_break=bool(r.get("is_break")),
                )
                for r in fetchall(cur)
            ]

    def count_lessons(self, *, week_number: int, academic_year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n FROM timetable
                WHERE week_number=%s AND academic_year=%s AND is_break=0
                """,
                (int(week_number), int(academic_year)),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
