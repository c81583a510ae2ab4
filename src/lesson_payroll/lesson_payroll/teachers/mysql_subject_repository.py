from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .subject_model import Subject
from .subject_repository import SubjectRepository


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT subject_id, subject_name, description FROM subjects ORDER BY subject_name")
            rows = fetchall(cur)
            return [
                Subject(subject_id=int(r["subject_id"]), subject_name=r["subject_name"], description=r.get("description"))
                for r in rows
            ]

    def get_or_create(self, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # No-op update makes LAST_INSERT_ID() return the existing id on conflict.
            cur.execute(
                """
                INSERT INTO subjects(subject_name) VALUES(%s)
                ON DUPLICATE KEY UPDATE subject_id=LAST_INSERT_ID(subject_id)
                """,
                (name,),
            )
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT subject_id FROM subjects WHERE subject_name=%s", (name,))
            r = fetchone(cur)
            return int(r["subject_id"]) if r else 0

    def link(self, *, teacher_id: int, subject_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO teacher_subjects(teacher_id, subject_id) VALUES(%s,%s)",
                (int(teacher_id), int(subject_id)),
            )

    def list_for_teacher(self, teacher_id: int) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.subject_id, s.subject_name, s.description
                FROM teacher_subjects ts
                JOIN subjects s ON s.subject_id = ts.subject_id
                WHERE ts.teacher_id=%s
                ORDER BY s.subject_name
                """,
                (int(teacher_id),),
            )
            rows = fetchall(cur)
            return [
                Subject(subject_id=int(r["subject_id"]), subject_name=r["subject_name"], description=r.get("description"))
                for r in rows
            ]
