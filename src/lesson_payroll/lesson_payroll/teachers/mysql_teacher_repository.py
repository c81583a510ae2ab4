from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import TeacherStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository

TEACHER_COLUMNS = (
    "teacher_id, name, phone, email, teaching_allowance, transport_allowance, status, date_joined, notes"
)
_UPDATABLE = frozenset(
    {"name", "phone", "email", "teaching_allowance", "transport_allowance", "status", "notes"}
)


def row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        phone=r["phone"],
        email=r.get("email"),
        teaching_allowance=None if r.get("teaching_allowance") is None else int(r["teaching_allowance"]),
        transport_allowance=None if r.get("transport_allowance") is None else int(r["transport_allowance"]),
        status=TeacherStatus(r["status"]),
        date_joined=r["date_joined"],
        notes=r.get("notes"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {TEACHER_COLUMNS} FROM teachers ORDER BY teacher_id")
            return [row_to_teacher(r) for r in fetchall(cur)]

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {TEACHER_COLUMNS} FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            r = fetchone(cur)
            return row_to_teacher(r) if r else None

    def create(
        self,
        *,
        name: str,
        phone: str,
        email: Optional[str],
        teaching_allowance: Optional[int],
        transport_allowance: Optional[int],
        status: TeacherStatus,
        date_joined: date,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(name, phone, email, teaching_allowance, transport_allowance, status, date_joined, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, phone, email, teaching_allowance, transport_allowance, status.value, date_joined, notes),
            )
            return int(cur.lastrowid)

    def update(self, *, teacher_id: int, changes: dict) -> bool:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Unsupported teacher columns: {sorted(unknown)}")
        if not changes:
            return False

        assignments = ", ".join(f"{col}=%s" for col in changes)
        params = [v.value if isinstance(v, TeacherStatus) else v for v in changes.values()]
        params.append(int(teacher_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE teachers SET {assignments} WHERE teacher_id=%s", tuple(params))
            return cur.rowcount > 0

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM teachers WHERE status=%s", (TeacherStatus.ACTIVE.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
