from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PaymentScheduleEntry
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_payment_schedule(self) -> Sequence[PaymentScheduleEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payment_type, day_of_week, default_amount FROM payment_schedule ORDER BY day_of_week")
            return [
                PaymentScheduleEntry(
                    payment_type=PaymentType(r["payment_type"]),
                    day_of_week=int(r["day_of_week"]),
                    default_amount=int(r["default_amount"]),
                )
                for r in fetchall(cur)
            ]

    def default_amount(self, payment_type: PaymentType) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT default_amount FROM payment_schedule WHERE payment_type=%s",
                (payment_type.value,),
            )
            r = fetchone(cur)
            if r and r.get("default_amount") is not None:
                return int(r["default_amount"])

            cur.execute(
                "SELECT config_value FROM system_config WHERE config_key=%s",
                (f"default_{payment_type.value}",),
            )
            r = fetchone(cur)
            if not r:
                return None
            try:
                return int(r["config_value"])
            except (TypeError, ValueError):
                return None
