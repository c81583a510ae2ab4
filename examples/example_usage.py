"""Ví dụ: chạy payroll qua service layer (không qua Flask).

Controllers chỉ là lớp mỏng; nghiệp vụ nằm ở Services.
"""

import importlib

from config import get_settings_module

from src.lesson_payroll.lesson_payroll.container import build_container
from src.lesson_payroll.lesson_payroll.core.enums import PaymentKind


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        timezone_name=settings.PAYROLL_TIMEZONE,
        enforce_payment_day=False,
    )
    stats = container.dashboard_service.current_stats()
    summary = container.payroll_reconciler.process(PaymentKind.TRANSPORT, stats.current_week, stats.current_year)
    print(stats.to_dict())
    print(summary.to_dict())


if __name__ == "__main__":
    main()
