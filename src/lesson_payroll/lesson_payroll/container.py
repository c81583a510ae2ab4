from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollReconciler, PayrollService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .teachers.mysql_subject_repository import MySQLSubjectRepository
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.service import TeacherService
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.service import TimetableService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    teacher_service: TeacherService
    attendance_service: AttendanceService
    timetable_service: TimetableService
    payroll_reconciler: PayrollReconciler
    payroll_service: PayrollService
    dashboard_service: DashboardService
    timezone_name: Optional[str] = None

    def current_year(self) -> int:
        """Calendar year in the payroll timezone, used when a request omits the year."""
        return now_local(self.timezone_name).year


def build_container(
    *,
    db_config: dict,
    timezone_name: Optional[str] = None,
    enforce_payment_day: bool = True,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    teachers_repo = MySQLTeacherRepository(conn)
    subjects_repo = MySQLSubjectRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    timetable_repo = MySQLTimetableRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)

    attendance_service = AttendanceService(attendance_repo, teachers_repo)

    return Container(
        conn=conn,
        teacher_service=TeacherService(teachers_repo, subjects_repo),
        attendance_service=attendance_service,
        timetable_service=TimetableService(timetable_repo, subjects_repo),
        payroll_reconciler=PayrollReconciler(
            payroll_repo,
            attendance_service,
            settings_repo,
            enforce_payment_day=enforce_payment_day,
            timezone_name=timezone_name,
        ),
        payroll_service=PayrollService(payroll_repo, settings_repo),
        dashboard_service=DashboardService(
            teachers_repo,
            payroll_repo,
            attendance_repo,
            timetable_repo,
            timezone_name=timezone_name,
        ),
        timezone_name=timezone_name,
    )
