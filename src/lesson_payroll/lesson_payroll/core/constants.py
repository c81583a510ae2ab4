"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus

DEFAULT_TEACHING_ALLOWANCE = 20000
DEFAULT_TRANSPORT_ALLOWANCE = 12000

# Weekday numbers use the Sunday=0 convention stored in timetable.day_of_week.
SUNDAY = 0
FRIDAY = 5
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

QUALIFYING_ATTENDANCE = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.PARTIAL})

MIN_WEEK = 1
MAX_WEEK = 53
MIN_YEAR = 1000
MAX_YEAR = 9999

DEFAULT_PAYROLL_TIMEZONE = "Africa/Blantyre"
