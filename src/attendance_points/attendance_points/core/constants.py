"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000

DEFAULT_GRACE_MINUTES = 0
DEFAULT_ABSENCE_LIMIT_MINUTES = 480
DEFAULT_LATE_DEDUCTION_POINTS_PER_MINUTE = 0
DEFAULT_OVERTIME_POINTS_PER_MINUTE = 0

# Currency units paid per net point.
DEFAULT_POINT_VALUE = 1000
DAYS_PER_SALARY_MONTH = 30

DEFAULT_LOCATION_TIMEOUT_SECONDS = 10

DEFAULT_REPORT_DAYS = 7
