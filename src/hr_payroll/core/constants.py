"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Payroll
MONTHLY_WORK_HOURS = Decimal("240")  # 10h x 24 days
OVERTIME_MULTIPLIER = Decimal("1.5")
IESS_RATE = Decimal("0.0945")

# Attendance
REGULAR_HOURS_PER_DAY = Decimal("10")
DEFAULT_WORK_START_TIME = "08:00:00"
DEFAULT_LATE_TOLERANCE_MINUTES = 15

# Employees
DEFAULT_VACATION_DAYS = 15
EMPLOYEE_CODE_PREFIX = "EMP"

# Auth
DEFAULT_TOKEN_HOURS = 24
MIN_USERNAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 6

# Storage
MAX_AMOUNT = Decimal("9999999999.99")  # DECIMAL(12,2)
