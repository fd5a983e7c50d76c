"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Wage adjustment formula
HOURS_PER_YEAR = Decimal("2080")
ADJUSTMENT_HOURS = Decimal("120")
BASE_RATE = Decimal("76.94")
FIXED_DEDUCTION = Decimal("4.69")
CAC_RATE = Decimal("0.80")

# Pay periods
FIRST_PERIOD_LAST_DAY = 15
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

PLACEHOLDER_EMAIL_DOMAIN = "placeholder.local"
MIN_PASSWORD_LENGTH = 6
DEFAULT_TICKET_LIMIT = 500
