"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MIN_PASSWORD_LENGTH = 6
GUEST_DISPLAY_NAME = "Guest User"

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LIST_LIMIT = 500

MONTHS_PER_YEAR = 12
# Largest values the DECIMAL(14,2) money and DECIMAL(7,2) percent columns hold.
MAX_MONEY = Decimal("999999999999.99")
MAX_PERCENT = Decimal("99999.99")

DEFAULT_MAX_FAILED_LOGINS = 5
DEFAULT_LOCKOUT_MINUTES = 15
DEFAULT_RESET_MAX_AGE_SECONDS = 3600

WELCOME_TEMPLATE_ID = "employee_welcome"
PASSWORD_RESET_TEMPLATE_ID = "password_reset"
