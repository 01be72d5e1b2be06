"""Constants and defaults.

Note: Keep payroll rates here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Piece rates for Production tasks (per unit).
RATE_DESPALILLO = Decimal("80")
RATE_ESCOGIDA = Decimal("70")
RATE_MONADO = Decimal("1")

# Proportional rest-day allowances on a Production day's subtotal (~1/11 and ~2/11).
SATURDAY_FACTOR = Decimal("0.090909")
SEVENTH_DAY_FACTOR = Decimal("0.181818")

# Al Dia salary rules.
DAYS_PER_MONTH = Decimal("30")
HOURS_PER_DAY = Decimal("8")
OVERTIME_MULTIPLIER = Decimal("1.25")
SEVENTH_DAY_MIN_DAYS = 5

# Upper bounds of the stored raw inputs (DECIMAL(8,2) quantities, DECIMAL(5,2) hours).
MAX_QUANTITY = Decimal("999999.99")
MAX_OVERTIME_HOURS = Decimal("999.99")

NATIONAL_ID_LENGTH = 13

DEFAULT_BUSINESS_TIMEZONE = "America/Tegucigalpa"
DEFAULT_SCAN_DEBOUNCE_SECONDS = 3
DEFAULT_SESSION_DAYS = 1
DASHBOARD_WINDOW_DAYS = 7
DASHBOARD_RECENT_LIMIT = 5
