from decimal import Decimal

WALK_IN_CUSTOMER = "Walk-in Customer"
DEFAULT_MIN_STOCK = 5

MONEY_QUANTUM = Decimal("0.01")
# Numeric(10, 2) columns hold magnitudes strictly below this.
MONEY_LIMIT = Decimal("100000000")
# Integer columns are 32-bit on client-server engines.
MAX_COUNT = 2**31 - 1

EXPORT_FORMAT_VERSION = "2.0"

WEEK_WINDOW_DAYS = 7
MONTH_WINDOW_DAYS = 30

API_PREFIX = "/api"
