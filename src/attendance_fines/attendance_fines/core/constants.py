"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_FINE_ABSENT = Decimal("100.00")
DEFAULT_FINE_PER_MINUTE_LATE = Decimal("2.00")
DEFAULT_MIN_FINE_LATE = Decimal("20.00")

SERVICE_CREDIT_PER_HOUR = Decimal("50.00")

DEFAULT_RECENT_ACTIVITY_CAPACITY = 200
DEFAULT_RECENT_LIMIT = 10

# Scans are accepted up to this many days after the event date.
DEFAULT_SCAN_GRACE_DAYS = 1

NOON_HOUR = 12

SERVICE_PAYMENT_PREFIX = "SVC-PAY-"
SERVICE_TRANSACTION_PREFIX = "SVC-TXN-"
