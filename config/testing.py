SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

FINE_DEFAULTS = {
    "absent": "100.00",
    "per_minute_late": "2.00",
    "minimum_late": "20.00",
}

SERVICE_CREDIT_PER_HOUR = "50.00"

RECENT_ACTIVITY_CAPACITY = 50

SCAN_GRACE_DAYS = 1
