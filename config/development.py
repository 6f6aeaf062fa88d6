import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Fine defaults used when an event does not override them
FINE_DEFAULTS = {
    "absent": os.getenv("FINE_ABSENT", "100.00"),
    "per_minute_late": os.getenv("FINE_PER_MINUTE_LATE", "2.00"),
    "minimum_late": os.getenv("FINE_MINIMUM_LATE", "20.00"),
}

# 1 hour of community service = this many pesos of credit
SERVICE_CREDIT_PER_HOUR = os.getenv("SERVICE_CREDIT_PER_HOUR", "50.00")

RECENT_ACTIVITY_CAPACITY = int(os.getenv("RECENT_ACTIVITY_CAPACITY", "200"))

# Scans are refused once the event is more than this many days old
SCAN_GRACE_DAYS = int(os.getenv("SCAN_GRACE_DAYS", "1"))
