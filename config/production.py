import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

FINE_DEFAULTS = {
    "absent": os.getenv("FINE_ABSENT", "100.00"),
    "per_minute_late": os.getenv("FINE_PER_MINUTE_LATE", "2.00"),
    "minimum_late": os.getenv("FINE_MINIMUM_LATE", "20.00"),
}

SERVICE_CREDIT_PER_HOUR = os.getenv("SERVICE_CREDIT_PER_HOUR", "50.00")

RECENT_ACTIVITY_CAPACITY = int(os.getenv("RECENT_ACTIVITY_CAPACITY", "200"))

SCAN_GRACE_DAYS = int(os.getenv("SCAN_GRACE_DAYS", "1"))
