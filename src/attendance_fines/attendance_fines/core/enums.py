from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Normalized attendance outcome stored per (student, event)."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"


class SessionConfig(str, Enum):
    """Which halves of the day an event runs."""

    MORNING_ONLY = "MORNING_ONLY"
    AFTERNOON_ONLY = "AFTERNOON_ONLY"
    BOTH = "BOTH"

    @property
    def sessions(self) -> tuple["Session", ...]:
        if self is SessionConfig.MORNING_ONLY:
            return (Session.AM,)
        if self is SessionConfig.AFTERNOON_ONLY:
            return (Session.PM,)
        return (Session.AM, Session.PM)


class Session(str, Enum):
    AM = "AM"
    PM = "PM"


class Direction(str, Enum):
    TIME_IN = "TIME_IN"
    TIME_OUT = "TIME_OUT"


class AttendanceMode(str, Enum):
    """Selects the evaluator variant used for an event."""

    WINDOW = "WINDOW"
    LEGACY = "LEGACY"


class ScanSource(str, Enum):
    RFID = "RFID"
    MANUAL = "MANUAL"


class TransactionKind(str, Enum):
    FINE = "FINE"
    CASH_PAYMENT = "CASH_PAYMENT"
    SERVICE_CREDIT = "SERVICE_CREDIT"


class BalancePolicy(str, Enum):
    """Which balance figure a caller reads.

    UNCLAMPED is the ledger's own closing balance (may go negative);
    CLAMPED floors fines - payments - credits at zero, as reports do.
    """

    UNCLAMPED = "UNCLAMPED"
    CLAMPED = "CLAMPED"


class ClearanceStatus(str, Enum):
    CLEARED = "CLEARED"
    WITH_BALANCE = "WITH BALANCE"
    UNKNOWN = "UNKNOWN"
