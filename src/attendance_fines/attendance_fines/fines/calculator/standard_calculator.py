from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ...core.constants import DEFAULT_FINE_ABSENT, DEFAULT_FINE_PER_MINUTE_LATE, DEFAULT_MIN_FINE_LATE
from ...core.enums import AttendanceStatus
from ...events.model import Event
from .base import FineCalculator

ZERO = Decimal("0")


@dataclass(frozen=True)
class FineDefaults:
    absent: Decimal = DEFAULT_FINE_ABSENT
    per_minute_late: Decimal = DEFAULT_FINE_PER_MINUTE_LATE
    minimum_late: Decimal = DEFAULT_MIN_FINE_LATE

    @classmethod
    def from_mapping(cls, values: Optional[dict]) -> "FineDefaults":
        values = values or {}
        return cls(
            absent=Decimal(str(values.get("absent", DEFAULT_FINE_ABSENT))),
            per_minute_late=Decimal(str(values.get("per_minute_late", DEFAULT_FINE_PER_MINUTE_LATE))),
            minimum_late=Decimal(str(values.get("minimum_late", DEFAULT_MIN_FINE_LATE))),
        )


class StandardFineCalculator(FineCalculator):
    """Standard rule.

    ABSENT: event's flat amount, else the default.
    LATE: minutes x event's per-minute rate (else the default), not below the
    system-wide minimum late fine.
    PRESENT / EXCUSED: nothing.
    """

    def __init__(self, defaults: Optional[FineDefaults] = None):
        self._defaults = defaults or FineDefaults()

    @property
    def defaults(self) -> FineDefaults:
        return self._defaults

    def calculate(self, status: AttendanceStatus, minutes_late: int, event: Optional[Event] = None) -> Decimal:
        if status is AttendanceStatus.ABSENT:
            if event is not None and event.fine_amount_absent is not None:
                return Decimal(event.fine_amount_absent)
            return self._defaults.absent

        if status is AttendanceStatus.LATE:
            rate = self._defaults.per_minute_late
            if event is not None and event.fine_amount_late is not None:
                rate = Decimal(event.fine_amount_late)
            minutes = max(int(minutes_late or 0), 0)
            return max(rate * minutes, self._defaults.minimum_late)

        return ZERO
