from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ...core.enums import AttendanceStatus
from ...events.model import Event


class FineCalculator(ABC):
    """Calculator interface (Strategy Pattern for fines)."""

    @abstractmethod
    def calculate(self, status: AttendanceStatus, minutes_late: int, event: Optional[Event] = None) -> Decimal:
        raise NotImplementedError
