from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class Evaluation:
    status: AttendanceStatus
    minutes_late: int = 0

    @property
    def is_late(self) -> bool:
        return self.status is AttendanceStatus.LATE


ON_TIME = Evaluation(status=AttendanceStatus.PRESENT, minutes_late=0)


class AttendanceEvaluator(ABC):
    """Strategy Pattern: decide PRESENT/LATE for a scanned time-of-day."""

    @abstractmethod
    def evaluate(self, scanned_time: time) -> Evaluation:
        raise NotImplementedError
