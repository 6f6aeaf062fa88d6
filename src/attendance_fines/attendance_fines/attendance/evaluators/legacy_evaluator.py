from __future__ import annotations

from datetime import time

from ...common.datetime_utils import minutes_between
from ...core.enums import AttendanceStatus
from ...events.model import LegacyTimes
from .base import ON_TIME, AttendanceEvaluator, Evaluation


class LegacyEvaluator(AttendanceEvaluator):
    """Single reference time-in per half of the day; strictly after it is LATE."""

    def __init__(self, legacy: LegacyTimes):
        self._legacy = legacy

    def evaluate(self, scanned_time: time) -> Evaluation:
        reference = self._legacy.relevant_time_in(scanned_time)
        if reference is None or scanned_time <= reference:
            return ON_TIME
        return Evaluation(AttendanceStatus.LATE, minutes_between(reference, scanned_time))
