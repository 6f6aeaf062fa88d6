from __future__ import annotations

from datetime import time

from ...common.datetime_utils import minutes_between
from ...core.enums import AttendanceStatus
from ...events.model import TimeWindow
from .base import ON_TIME, AttendanceEvaluator, Evaluation


class WindowEvaluator(AttendanceEvaluator):
    """Start-stop window rule.

    Inside [start, stop] (boundaries included) is on time. Scanning before the
    window opens is LATE by the minutes until start, after it closes LATE by the
    minutes past stop.
    """

    def __init__(self, window: TimeWindow):
        self._window = window

    @property
    def window(self) -> TimeWindow:
        return self._window

    def evaluate(self, scanned_time: time) -> Evaluation:
        if scanned_time < self._window.start:
            return Evaluation(AttendanceStatus.LATE, minutes_between(scanned_time, self._window.start))
        if scanned_time > self._window.stop:
            return Evaluation(AttendanceStatus.LATE, minutes_between(self._window.stop, scanned_time))
        return ON_TIME
