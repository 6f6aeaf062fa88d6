from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceMode, Direction, Session
from ..core.exceptions import ConfigurationError
from ..events.model import Event
from .evaluators.base import AttendanceEvaluator
from .evaluators.legacy_evaluator import LegacyEvaluator
from .evaluators.window_evaluator import WindowEvaluator


@dataclass
class AttendanceEvaluatorFactory:
    """Factory Pattern: choose the evaluator from the event's attendance mode."""

    def for_scan(self, *, event: Event, session: Optional[Session], direction: Direction) -> AttendanceEvaluator:
        if not event.is_configured():
            raise ConfigurationError(f"Event {event.event_id} has no attendance times configured")

        if event.attendance_mode is AttendanceMode.LEGACY:
            return LegacyEvaluator(event.legacy)

        if session is None:
            raise ConfigurationError(f"Event {event.event_id} requires an AM/PM session for scans")
        if not event.offers(session):
            raise ConfigurationError(
                f"Event {event.event_id} runs {event.session_config.value}; no {session.value} session"
            )
        window = event.window_for(session, direction)
        if window is None:
            raise ConfigurationError(
                f"Event {event.event_id} has no {session.value} {direction.value} window"
            )
        return WindowEvaluator(window)
