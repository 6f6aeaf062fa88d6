from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)

EARLIEST_EVENT_YEAR = 2000
SEMESTERS = (1, 2)


class EventService:
    """Use case: maintain the events attendance is checked against."""

    def __init__(self, events: EventRepository, *, today: Callable[[], date] = lambda: now_local().date()):
        self._events = events
        self._today = today

    def _validate(self, event: Event) -> None:
        require_non_empty(event.event_id, "Event ID")
        require_non_empty(event.event_name, "Event name")

        current_year = self._today().year
        if event.event_date.year < EARLIEST_EVENT_YEAR:
            raise ValidationError(f"Event date cannot be before year {EARLIEST_EVENT_YEAR}")
        if event.event_date.year > current_year:
            raise ValidationError(f"Event date cannot be after current year ({current_year})")

        if event.semester is not None and event.semester not in SEMESTERS:
            raise ValidationError("Semester must be 1 or 2")

    def add_event(self, event: Event) -> Event:
        self._validate(event)
        if self._events.get_by_id(event.event_id):
            raise ValidationError(f"Event already exists: {event.event_id}")
        self._events.save(event)
        logger.info("Added event %s (%s) on %s", event.event_id, event.event_name, event.event_date)
        return event

    def update_event(self, event: Event) -> Event:
        self._validate(event)
        if not self._events.get_by_id(event.event_id):
            raise NotFoundError(f"Event not found: {event.event_id}")
        self._events.save(event)
        logger.info("Updated event %s", event.event_id)
        return event

    def delete_event(self, event_id: str) -> None:
        if not self._events.delete(event_id):
            raise NotFoundError(f"Event not found: {event_id}")
        logger.info("Deleted event %s", event_id)

    def get_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError(f"Event not found: {event_id}")
        return event

    def list_events(self) -> Sequence[Event]:
        return self._events.list_all()
