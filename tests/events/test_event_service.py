from __future__ import annotations

from dataclasses import replace
from datetime import date, time

import pytest

from src.attendance_fines.attendance_fines.core.enums import Direction, Session
from src.attendance_fines.attendance_fines.core.exceptions import NotFoundError, ValidationError
from src.attendance_fines.attendance_fines.events.memory_event_repository import MemoryEventRepository
from src.attendance_fines.attendance_fines.events.model import Event, TimeWindow
from src.attendance_fines.attendance_fines.events.service import EventService


@pytest.fixture
def service(store) -> EventService:
    return EventService(MemoryEventRepository(store), today=lambda: date(2025, 6, 1))


def _event(**overrides) -> Event:
    values = dict(
        event_id="EVT-9",
        event_name="Intramurals",
        event_date=date(2025, 3, 14),
        semester=2,
        school_year="2024-2025",
        windows={(Session.AM, Direction.TIME_IN): TimeWindow(time(7, 0), time(7, 30))},
    )
    values.update(overrides)
    return Event(**values)


def test_add_event_then_get_and_list(service):
    service.add_event(_event())

    assert service.get_event("EVT-9").event_name == "Intramurals"
    assert [e.event_id for e in service.list_events()] == ["EVT-9"]


def test_duplicate_event_id_is_rejected(service):
    service.add_event(_event())

    with pytest.raises(ValidationError):
        service.add_event(_event(event_name="Again"))


@pytest.mark.parametrize("event_id", ["", "   "])
def test_event_id_is_required(service, event_id):
    with pytest.raises(ValidationError):
        service.add_event(_event(event_id=event_id))


def test_event_name_is_required(service):
    with pytest.raises(ValidationError):
        service.add_event(_event(event_name=""))


@pytest.mark.parametrize("year", [1999, 2026])
def test_event_year_must_be_between_2000_and_current_year(service, year):
    with pytest.raises(ValidationError):
        service.add_event(_event(event_date=date(year, 3, 14)))


def test_year_2000_is_accepted(service):
    assert service.add_event(_event(event_date=date(2000, 1, 10))).event_date.year == 2000


@pytest.mark.parametrize("semester", [0, 3])
def test_semester_must_be_one_or_two(service, semester):
    with pytest.raises(ValidationError):
        service.add_event(_event(semester=semester))


def test_update_replaces_stored_event(service):
    stored = service.add_event(_event())

    service.update_event(replace(stored, event_name="Intramurals Day 2"))

    assert service.get_event("EVT-9").event_name == "Intramurals Day 2"


def test_update_unknown_event_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.update_event(_event(event_id="EVT-404"))


def test_delete_event(service):
    service.add_event(_event())
    service.delete_event("EVT-9")

    with pytest.raises(NotFoundError):
        service.get_event("EVT-9")
    with pytest.raises(NotFoundError):
        service.delete_event("EVT-9")
