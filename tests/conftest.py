from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.attendance_fines.attendance_fines.container import Container, build_container
from src.attendance_fines.attendance_fines.core.enums import Direction, Session, SessionConfig
from src.attendance_fines.attendance_fines.database.store import MemoryStore
from src.attendance_fines.attendance_fines.events.model import Event, TimeWindow
from src.attendance_fines.attendance_fines.students.model import Student

EVENT_DAY = date(2025, 3, 1)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 7, 45, 0)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def container(store: MemoryStore) -> Container:
    c = build_container(store=store)
    c.students_repo.save(Student("2021-0001", "Ana Cruz", rfid_tag="RF-0001", course="BSIT", year_level="3", section="A"))
    c.students_repo.save(Student("2021-0002", "Ben Reyes", rfid_tag="RF-0002", course="BSIT", year_level="3", section="B"))
    c.students_repo.save(Student("2021-0003", "Cara Lim", rfid_tag="RF-0003", course="BSED", year_level="1", section="A"))
    return c


@pytest.fixture
def window_event() -> Event:
    """AM time-in 07:00-07:30, AM time-out 11:30-12:00, PM time-in 13:00-13:15."""
    return Event(
        event_id="EVT-1",
        event_name="Foundation Day",
        event_date=EVENT_DAY,
        session_config=SessionConfig.BOTH,
        windows={
            (Session.AM, Direction.TIME_IN): TimeWindow(time(7, 0), time(7, 30)),
            (Session.AM, Direction.TIME_OUT): TimeWindow(time(11, 30), time(12, 0)),
            (Session.PM, Direction.TIME_IN): TimeWindow(time(13, 0), time(13, 15)),
        },
        fine_amount_absent=Decimal("150.00"),
    )


@pytest.fixture
def seeded(container: Container, window_event: Event) -> Container:
    container.events_repo.save(window_event)
    return container
