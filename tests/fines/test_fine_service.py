from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.attendance_fines.attendance_fines.attendance.model import AttendanceRecord
from src.attendance_fines.attendance_fines.core.enums import AttendanceStatus
from src.attendance_fines.attendance_fines.core.exceptions import NotFoundError
from src.attendance_fines.attendance_fines.database.store import MemoryStore
from src.attendance_fines.attendance_fines.fines.memory_fine_repository import MemoryFineRepository
from src.attendance_fines.attendance_fines.fines.service import FineService


@pytest.fixture
def service() -> FineService:
    return FineService(MemoryFineRepository(MemoryStore()), today=lambda: date(2025, 3, 1))


def _record(status: AttendanceStatus, minutes_late: int = 0, student_id: str = "S1") -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=f"ATT-{student_id}",
        student_id=student_id,
        event_id="E1",
        status=status,
        minutes_late=minutes_late,
    )


def test_issue_fine_twice_persists_one(service):
    first = service.issue_fine(_record(AttendanceStatus.LATE, 15))
    second = service.issue_fine(_record(AttendanceStatus.LATE, 15))

    assert first is not None
    assert first.amount == Decimal("30.00")
    assert first.date == date(2025, 3, 1)
    assert second is None
    assert len(service.list_for_event("E1")) == 1


def test_present_and_excused_never_materialize_a_fine(service):
    assert service.issue_fine(_record(AttendanceStatus.PRESENT)) is None
    assert service.issue_fine(_record(AttendanceStatus.EXCUSED, student_id="S2")) is None
    assert service.list_for_event("E1") == []


def test_late_with_zero_minutes_is_not_fined(service):
    assert service.issue_fine(_record(AttendanceStatus.LATE, 0)) is None


def test_generate_fines_skips_already_fined(service):
    service.issue_fine(_record(AttendanceStatus.ABSENT, student_id="S1"))

    issued = service.generate_fines(
        [_record(AttendanceStatus.ABSENT, student_id="S1"), _record(AttendanceStatus.ABSENT, student_id="S2")]
    )

    assert [f.student_id for f in issued] == ["S2"]


def test_delete_missing_fine_raises(service):
    with pytest.raises(NotFoundError):
        service.delete_fine("FINE-NOPE")
