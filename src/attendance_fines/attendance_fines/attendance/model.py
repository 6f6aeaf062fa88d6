from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, Direction, ScanSource, Session


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance at one event."""

    attendance_id: str
    student_id: str
    event_id: str
    status: AttendanceStatus
    minutes_late: int = 0
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    scan_source: ScanSource = ScanSource.MANUAL
    session: Optional[Session] = None


@dataclass(frozen=True)
class ScanRequest:
    """A single scan as submitted by a reader or an operator.

    Either ``rfid_tag`` or ``student_id`` identifies the student.
    """

    event_id: str
    scanned_at: datetime
    session: Optional[Session] = None
    direction: Direction = Direction.TIME_IN
    rfid_tag: Optional[str] = None
    student_id: Optional[str] = None
