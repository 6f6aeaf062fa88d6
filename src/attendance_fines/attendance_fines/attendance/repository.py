from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_student_and_event(self, student_id: str, event_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_event(self, event_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> bool:
        """Insert a record; returns False if (student, event) already has one."""

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError
