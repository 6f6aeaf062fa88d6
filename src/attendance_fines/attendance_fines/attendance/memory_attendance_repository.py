from __future__ import annotations

from typing import Optional, Sequence

from ..database.store import MemoryStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MemoryAttendanceRepository(AttendanceRepository):
    """Attendance rows keyed by (student_id, event_id): one record per pair."""

    def __init__(self, store: MemoryStore):
        self._store = store

    def get_for_student_and_event(self, student_id: str, event_id: str) -> Optional[AttendanceRecord]:
        with self._store.session() as tables:
            return tables["attendance"].get((student_id, event_id))

    def list_for_event(self, event_id: str) -> Sequence[AttendanceRecord]:
        with self._store.session() as tables:
            return [r for r in tables["attendance"].values() if r.event_id == event_id]

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        with self._store.session() as tables:
            return [r for r in tables["attendance"].values() if r.student_id == student_id]

    def create(self, record: AttendanceRecord) -> bool:
        key = (record.student_id, record.event_id)
        with self._store.session(write="attendance") as tables:
            if key in tables["attendance"]:
                return False
            tables["attendance"][key] = record
            return True

    def update(self, record: AttendanceRecord) -> bool:
        key = (record.student_id, record.event_id)
        with self._store.session(write="attendance") as tables:
            current = tables["attendance"].get(key)
            if not current or current.attendance_id != record.attendance_id:
                return False
            tables["attendance"][key] = record
            return True
