from __future__ import annotations

from typing import Optional, Sequence

from ..database.store import MemoryStore
from .model import Student
from .repository import StudentRepository


class MemoryStudentRepository(StudentRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with self._store.session() as tables:
            return tables["students"].get(student_id)

    def get_by_rfid(self, rfid_tag: str) -> Optional[Student]:
        with self._store.session() as tables:
            for s in tables["students"].values():
                if s.rfid_tag and s.rfid_tag == rfid_tag:
                    return s
            return None

    def list_all(self) -> Sequence[Student]:
        with self._store.session() as tables:
            return sorted(tables["students"].values(), key=lambda s: s.student_id)

    def save(self, student: Student) -> None:
        with self._store.session(write="students") as tables:
            tables["students"][student.student_id] = student

    def search(self, query: str) -> Sequence[Student]:
        needle = query.strip().lower()
        with self._store.session() as tables:
            return sorted(
                (
                    s
                    for s in tables["students"].values()
                    if needle in s.student_id.lower()
                    or needle in s.full_name.lower()
                    or (s.rfid_tag and needle in s.rfid_tag.lower())
                ),
                key=lambda s: s.student_id,
            )

    def delete(self, student_id: str) -> bool:
        with self._store.session(write="students") as tables:
            return tables["students"].pop(student_id, None) is not None
