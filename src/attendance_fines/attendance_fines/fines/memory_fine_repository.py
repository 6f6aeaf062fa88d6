from __future__ import annotations

from typing import Optional, Sequence

from ..database.store import MemoryStore
from ..ledger.model import Fine
from .repository import FineRepository


class MemoryFineRepository(FineRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_for_student(self, student_id: str) -> Sequence[Fine]:
        with self._store.session() as tables:
            return sorted((f for f in tables["fines"].values() if f.student_id == student_id), key=lambda f: f.date)

    def list_for_event(self, event_id: str) -> Sequence[Fine]:
        with self._store.session() as tables:
            return [f for f in tables["fines"].values() if f.event_id == event_id]

    def get_for_student_and_event(self, student_id: str, event_id: str) -> Optional[Fine]:
        with self._store.session() as tables:
            for f in tables["fines"].values():
                if f.student_id == student_id and f.event_id == event_id:
                    return f
            return None

    def save(self, fine: Fine) -> bool:
        with self._store.session(write="fines") as tables:
            for f in tables["fines"].values():
                if f.student_id == fine.student_id and f.event_id == fine.event_id:
                    return False
            tables["fines"][fine.fine_id] = fine
            return True

    def delete(self, fine_id: str) -> bool:
        with self._store.session(write="fines") as tables:
            return tables["fines"].pop(fine_id, None) is not None
