from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..ledger.model import Fine


class FineRepository(Protocol):
    def list_for_student(self, student_id: str) -> Sequence[Fine]:
        raise NotImplementedError

    def list_for_event(self, event_id: str) -> Sequence[Fine]:
        raise NotImplementedError

    def get_for_student_and_event(self, student_id: str, event_id: str) -> Optional[Fine]:
        raise NotImplementedError

    def save(self, fine: Fine) -> bool:
        """Store a fine; returns False if (student, event) is already fined."""

        raise NotImplementedError

    def delete(self, fine_id: str) -> bool:
        raise NotImplementedError
