from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_rfid(self, rfid_tag: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def save(self, student: Student) -> None:
        raise NotImplementedError

    def search(self, query: str) -> Sequence[Student]:
        """Partial, case-insensitive match on ID, name or RFID tag."""

        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        raise NotImplementedError
