from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CommunityServiceRecord


class CommunityServiceRepository(Protocol):
    def get_by_id(self, service_id: str) -> Optional[CommunityServiceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[CommunityServiceRecord]:
        raise NotImplementedError

    def save(self, record: CommunityServiceRecord) -> None:
        raise NotImplementedError

    def delete(self, service_id: str) -> bool:
        raise NotImplementedError
