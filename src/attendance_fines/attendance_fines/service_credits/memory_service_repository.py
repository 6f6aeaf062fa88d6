from __future__ import annotations

from typing import Optional, Sequence

from ..database.store import MemoryStore
from .model import CommunityServiceRecord
from .repository import CommunityServiceRepository


class MemoryCommunityServiceRepository(CommunityServiceRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, service_id: str) -> Optional[CommunityServiceRecord]:
        with self._store.session() as tables:
            return tables["community_service"].get(service_id)

    def list_for_student(self, student_id: str) -> Sequence[CommunityServiceRecord]:
        with self._store.session() as tables:
            rows = tables["community_service"].values()
            return sorted((r for r in rows if r.student_id == student_id), key=lambda r: r.date)

    def save(self, record: CommunityServiceRecord) -> None:
        with self._store.session(write="community_service") as tables:
            tables["community_service"][record.service_id] = record

    def delete(self, service_id: str) -> bool:
        with self._store.session(write="community_service") as tables:
            return tables["community_service"].pop(service_id, None) is not None
