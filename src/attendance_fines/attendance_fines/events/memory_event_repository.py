from __future__ import annotations

from typing import Optional, Sequence

from ..database.store import MemoryStore
from .model import Event
from .repository import EventRepository


class MemoryEventRepository(EventRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with self._store.session() as tables:
            return tables["events"].get(event_id)

    def list_all(self) -> Sequence[Event]:
        with self._store.session() as tables:
            return sorted(tables["events"].values(), key=lambda e: (e.event_date, e.event_id))

    def save(self, event: Event) -> None:
        with self._store.session(write="events") as tables:
            tables["events"][event.event_id] = event

    def delete(self, event_id: str) -> bool:
        with self._store.session(write="events") as tables:
            return tables["events"].pop(event_id, None) is not None
