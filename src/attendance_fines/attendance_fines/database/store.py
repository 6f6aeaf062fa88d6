from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

Tables = Dict[str, Dict[Any, Any]]


class MemoryStore:
    """Explicitly constructed persistence handle shared by the repositories.

    Note: One instance per application (built by the container); nothing here is
    process-global. Rows are immutable domain objects keyed per table.
    """

    TABLES = ("events", "students", "attendance", "fines", "payments", "community_service")

    def __init__(self, tables: Optional[Tables] = None):
        self._lock = threading.RLock()
        self._tables: Tables = {name: {} for name in self.TABLES}
        for name, rows in (tables or {}).items():
            self._tables.setdefault(name, {}).update(rows)

    @contextmanager
    def session(self, *, write: Optional[str] = None) -> Iterator[Tables]:
        """Serialized access to the tables.

        Pass ``write`` with the table a block modifies: that table alone is
        restored if the block raises. Read sessions copy nothing.
        """
        with self._lock:
            if write is None:
                yield self._tables
                return

            rows = self._tables[write]
            snapshot = dict(rows)
            try:
                yield self._tables
            except Exception:
                rows.clear()
                rows.update(snapshot)
                raise

    def clear(self) -> None:
        with self._lock:
            for rows in self._tables.values():
                rows.clear()
