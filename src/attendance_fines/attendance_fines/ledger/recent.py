from __future__ import annotations

import threading
from collections import deque
from itertools import islice
from typing import Optional

from ..core.constants import DEFAULT_RECENT_ACTIVITY_CAPACITY
from .model import Transaction


class RecentActivityLog:
    """LIFO view over the most recently recorded transactions.

    Display convenience only; the ledger's transaction list stays authoritative.
    Oldest entries fall off once ``capacity`` is reached.
    """

    def __init__(self, capacity: Optional[int] = DEFAULT_RECENT_ACTIVITY_CAPACITY):
        self._items: deque[Transaction] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def push(self, transaction: Transaction) -> None:
        with self._lock:
            self._items.append(transaction)

    def peek_recent(self, n: int) -> list[Transaction]:
        """Newest first; reading leaves the log unchanged."""
        if n <= 0:
            return []
        with self._lock:
            return list(islice(reversed(self._items), n))

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
