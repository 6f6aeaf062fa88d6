from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class _Pending:
    """One queued request; ``owned`` when a ``submit`` caller waits for it."""

    __slots__ = ("request", "handler", "owned", "done", "result", "error")

    def __init__(self, request: Any, handler: Optional[Callable[[Any], Any]], *, owned: bool):
        self.request = request
        self.handler = handler
        self.owned = owned
        self.done = False
        self.result: Any = None
        self.error: Optional[Exception] = None


class ScanSequencer(Generic[T]):
    """FIFO admission queue for scan requests.

    Exactly one request is in flight at a time, always the head. It is
    dequeued once its handler has finished, whether it succeeded or raised.
    Whichever caller is free runs the head: a ``submit`` caller works through
    earlier requests (including ones queued with ``admit``) until its own is
    done. Share one instance between the callers whose scans must be
    processed in arrival order.
    """

    def __init__(self) -> None:
        self._queue: deque[_Pending] = deque()
        self._cond = threading.Condition()
        self._busy = False

    def admit(self, request: T, handler: Optional[Callable[[T], Any]] = None) -> None:
        """Queue ``request``; it runs with ``handler`` or with whatever handler processes the head."""
        with self._cond:
            self._queue.append(_Pending(request, handler, owned=False))
            self._cond.notify_all()

    def process_head(self, handler: Callable[[T], R]) -> Optional[R]:
        """Run the oldest queued request, then dequeue it.

        Waits while another request is in flight. Returns None when nothing is
        queued. Exceptions from an admitted request propagate here after it
        has been dequeued; a submitted request's outcome goes to its submitter.
        """
        with self._cond:
            while self._busy:
                self._cond.wait()
            if not self._queue:
                logger.debug("Scan queue empty; nothing to process")
                return None
            entry = self._claim_head()

        self._run(entry, handler)
        if entry.error is not None and not entry.owned:
            raise entry.error
        return entry.result

    def submit(self, request: T, handler: Callable[[T], R]) -> R:
        """Queue ``request`` and return its result once every earlier request has finished."""
        mine = _Pending(request, handler, owned=True)
        with self._cond:
            self._queue.append(mine)

        while True:
            with self._cond:
                while self._busy and not mine.done:
                    self._cond.wait()
                if mine.done:
                    break
                entry = self._claim_head()

            self._run(entry, handler)
            if entry is not mine and entry.error is not None and not entry.owned:
                logger.warning("Queued scan %r failed: %s", entry.request, entry.error)

        if mine.error is not None:
            raise mine.error
        return mine.result

    def _claim_head(self) -> _Pending:
        # Caller holds the condition and has checked the queue is not empty.
        self._busy = True
        return self._queue[0]

    def _run(self, entry: _Pending, fallback: Callable[[Any], Any]) -> None:
        handler = entry.handler or fallback
        try:
            entry.result = handler(entry.request)
        except Exception as e:
            entry.error = e
        finally:
            with self._cond:
                if self._queue and self._queue[0] is entry:
                    self._queue.popleft()
                entry.done = True
                self._busy = False
                self._cond.notify_all()

    def __len__(self) -> int:
        with self._cond:
            return len(self._queue)

    def is_empty(self) -> bool:
        return len(self) == 0
