from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.attendance_fines.attendance_fines.ledger.model import Fine
from src.attendance_fines.attendance_fines.ledger.recent import RecentActivityLog


def _fine(n: int) -> Fine:
    return Fine(f"FINE-{n}", f"TXN-{n}", "S1", "E1", Decimal("20"), date(2025, 3, n))


def test_peek_recent_is_newest_first_and_non_destructive():
    log = RecentActivityLog()
    for n in (1, 2, 3):
        log.push(_fine(n))

    assert [t.fine_id for t in log.peek_recent(2)] == ["FINE-3", "FINE-2"]
    assert len(log) == 3
    assert [t.fine_id for t in log.peek_recent(10)] == ["FINE-3", "FINE-2", "FINE-1"]


def test_peek_recent_with_non_positive_n_is_empty():
    log = RecentActivityLog()
    log.push(_fine(1))
    assert log.peek_recent(0) == []
    assert log.peek_recent(-1) == []


def test_capacity_drops_oldest():
    log = RecentActivityLog(capacity=2)
    for n in (1, 2, 3):
        log.push(_fine(n))

    assert [t.fine_id for t in log.peek_recent(5)] == ["FINE-3", "FINE-2"]
