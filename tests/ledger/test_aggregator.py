from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from src.attendance_fines.attendance_fines.core.enums import BalancePolicy
from src.attendance_fines.attendance_fines.ledger.aggregator import LedgerAggregator, balance_for
from src.attendance_fines.attendance_fines.ledger.model import CashPayment, Fine, ServiceCredit

DAY = date(2025, 3, 1)
NOW = datetime(2025, 3, 2, 9, 0)


def _transactions():
    return [
        Fine("FINE-1", "TXN-1", "S1", "E1", Decimal("100"), DAY),
        CashPayment("PAY-1", "TXN-2", "S1", Decimal("40"), "12345", DAY),
        ServiceCredit("SVC-PAY-1", "SVC-TXN-1", "S1", Decimal("50"), 1, DAY),
    ]


def test_supplied_service_total_adds_to_classified_credits():
    ledger = LedgerAggregator().aggregate(Decimal("0"), _transactions(), Decimal("50"), student_id="S1", now=NOW)

    assert ledger.total_fines == Decimal("100")
    assert ledger.total_payments == Decimal("40")
    assert ledger.total_service_credits == Decimal("100")
    assert ledger.balance == Decimal("-40")


def test_clamped_reporting_figure_is_a_separate_computation():
    ledger = LedgerAggregator().aggregate(Decimal("0"), _transactions(), Decimal("50"), now=NOW)

    assert balance_for(ledger, BalancePolicy.UNCLAMPED) == Decimal("-40")
    assert balance_for(ledger, BalancePolicy.CLAMPED) == Decimal("0")


def test_opening_balance_carries_into_closing():
    ledger = LedgerAggregator().aggregate(Decimal("25"), _transactions()[:1], now=NOW)
    assert ledger.balance == Decimal("125")
    # Reporting figure ignores the opening balance.
    assert ledger.outstanding_balance == Decimal("100")


def test_aggregation_is_pure():
    agg = LedgerAggregator()
    txns = _transactions()

    a = agg.aggregate(Decimal("0"), txns, Decimal("50"), now=NOW)
    b = agg.aggregate(Decimal("0"), txns, Decimal("50"), now=NOW)

    assert a == b
    assert len(txns) == 3


def test_add_transaction_recomputes_totals():
    agg = LedgerAggregator()
    ledger = agg.aggregate(Decimal("0"), _transactions()[:1], now=NOW)

    updated = agg.add_transaction(ledger, CashPayment("PAY-2", "TXN-3", "S1", Decimal("100"), "999", DAY), now=NOW)

    assert ledger.balance == Decimal("100")
    assert updated.balance == Decimal("0")
    assert len(updated.transactions) == 2
