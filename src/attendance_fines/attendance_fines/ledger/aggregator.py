"""Ledger aggregation.

Balance formula::

    closing = opening + total_fines - total_payments - total_service_credits

The closing balance is not clamped. ``outstanding_balance`` is the separate
reporting computation that floors the figure at zero; callers pick one
explicitly (see ``BalancePolicy``).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import BalancePolicy, TransactionKind
from .model import Ledger, ServiceCredit, Transaction

ZERO = Decimal("0")


def outstanding_balance(total_fines: Decimal, total_payments: Decimal, total_service_credits: Decimal) -> Decimal:
    return max(ZERO, total_fines - total_payments - total_service_credits)


def balance_for(ledger: Ledger, policy: BalancePolicy) -> Decimal:
    if policy is BalancePolicy.CLAMPED:
        return ledger.outstanding_balance
    return ledger.closing_balance


class LedgerAggregator:
    def aggregate(
        self,
        opening_balance: Decimal,
        transactions: Iterable[Transaction],
        service_credit_total: Decimal = ZERO,
        *,
        student_id: Optional[str] = None,
        credit_entries: Sequence[ServiceCredit] = (),
        now: Optional[datetime] = None,
    ) -> Ledger:
        """Build a ledger from scratch.

        ``service_credit_total`` is added on top of any SERVICE_CREDIT
        transactions found in ``transactions``. ``credit_entries`` are the
        per-record rows behind that total: listed for display, not summed.
        """
        txns = tuple(transactions)
        fines = payments = credits = ZERO

        for t in txns:
            magnitude = abs(Decimal(t.amount))
            if t.kind is TransactionKind.FINE:
                fines += magnitude
            elif t.kind is TransactionKind.SERVICE_CREDIT:
                credits += magnitude
            else:
                payments += magnitude

        supplied = abs(Decimal(service_credit_total))
        credits += supplied
        opening = Decimal(opening_balance)

        return Ledger(
            student_id=student_id,
            opening_balance=opening,
            transactions=txns,
            total_fines=fines,
            total_payments=payments,
            total_service_credits=credits,
            closing_balance=opening + fines - payments - credits,
            last_updated=now or now_local(),
            supplied_service_credits=supplied,
            credit_entries=tuple(credit_entries),
        )

    def add_transaction(self, ledger: Ledger, transaction: Transaction, *, now: Optional[datetime] = None) -> Ledger:
        """Return ``ledger`` with ``transaction`` appended, fully recomputed."""
        return self.aggregate(
            ledger.opening_balance,
            (*ledger.transactions, transaction),
            ledger.supplied_service_credits,
            student_id=ledger.student_id,
            credit_entries=ledger.credit_entries,
            now=now,
        )
