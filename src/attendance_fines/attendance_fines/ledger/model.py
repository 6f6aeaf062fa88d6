from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from ..core.enums import TransactionKind


@dataclass(frozen=True)
class Fine:
    """Fine issued for a LATE or ABSENT outcome; increases the balance."""

    fine_id: str
    transaction_id: str
    student_id: str
    event_id: str
    amount: Decimal
    date: date

    kind = TransactionKind.FINE

    @property
    def signed_amount(self) -> Decimal:
        return abs(self.amount)


@dataclass(frozen=True)
class CashPayment:
    """Cash payment backed by an official receipt number; decreases the balance."""

    payment_id: str
    transaction_id: str
    student_id: str
    amount: Decimal
    receipt_no: str
    date: date

    kind = TransactionKind.CASH_PAYMENT

    @property
    def signed_amount(self) -> Decimal:
        return -abs(self.amount)


@dataclass(frozen=True)
class ServiceCredit:
    """Monetary equivalent of community-service hours; decreases the balance."""

    payment_id: str
    transaction_id: str
    student_id: str
    amount: Decimal
    hours: int
    date: date
    description: Optional[str] = None

    kind = TransactionKind.SERVICE_CREDIT

    @property
    def signed_amount(self) -> Decimal:
        return -abs(self.amount)


Transaction = Union[Fine, CashPayment, ServiceCredit]


@dataclass(frozen=True)
class Ledger:
    """Per-student aggregate, rebuilt on every request (never persisted).

    ``transactions`` are classified and summed by kind. ``credit_entries`` are
    display rows for community-service records whose value arrives as the
    separately supplied ``supplied_service_credits`` total.
    """

    student_id: Optional[str]
    opening_balance: Decimal
    transactions: tuple[Transaction, ...]
    total_fines: Decimal
    total_payments: Decimal
    total_service_credits: Decimal
    closing_balance: Decimal
    last_updated: datetime
    supplied_service_credits: Decimal = Decimal("0")
    credit_entries: tuple[ServiceCredit, ...] = ()

    @property
    def balance(self) -> Decimal:
        return self.closing_balance

    @property
    def outstanding_balance(self) -> Decimal:
        """Reporting figure: fines - payments - credits floored at zero.

        Differs from ``balance``: ignores the opening balance and never goes
        negative.
        """
        return max(Decimal("0"), self.total_fines - self.total_payments - self.total_service_credits)

    @property
    def history(self) -> list[Transaction]:
        """All rows shown to the student, oldest first."""
        return sorted((*self.transactions, *self.credit_entries), key=lambda t: t.date)

    def transactions_between(self, start: date, end: date) -> list[Transaction]:
        return [t for t in self.history if start <= t.date <= end]
