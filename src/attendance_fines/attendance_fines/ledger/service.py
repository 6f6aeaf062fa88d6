from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import BalancePolicy
from ..fines.repository import FineRepository
from ..payments.repository import PaymentRepository
from ..service_credits.repository import CommunityServiceRepository
from .aggregator import ZERO, LedgerAggregator, balance_for
from .model import Ledger, Transaction
from .recent import RecentActivityLog

logger = logging.getLogger(__name__)


class LedgerService:
    """Builds student ledgers from the fine, payment and community-service stores.

    Nothing here caches a balance: every call re-reads the stores and
    re-aggregates.
    """

    def __init__(
        self,
        fines: FineRepository,
        payments: PaymentRepository,
        services: CommunityServiceRepository,
        *,
        aggregator: Optional[LedgerAggregator] = None,
        recent: Optional[RecentActivityLog] = None,
    ):
        self._fines = fines
        self._payments = payments
        self._services = services
        self._aggregator = aggregator or LedgerAggregator()
        self._recent = recent if recent is not None else RecentActivityLog()

    def get_ledger(
        self,
        student_id: str,
        *,
        opening_balance: Decimal = ZERO,
        now: Optional[datetime] = None,
    ) -> Ledger:
        fines = self._fines.list_for_student(student_id)
        payments = self._payments.list_for_student(student_id)
        services = self._services.list_for_student(student_id)

        credit_total = sum((Decimal(s.credit_amount) for s in services), ZERO)
        return self._aggregator.aggregate(
            opening_balance,
            [*fines, *payments],
            credit_total,
            student_id=student_id,
            credit_entries=[s.to_credit_entry() for s in services],
            now=now,
        )

    def get_balance(self, student_id: str, *, policy: BalancePolicy = BalancePolicy.UNCLAMPED) -> Decimal:
        return balance_for(self.get_ledger(student_id), policy)

    def add_transaction(self, transaction: Transaction) -> Ledger:
        """Record a ledger mutation and return the recomputed ledger.

        The transaction must already be stored by its owning service.
        """
        self._recent.push(transaction)
        ledger = self.get_ledger(transaction.student_id)
        logger.debug(
            "Ledger for student=%s recomputed after %s %s: balance=%s",
            transaction.student_id, transaction.kind.value, transaction.transaction_id, ledger.balance,
        )
        return ledger

    def transactions_between(self, student_id: str, start: date, end: date) -> list[Transaction]:
        return self.get_ledger(student_id).transactions_between(start, end)

    def all_transactions(self, student_id: str) -> list[Transaction]:
        return self.get_ledger(student_id).history

    def recent_transactions(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[Transaction]:
        return self._recent.peek_recent(limit)

    def recent_size(self) -> int:
        return len(self._recent)
