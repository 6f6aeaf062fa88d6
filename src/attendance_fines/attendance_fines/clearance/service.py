from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import BalancePolicy, ClearanceStatus
from ..ledger.aggregator import balance_for
from ..ledger.service import LedgerService
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class ClearanceDecision:
    student_id: str
    status: ClearanceStatus
    balance: Decimal
    policy: BalancePolicy

    @property
    def eligible(self) -> bool:
        return self.status is ClearanceStatus.CLEARED


class ClearanceService:
    """Clearance rule: a student is cleared when the balance is <= 0.

    ``policy`` only changes the figure reported alongside the decision;
    max(0, x) <= 0 exactly when x <= 0, so both policies clear the same
    students whenever the opening balance is zero.
    """

    def __init__(
        self,
        ledger: LedgerService,
        students: Optional[StudentRepository] = None,
        *,
        policy: BalancePolicy = BalancePolicy.UNCLAMPED,
    ):
        self._ledger = ledger
        self._students = students
        self._policy = policy

    def decide(self, student_id: str, *, policy: Optional[BalancePolicy] = None) -> ClearanceDecision:
        policy = policy or self._policy
        if self._students is not None and not self._students.get_by_id(student_id):
            return ClearanceDecision(student_id, ClearanceStatus.UNKNOWN, Decimal("0"), policy)

        balance = balance_for(self._ledger.get_ledger(student_id), policy)
        status = ClearanceStatus.CLEARED if balance <= 0 else ClearanceStatus.WITH_BALANCE
        return ClearanceDecision(student_id, status, balance, policy)

    def is_eligible(self, student_id: str) -> bool:
        return self.decide(student_id).eligible

    def get_status(self, student_id: str) -> str:
        return self.decide(student_id).status.value

    def get_status_with_balance(self, student_id: str) -> str:
        decision = self.decide(student_id)
        if decision.status is ClearanceStatus.WITH_BALANCE:
            return f"{decision.status.value} (₱{decision.balance:,.2f})"
        return decision.status.value
