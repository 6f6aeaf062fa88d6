from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..ledger.model import CashPayment


class PaymentRepository(Protocol):
    def get_by_id(self, payment_id: str) -> Optional[CashPayment]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[CashPayment]:
        raise NotImplementedError

    def save(self, payment: CashPayment) -> None:
        raise NotImplementedError

    def update(self, payment: CashPayment) -> bool:
        raise NotImplementedError

    def delete(self, payment_id: str) -> bool:
        raise NotImplementedError
