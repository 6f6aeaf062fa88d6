from __future__ import annotations

from typing import Optional, Sequence

from ..database.store import MemoryStore
from ..ledger.model import CashPayment
from .repository import PaymentRepository


class MemoryPaymentRepository(PaymentRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, payment_id: str) -> Optional[CashPayment]:
        with self._store.session() as tables:
            return tables["payments"].get(payment_id)

    def list_for_student(self, student_id: str) -> Sequence[CashPayment]:
        with self._store.session() as tables:
            return sorted((p for p in tables["payments"].values() if p.student_id == student_id), key=lambda p: p.date)

    def save(self, payment: CashPayment) -> None:
        with self._store.session(write="payments") as tables:
            tables["payments"][payment.payment_id] = payment

    def update(self, payment: CashPayment) -> bool:
        with self._store.session(write="payments") as tables:
            if payment.payment_id not in tables["payments"]:
                return False
            tables["payments"][payment.payment_id] = payment
            return True

    def delete(self, payment_id: str) -> bool:
        with self._store.session(write="payments") as tables:
            return tables["payments"].pop(payment_id, None) is not None
