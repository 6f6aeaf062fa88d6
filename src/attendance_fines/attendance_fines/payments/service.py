from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import require_digits, require_non_empty, require_positive_amount
from ..core.exceptions import NotFoundError
from ..ledger.model import CashPayment
from .repository import PaymentRepository

if TYPE_CHECKING:
    from ..ledger.service import LedgerService

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, payments: PaymentRepository, ledger: Optional["LedgerService"] = None):
        self._payments = payments
        self._ledger = ledger

    def record_payment(self, *, student_id: str, amount: Any, receipt_no: str, on: date) -> CashPayment:
        student_id = require_non_empty(student_id, "Student ID")
        value = require_positive_amount(amount, "Payment amount")
        receipt = require_digits(receipt_no, "OR Number")

        payment = CashPayment(
            payment_id=new_id("PAY"),
            transaction_id=new_id("TXN"),
            student_id=student_id,
            amount=value,
            receipt_no=receipt,
            date=on,
        )
        self._payments.save(payment)
        logger.info("Recorded payment %s of %s for student=%s", payment.payment_id, value, student_id)

        if self._ledger is not None:
            self._ledger.add_transaction(payment)
        return payment

    def update_payment(self, payment_id: str, *, student_id: str, amount: Any, receipt_no: str, on: date) -> CashPayment:
        payment_id = require_non_empty(payment_id, "Payment ID")
        existing = self._payments.get_by_id(payment_id)
        if not existing:
            raise NotFoundError(f"Payment not found: {payment_id}")

        updated = replace(
            existing,
            student_id=require_non_empty(student_id, "Student ID"),
            amount=require_positive_amount(amount, "Payment amount"),
            receipt_no=require_digits(receipt_no, "OR Number"),
            date=on,
        )
        if not self._payments.update(updated):
            raise NotFoundError(f"Payment not found: {payment_id}")
        logger.info("Updated payment %s", payment_id)

        if self._ledger is not None:
            self._ledger.add_transaction(updated)
        return updated

    def delete_payment(self, payment_id: str) -> None:
        if not self._payments.delete(payment_id):
            raise NotFoundError(f"Payment not found: {payment_id}")
        logger.info("Deleted payment %s", payment_id)

    def list_for_student(self, student_id: str) -> Sequence[CashPayment]:
        return self._payments.list_for_student(student_id)
