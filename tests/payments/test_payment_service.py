from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.attendance_fines.attendance_fines.core.exceptions import NotFoundError, ValidationError
from src.attendance_fines.attendance_fines.ledger.model import CashPayment
from src.attendance_fines.attendance_fines.payments.service import PaymentService


class VanishingPaymentRepo:
    """Finds the payment, but it is gone by the time the update lands."""

    def __init__(self, payment: CashPayment):
        self._payment = payment

    def get_by_id(self, payment_id):
        return self._payment if payment_id == self._payment.payment_id else None

    def list_for_student(self, student_id):
        return [self._payment]

    def save(self, payment):
        raise AssertionError("save is not expected")

    def update(self, payment):
        return False

    def delete(self, payment_id):
        return False


class RecordingLedger:
    def __init__(self):
        self.pushed = []

    def add_transaction(self, txn):
        self.pushed.append(txn)


def _payment() -> CashPayment:
    return CashPayment(
        payment_id="PAY-1",
        transaction_id="TXN-1",
        student_id="2021-0001",
        amount=Decimal("50"),
        receipt_no="1001",
        date=date(2025, 3, 2),
    )


def test_update_of_vanished_payment_is_not_found_and_not_pushed():
    ledger = RecordingLedger()
    service = PaymentService(VanishingPaymentRepo(_payment()), ledger)

    with pytest.raises(NotFoundError):
        service.update_payment("PAY-1", student_id="2021-0001", amount="75", receipt_no="1002", on=date(2025, 3, 3))

    assert ledger.pushed == []


def test_update_payment_changes_amount_and_pushes(container):
    paid = container.payment_service.record_payment(student_id="2021-0001", amount="50", receipt_no="1001", on=date(2025, 3, 2))

    updated = container.payment_service.update_payment(
        paid.payment_id, student_id="2021-0001", amount="75", receipt_no="1002", on=date(2025, 3, 3)
    )

    assert updated.amount == Decimal("75")
    assert container.payments_repo.get_by_id(paid.payment_id).receipt_no == "1002"
    assert container.ledger_service.recent_transactions(1)[0].amount == Decimal("75")


def test_update_unknown_payment_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.payment_service.update_payment("PAY-404", student_id="2021-0001", amount="1", receipt_no="1", on=date(2025, 3, 3))


def test_receipt_number_must_be_digits(container):
    with pytest.raises(ValidationError):
        container.payment_service.record_payment(student_id="2021-0001", amount="10", receipt_no="OR-1", on=date(2025, 3, 2))
