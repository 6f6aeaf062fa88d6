from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.attendance_fines.attendance_fines.attendance.model import ScanRequest
from src.attendance_fines.attendance_fines.core.enums import BalancePolicy, ClearanceStatus, Session


def _fine_ana(c, at):
    c.attendance_service.scan(ScanRequest("EVT-1", at, session=Session.AM, rfid_tag="RF-0001"))


def test_student_with_balance_is_not_cleared(seeded, fixed_now):
    _fine_ana(seeded, fixed_now)

    decision = seeded.clearance_service.decide("2021-0001")

    assert decision.status is ClearanceStatus.WITH_BALANCE
    assert decision.balance == Decimal("30.00")
    assert not seeded.clearance_service.is_eligible("2021-0001")
    assert seeded.clearance_service.get_status_with_balance("2021-0001") == "WITH BALANCE (₱30.00)"


def test_paying_in_full_clears(seeded, fixed_now):
    _fine_ana(seeded, fixed_now)
    seeded.payment_service.record_payment(student_id="2021-0001", amount="30", receipt_no="5001", on=date(2025, 3, 2))

    assert seeded.clearance_service.get_status("2021-0001") == "CLEARED"
    assert seeded.clearance_service.get_status_with_balance("2021-0001") == "CLEARED"


def test_overpaid_student_is_cleared_under_both_policies(seeded, fixed_now):
    _fine_ana(seeded, fixed_now)
    seeded.community_service_service.record_service(student_id="2021-0001", hours_rendered=2, on=date(2025, 3, 2))

    unclamped = seeded.clearance_service.decide("2021-0001", policy=BalancePolicy.UNCLAMPED)
    clamped = seeded.clearance_service.decide("2021-0001", policy=BalancePolicy.CLAMPED)

    assert unclamped.balance == Decimal("-70.00")
    assert clamped.balance == Decimal("0")
    assert unclamped.eligible and clamped.eligible


def test_unknown_student_has_unknown_status(container):
    assert container.clearance_service.get_status("9999-0000") == "UNKNOWN"
