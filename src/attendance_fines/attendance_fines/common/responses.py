from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from flask import jsonify

from ..attendance.model import AttendanceRecord
from ..core.exceptions import ConfigurationError, DomainError, NotFoundError, ValidationError
from ..ledger.model import Ledger, Transaction

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConfigurationError, 409),
    (ValidationError, 400),
)


def money(value: Decimal) -> str:
    """Two-decimal string so JSON never carries binary floats."""
    return f"{value:.2f}"


def error_response(exc: DomainError):
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return jsonify({"success": False, "message": str(exc)}), status
    return jsonify({"success": False, "message": str(exc)}), 400


def server_error(message: str):
    logger.exception(message)
    return jsonify({"success": False, "message": message}), 500


def _iso(value: Optional[Any]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def attendance_to_dict(record: AttendanceRecord) -> dict:
    return {
        "attendance_id": record.attendance_id,
        "student_id": record.student_id,
        "event_id": record.event_id,
        "status": record.status.value,
        "minutes_late": record.minutes_late,
        "check_in_time": _iso(record.check_in_time),
        "check_out_time": _iso(record.check_out_time),
        "scan_source": record.scan_source.value,
        "session": record.session.value if record.session else None,
    }


def transaction_to_dict(txn: Transaction) -> dict:
    data = {
        "kind": txn.kind.value,
        "transaction_id": txn.transaction_id,
        "student_id": txn.student_id,
        "amount": money(txn.amount),
        "signed_amount": money(txn.signed_amount),
        "date": txn.date.isoformat(),
    }
    for extra in ("fine_id", "event_id", "payment_id", "receipt_no", "hours", "description"):
        if hasattr(txn, extra):
            data[extra] = getattr(txn, extra)
    return data


def ledger_to_dict(ledger: Ledger, history: Optional[list[Transaction]] = None) -> dict:
    rows = ledger.history if history is None else history
    return {
        "student_id": ledger.student_id,
        "opening_balance": money(ledger.opening_balance),
        "total_fines": money(ledger.total_fines),
        "total_payments": money(ledger.total_payments),
        "total_service_credits": money(ledger.total_service_credits),
        "balance": money(ledger.balance),
        "outstanding_balance": money(ledger.outstanding_balance),
        "last_updated": ledger.last_updated.isoformat(),
        "transactions": [transaction_to_dict(t) for t in rows],
    }
