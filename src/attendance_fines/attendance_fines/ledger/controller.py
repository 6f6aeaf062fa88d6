from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.responses import error_response, ledger_to_dict, money, server_error, transaction_to_dict
from ..container import Container
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import BalancePolicy
from ..core.exceptions import DomainError, NotFoundError, ValidationError


def _parse_policy(value) -> BalancePolicy:
    if not value:
        return BalancePolicy.UNCLAMPED
    try:
        return BalancePolicy(str(value).upper())
    except ValueError:
        raise ValidationError(f"Unknown balance policy: {value}")


def _parse_day(value):
    if not value:
        return now_local().date()
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Dates must be YYYY-MM-DD: {value}")


def register(app: Flask, container: Container) -> None:
    def _require_student(student_id: str) -> None:
        if not container.students_repo.get_by_id(student_id):
            raise NotFoundError(f"Student not found: {student_id}")

    @app.route("/api/students/<student_id>/ledger", methods=["GET"], endpoint="api_student_ledger")
    def api_student_ledger(student_id: str):
        """Ledger with optional ``start``/``end`` (YYYY-MM-DD) history filter."""
        try:
            _require_student(student_id)
            ledger = container.ledger_service.get_ledger(student_id)
            start_s = request.args.get("start")
            end_s = request.args.get("end")
            history = None
            if start_s or end_s:
                start = _parse_day(start_s) if start_s else date.min
                end = _parse_day(end_s) if end_s else date.max
                history = ledger.transactions_between(start, end)
            return jsonify({"success": True, "ledger": ledger_to_dict(ledger, history)}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while building the ledger")

    @app.route("/api/students/<student_id>/clearance", methods=["GET"], endpoint="api_student_clearance")
    def api_student_clearance(student_id: str):
        try:
            decision = container.clearance_service.decide(student_id, policy=_parse_policy(request.args.get("policy")))
            return jsonify(
                {
                    "success": True,
                    "student_id": decision.student_id,
                    "status": decision.status.value,
                    "eligible": decision.eligible,
                    "balance": money(decision.balance),
                    "policy": decision.policy.value,
                    "display": container.clearance_service.get_status_with_balance(student_id),
                }
            ), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while checking clearance")

    @app.route("/api/ledger/recent", methods=["GET"], endpoint="api_recent_transactions")
    def api_recent_transactions():
        try:
            limit = int(request.args.get("limit", DEFAULT_RECENT_LIMIT))
        except ValueError:
            return jsonify({"success": False, "message": "limit must be a whole number"}), 400
        rows = container.ledger_service.recent_transactions(limit)
        return jsonify({"success": True, "transactions": [transaction_to_dict(t) for t in rows]}), 200

    @app.route("/api/students/<student_id>/payments", methods=["POST"], endpoint="api_record_payment")
    def api_record_payment(student_id: str):
        try:
            _require_student(student_id)
            data = request.get_json(silent=True) or {}
            payment = container.payment_service.record_payment(
                student_id=student_id,
                amount=data.get("amount"),
                receipt_no=data.get("receipt_no"),
                on=_parse_day(data.get("date")),
            )
            return jsonify({"success": True, "payment": transaction_to_dict(payment)}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while recording the payment")

    @app.route("/api/students/<student_id>/service-credits", methods=["POST"], endpoint="api_record_service")
    def api_record_service(student_id: str):
        try:
            _require_student(student_id)
            data = request.get_json(silent=True) or {}
            record = container.community_service_service.record_service(
                student_id=student_id,
                hours_rendered=data.get("hours"),
                on=_parse_day(data.get("date")),
                description=data.get("description"),
            )
            return jsonify(
                {"success": True, "service_credit": transaction_to_dict(record.to_credit_entry())}
            ), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while recording community service")

    @app.route("/api/reports/balances", methods=["GET"], endpoint="api_balance_report")
    def api_balance_report():
        data = container.report_service.build_balance_report(
            course=request.args.get("course"),
            year_level=request.args.get("year_level"),
            section=request.args.get("section"),
        )
        return jsonify({"success": True, "rows": data.rows, "summary": data.summary}), 200
