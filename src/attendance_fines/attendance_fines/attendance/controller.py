from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_datetime
from ..common.responses import attendance_to_dict, error_response, money, server_error, transaction_to_dict
from ..container import Container
from ..core.enums import Direction, Session
from ..core.exceptions import DomainError, ValidationError
from .model import ScanRequest
from .service import FinalizationResult


def _parse_session(value) -> Session | None:
    if value in (None, ""):
        return None
    try:
        return Session(str(value).upper())
    except ValueError:
        raise ValidationError(f"Unknown session: {value}")


def _parse_direction(value) -> Direction:
    if value in (None, ""):
        return Direction.TIME_IN
    try:
        return Direction(str(value).upper())
    except ValueError:
        raise ValidationError(f"Unknown direction: {value}")


def _parse_scanned_at(value) -> datetime:
    if value in (None, ""):
        return now_local()
    if not isinstance(value, str):
        raise ValidationError("scanned_at must be an ISO-8601 timestamp")
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError("scanned_at must be an ISO-8601 timestamp")


def _optional_text(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def _finalization_to_dict(result: FinalizationResult) -> dict:
    return {
        "success": True,
        "event_id": result.event_id,
        "absent_marked": [r.student_id for r in result.absent_marked],
        "fines_issued": [transaction_to_dict(f) for f in result.fines_issued],
        "total_fined": money(sum((f.amount for f in result.fines_issued), 0)),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/scan", methods=["POST"], endpoint="api_scan")
    def api_scan(event_id: str):
        """Record one RFID or manual scan against an event."""
        try:
            data = request.get_json(silent=True) or {}
            scan = ScanRequest(
                event_id=event_id,
                scanned_at=_parse_scanned_at(data.get("scanned_at")),
                session=_parse_session(data.get("session")),
                direction=_parse_direction(data.get("direction")),
                rfid_tag=_optional_text(data, "rfid_tag"),
                student_id=_optional_text(data, "student_id"),
            )
            record = container.attendance_service.scan(scan)
            return jsonify({"success": True, "attendance": attendance_to_dict(record)}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while recording the scan")

    @app.route("/api/events/<event_id>/finalize", methods=["POST"], endpoint="api_finalize_event")
    def api_finalize_event(event_id: str):
        try:
            result = container.attendance_service.finalize_event(event_id)
            return jsonify(_finalization_to_dict(result)), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while finalizing the event")

    @app.route("/api/events/<event_id>/absentees", methods=["POST"], endpoint="api_mark_absentees")
    def api_mark_absentees(event_id: str):
        try:
            data = request.get_json(silent=True) or {}
            session = _parse_session(data.get("session"))
            if session is None:
                raise ValidationError("session is required")
            result = container.attendance_service.mark_session_absentees(
                event_id,
                session=session,
                direction=_parse_direction(data.get("direction")),
            )
            return jsonify(_finalization_to_dict(result)), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while marking absentees")

    @app.route("/api/events/<event_id>/attendance", methods=["GET"], endpoint="api_event_attendance")
    def api_event_attendance(event_id: str):
        records = container.attendance_service.list_for_event(event_id)
        return jsonify({"success": True, "attendance": [attendance_to_dict(r) for r in records]}), 200
