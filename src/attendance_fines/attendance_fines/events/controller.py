from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.responses import error_response, money, server_error
from ..container import Container
from ..core.enums import AttendanceMode, Direction, Session, SessionConfig
from ..core.exceptions import DomainError, ValidationError
from .model import Event, LegacyTimes, TimeWindow

LEGACY_FIELDS = ("am_time_in", "am_time_out", "pm_time_in", "pm_time_out")


def _enum(cls, value: Any, default, field_name: str):
    if value in (None, ""):
        return default
    try:
        return cls(str(value).upper())
    except ValueError:
        raise ValidationError(f"Unknown {field_name}: {value}")


def _time(value: Any, field_name: str):
    if value in (None, ""):
        return None
    try:
        return parse_hhmm(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM")


def _amount(value: Any, field_name: str) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid amount")


def _event_from_json(event_id: str, data: dict) -> Event:
    try:
        event_date = parse_iso_date(str(data.get("event_date") or ""))
    except ValueError:
        raise ValidationError("event_date must be YYYY-MM-DD")

    windows = {}
    for w in data.get("windows") or []:
        session = _enum(Session, w.get("session"), None, "session")
        if session is None:
            raise ValidationError("Each window needs a session")
        direction = _enum(Direction, w.get("direction"), Direction.TIME_IN, "direction")
        start = _time(w.get("start"), "start")
        stop = _time(w.get("stop"), "stop")
        if start is None or stop is None:
            raise ValidationError("Each window needs start and stop")
        windows[(session, direction)] = TimeWindow(start, stop)

    legacy = data.get("legacy") or {}
    semester = data.get("semester")
    try:
        semester = int(semester) if semester not in (None, "") else None
    except (TypeError, ValueError):
        raise ValidationError("Semester must be 1 or 2")

    return Event(
        event_id=event_id,
        event_name=data.get("event_name") or "",
        event_date=event_date,
        semester=semester,
        school_year=data.get("school_year"),
        attendance_mode=_enum(AttendanceMode, data.get("attendance_mode"), AttendanceMode.WINDOW, "attendance mode"),
        session_config=_enum(SessionConfig, data.get("session_config"), SessionConfig.BOTH, "session config"),
        windows=windows,
        legacy=LegacyTimes(**{f: _time(legacy.get(f), f) for f in LEGACY_FIELDS}),
        fine_amount_absent=_amount(data.get("fine_amount_absent"), "fine_amount_absent"),
        fine_amount_late=_amount(data.get("fine_amount_late"), "fine_amount_late"),
    )


def event_to_dict(event: Event) -> dict:
    return {
        "event_id": event.event_id,
        "event_name": event.event_name,
        "event_date": event.event_date.isoformat(),
        "semester": event.semester,
        "school_year": event.school_year,
        "attendance_mode": event.attendance_mode.value,
        "session_config": event.session_config.value,
        "windows": [
            {"session": s.value, "direction": d.value, "start": f"{w.start:%H:%M}", "stop": f"{w.stop:%H:%M}"}
            for (s, d), w in event.windows.items()
        ],
        "legacy": {
            f: (getattr(event.legacy, f).strftime("%H:%M") if getattr(event.legacy, f) else None)
            for f in LEGACY_FIELDS
        },
        "fine_amount_absent": money(event.fine_amount_absent) if event.fine_amount_absent is not None else None,
        "fine_amount_late": money(event.fine_amount_late) if event.fine_amount_late is not None else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="api_list_events")
    def api_list_events():
        events = container.event_service.list_events()
        return jsonify({"success": True, "events": [event_to_dict(e) for e in events]}), 200

    @app.route("/api/events", methods=["POST"], endpoint="api_add_event")
    def api_add_event():
        try:
            data = request.get_json(silent=True) or {}
            event_id = data.get("event_id")
            if not isinstance(event_id, str) or not event_id.strip():
                raise ValidationError("Event ID is required")
            event = container.event_service.add_event(_event_from_json(event_id.strip(), data))
            return jsonify({"success": True, "event": event_to_dict(event)}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while adding the event")

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="api_get_event")
    def api_get_event(event_id: str):
        try:
            return jsonify({"success": True, "event": event_to_dict(container.event_service.get_event(event_id))}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/api/events/<event_id>", methods=["PUT"], endpoint="api_update_event")
    def api_update_event(event_id: str):
        try:
            data = request.get_json(silent=True) or {}
            event = container.event_service.update_event(_event_from_json(event_id, data))
            return jsonify({"success": True, "event": event_to_dict(event)}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while updating the event")

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="api_delete_event")
    def api_delete_event(event_id: str):
        try:
            container.event_service.delete_event(event_id)
            return jsonify({"success": True}), 200
        except DomainError as e:
            return error_response(e)
