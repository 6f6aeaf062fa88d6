from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.responses import error_response, server_error
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import Student


def _text(data: dict, key: str) -> Optional[str]:
    value: Any = data.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be text")
    return value


def student_to_dict(student: Student) -> dict:
    return {
        "student_id": student.student_id,
        "full_name": student.full_name,
        "rfid_tag": student.rfid_tag,
        "course": student.course,
        "year_level": student.year_level,
        "section": student.section,
    }


def _student_from_json(student_id: Optional[str], data: dict) -> Student:
    return Student(
        student_id=student_id or "",
        full_name=_text(data, "full_name") or "",
        rfid_tag=_text(data, "rfid_tag"),
        course=_text(data, "course"),
        year_level=_text(data, "year_level"),
        section=_text(data, "section"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="api_search_students")
    def api_search_students():
        students = container.student_service.search(request.args.get("q"))
        return jsonify({"success": True, "students": [student_to_dict(s) for s in students]}), 200

    @app.route("/api/students", methods=["POST"], endpoint="api_register_student")
    def api_register_student():
        try:
            data = request.get_json(silent=True) or {}
            student = container.student_service.register_student(_student_from_json(_text(data, "student_id"), data))
            return jsonify({"success": True, "student": student_to_dict(student)}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while registering the student")

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="api_get_student")
    def api_get_student(student_id: str):
        try:
            return jsonify({"success": True, "student": student_to_dict(container.student_service.get_student(student_id))}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="api_update_student")
    def api_update_student(student_id: str):
        try:
            data = request.get_json(silent=True) or {}
            student = container.student_service.update_student(_student_from_json(student_id, data))
            return jsonify({"success": True, "student": student_to_dict(student)}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while updating the student")

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="api_delete_student")
    def api_delete_student(student_id: str):
        try:
            container.student_service.delete_student(student_id)
            return jsonify({"success": True}), 200
        except DomainError as e:
            return error_response(e)

    @app.route("/api/students/rfid/<rfid_tag>", methods=["GET"], endpoint="api_student_by_rfid")
    def api_student_by_rfid(rfid_tag: str):
        try:
            return jsonify({"success": True, "student": student_to_dict(container.student_service.get_by_rfid(rfid_tag))}), 200
        except DomainError as e:
            return error_response(e)
