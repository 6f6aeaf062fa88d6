from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

STUDENT_ID_PATTERN = re.compile(r"^\d{4}M\d{4}$")
LETTERS = re.compile(r"^[A-Za-z]+$")
NAME = re.compile(r"^[A-Za-z\s]+$")
DIGITS = re.compile(r"^\d+$")
YEAR_LEVELS = ("1", "2", "3", "4")


def _required(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


class StudentService:
    """Use case: register students and find them by ID, RFID tag or name."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def _validate(self, student: Student) -> Student:
        student_id = _required(student.student_id, "Student ID")
        if not STUDENT_ID_PATTERN.match(student_id):
            raise ValidationError("Student ID must follow pattern: YYYYMXXXX (e.g., 2024M0001)")

        full_name = _required(student.full_name, "Full name")
        if not NAME.match(full_name):
            raise ValidationError("Full name must contain letters only")

        year_level = _required(student.year_level, "Year level")
        if year_level not in YEAR_LEVELS:
            raise ValidationError("Year level must be 1, 2, 3, or 4")

        course = _required(student.course, "Course")
        if not LETTERS.match(course):
            raise ValidationError("Course must contain letters only")

        section = _required(student.section, "Section")
        if not LETTERS.match(section):
            raise ValidationError("Section must contain letters only")

        rfid_tag = (student.rfid_tag or "").strip() or None
        if rfid_tag is not None:
            if not DIGITS.match(rfid_tag):
                raise ValidationError("RFID tag must contain digits only")
            holder = self._students.get_by_rfid(rfid_tag)
            if holder and holder.student_id != student_id:
                raise ValidationError(f"RFID tag {rfid_tag} is already assigned to {holder.student_id}")

        return Student(
            student_id=student_id,
            full_name=full_name,
            rfid_tag=rfid_tag,
            course=course.upper(),
            year_level=year_level,
            section=section.upper(),
        )

    def register_student(self, student: Student) -> Student:
        clean = self._validate(student)
        if self._students.get_by_id(clean.student_id):
            raise ValidationError(f"Student already exists: {clean.student_id}")
        self._students.save(clean)
        logger.info("Registered student %s", clean.student_id)
        return clean

    def update_student(self, student: Student) -> Student:
        clean = self._validate(student)
        if not self._students.get_by_id(clean.student_id):
            raise NotFoundError(f"Student not found: {clean.student_id}")
        self._students.save(clean)
        logger.info("Updated student %s", clean.student_id)
        return clean

    def delete_student(self, student_id: str) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError(f"Student not found: {student_id}")
        logger.info("Deleted student %s", student_id)

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student not found: {student_id}")
        return student

    def get_by_rfid(self, rfid_tag: str) -> Student:
        student = self._students.get_by_rfid(rfid_tag.strip())
        if not student:
            raise NotFoundError(f"Student not found for RFID: {rfid_tag}")
        return student

    def search(self, query: Optional[str] = None) -> Sequence[Student]:
        if not query or not query.strip():
            return self._students.list_all()
        return self._students.search(query)
