from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student.

    Note: Plain data object (no persistence code).
    """

    student_id: str
    full_name: str
    rfid_tag: Optional[str] = None
    course: Optional[str] = None
    year_level: Optional[str] = None
    section: Optional[str] = None
