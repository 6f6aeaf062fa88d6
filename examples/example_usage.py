"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the rules live in the services wired by the container.
"""

import importlib
from datetime import date, datetime, time
from decimal import Decimal

from config import get_settings_module

from src.attendance_fines.attendance_fines.attendance.model import ScanRequest
from src.attendance_fines.attendance_fines.container import build_container
from src.attendance_fines.attendance_fines.core.enums import Direction, Session, SessionConfig
from src.attendance_fines.attendance_fines.events.model import Event, TimeWindow
from src.attendance_fines.attendance_fines.students.model import Student


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    container.students_repo.save(Student("2021-0001", "Ana Cruz", rfid_tag="RF-0001"))
    container.students_repo.save(Student("2021-0002", "Ben Reyes", rfid_tag="RF-0002"))
    container.events_repo.save(
        Event(
            event_id="EVT-1",
            event_name="Foundation Day",
            event_date=date(2025, 3, 1),
            session_config=SessionConfig.MORNING_ONLY,
            windows={(Session.AM, Direction.TIME_IN): TimeWindow(time(7, 0), time(7, 30))},
        )
    )

    container.attendance_service.scan(
        ScanRequest("EVT-1", datetime(2025, 3, 1, 7, 45), session=Session.AM, rfid_tag="RF-0001")
    )
    container.attendance_service.finalize_event("EVT-1")
    container.payment_service.record_payment(
        student_id="2021-0002", amount=Decimal("50"), receipt_no="100001", on=date(2025, 3, 2)
    )

    for student in container.students_repo.list_all():
        print(student.full_name, container.clearance_service.get_status_with_balance(student.student_id))


if __name__ == "__main__":
    main()
