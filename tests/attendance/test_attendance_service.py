from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.attendance_fines.attendance_fines.attendance.model import AttendanceRecord, ScanRequest
from src.attendance_fines.attendance_fines.core.enums import AttendanceMode, AttendanceStatus, Direction, ScanSource, Session
from src.attendance_fines.attendance_fines.core.exceptions import ConfigurationError, NotFoundError, ValidationError
from src.attendance_fines.attendance_fines.events.model import Event, LegacyTimes


def _scan(at: datetime, *, rfid="RF-0001", session=Session.AM, direction=Direction.TIME_IN, event_id="EVT-1") -> ScanRequest:
    return ScanRequest(event_id=event_id, scanned_at=at, session=session, direction=direction, rfid_tag=rfid)


def test_late_rfid_scan_records_late_and_issues_fine(seeded, fixed_now):
    record = seeded.attendance_service.scan(_scan(fixed_now))

    assert record.status == AttendanceStatus.LATE
    assert record.minutes_late == 15
    assert record.scan_source == ScanSource.RFID
    assert record.check_in_time == fixed_now

    fines = seeded.fine_service.list_for_student("2021-0001")
    assert [f.amount for f in fines] == [Decimal("30.00")]
    assert seeded.scan_sequencer.is_empty()


def test_on_time_scan_is_present_without_fine(seeded):
    record = seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 7, 10)))

    assert record.status == AttendanceStatus.PRESENT
    assert seeded.fine_service.list_for_student("2021-0001") == []


def test_rescan_updates_existing_record_and_fines_once(seeded, fixed_now):
    first = seeded.attendance_service.scan(_scan(fixed_now))
    second = seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 7, 50)))

    assert second.attendance_id == first.attendance_id
    assert second.minutes_late == 20
    assert len(seeded.attendance_service.list_for_event("EVT-1")) == 1
    assert len(seeded.fine_service.list_for_student("2021-0001")) == 1


def test_time_out_scan_sets_check_out(seeded):
    seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 7, 5)))
    record = seeded.attendance_service.scan(
        _scan(datetime(2025, 3, 1, 11, 45), direction=Direction.TIME_OUT)
    )

    assert record.status == AttendanceStatus.PRESENT
    assert record.check_out_time == datetime(2025, 3, 1, 11, 45)
    assert record.check_in_time == datetime(2025, 3, 1, 7, 5)


def test_manual_scan_by_student_id(seeded):
    request = ScanRequest(event_id="EVT-1", scanned_at=datetime(2025, 3, 1, 13, 5), session=Session.PM, student_id="2021-0002")
    record = seeded.attendance_service.scan(request)

    assert record.scan_source == ScanSource.MANUAL
    assert record.status == AttendanceStatus.PRESENT


def test_unknown_rfid_is_rejected_and_dequeued(seeded, fixed_now):
    with pytest.raises(NotFoundError):
        seeded.attendance_service.scan(_scan(fixed_now, rfid="RF-9999"))

    assert seeded.scan_sequencer.is_empty()
    assert seeded.attendance_service.list_for_event("EVT-1") == []


def test_unknown_event_is_configuration_error(seeded, fixed_now):
    with pytest.raises(ConfigurationError):
        seeded.attendance_service.scan(_scan(fixed_now, event_id="EVT-404"))


def test_scan_without_window_for_direction_is_configuration_error(seeded):
    with pytest.raises(ConfigurationError):
        seeded.attendance_service.scan(
            _scan(datetime(2025, 3, 1, 17, 0), session=Session.PM, direction=Direction.TIME_OUT)
        )


def test_scan_past_grace_period_is_rejected(seeded):
    with pytest.raises(ValidationError):
        seeded.attendance_service.scan(_scan(datetime(2025, 3, 3, 7, 10)))


def test_finalize_marks_absentees_and_fines_them(seeded, fixed_now):
    seeded.attendance_service.scan(_scan(fixed_now))

    result = seeded.attendance_service.finalize_event("EVT-1")

    assert sorted(r.student_id for r in result.absent_marked) == ["2021-0002", "2021-0003"]
    absent_fines = [f for f in result.fines_issued if f.student_id != "2021-0001"]
    assert [f.amount for f in absent_fines] == [Decimal("150.00"), Decimal("150.00")]
    # The LATE fine was already issued at scan time.
    assert all(f.student_id != "2021-0001" for f in result.fines_issued)


def test_finalize_twice_changes_nothing(seeded, fixed_now):
    seeded.attendance_service.scan(_scan(fixed_now))
    seeded.attendance_service.finalize_event("EVT-1")

    again = seeded.attendance_service.finalize_event("EVT-1")

    assert again.absent_marked == []
    assert again.fines_issued == []
    late = seeded.attendance_service.get_for_student_and_event("2021-0001", "EVT-1")
    assert late.status == AttendanceStatus.LATE
    assert len(seeded.fines_repo.list_for_event("EVT-1")) == 3


def test_session_absentees_refused_while_window_open(seeded):
    with pytest.raises(ValidationError):
        seeded.attendance_service.mark_session_absentees("EVT-1", session=Session.AM, now=datetime(2025, 3, 1, 7, 10))


def test_session_absentees_after_window_close(seeded):
    seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 7, 10)))

    result = seeded.attendance_service.mark_session_absentees(
        "EVT-1", session=Session.AM, now=datetime(2025, 3, 1, 7, 31)
    )

    assert len(result.absent_marked) == 2
    assert len(result.fines_issued) == 2
    present = seeded.attendance_service.get_for_student_and_event("2021-0001", "EVT-1")
    assert present.status == AttendanceStatus.PRESENT


def test_excused_record_keeps_status_on_rescan(seeded, fixed_now):
    seeded.attendance_repo.create(
        AttendanceRecord("ATT-EXC", "2021-0001", "EVT-1", AttendanceStatus.EXCUSED, session=Session.AM)
    )

    record = seeded.attendance_service.scan(_scan(fixed_now))

    assert record.status == AttendanceStatus.EXCUSED
    assert record.minutes_late == 0
    assert record.check_in_time == fixed_now
    assert seeded.fine_service.list_for_student("2021-0001") == []


def test_later_scan_replaces_absent_but_keeps_absent_fine(seeded):
    seeded.attendance_service.finalize_event("EVT-1")

    record = seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 7, 10)))

    assert record.status == AttendanceStatus.PRESENT
    assert [f.amount for f in seeded.fine_service.list_for_student("2021-0001")] == [Decimal("150.00")]


def test_late_time_out_marks_present_record_late(seeded):
    seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 7, 10)))

    record = seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 12, 20), direction=Direction.TIME_OUT))

    assert record.status == AttendanceStatus.LATE
    assert record.minutes_late == 20
    assert [f.amount for f in seeded.fine_service.list_for_student("2021-0001")] == [Decimal("40.00")]


def test_late_time_out_keeps_larger_minutes_late(seeded, fixed_now):
    seeded.attendance_service.scan(_scan(fixed_now))

    record = seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 12, 5), direction=Direction.TIME_OUT))

    assert record.status == AttendanceStatus.LATE
    assert record.minutes_late == 15
    assert record.check_out_time == datetime(2025, 3, 1, 12, 5)


def test_legacy_event_scan_is_late_after_reference_time(seeded):
    seeded.events_repo.save(
        Event(
            event_id="EVT-L",
            event_name="Recognition Day",
            event_date=date(2025, 3, 1),
            attendance_mode=AttendanceMode.LEGACY,
            legacy=LegacyTimes(am_time_in=time(8, 0)),
        )
    )

    record = seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 8, 12), session=None, event_id="EVT-L"))

    assert record.status == AttendanceStatus.LATE
    assert record.minutes_late == 12
    assert [f.amount for f in seeded.fine_service.list_for_student("2021-0001")] == [Decimal("24.00")]


def test_legacy_event_without_reference_times_is_configuration_error(seeded):
    seeded.events_repo.save(
        Event("EVT-L0", "Unscheduled", date(2025, 3, 1), attendance_mode=AttendanceMode.LEGACY)
    )

    with pytest.raises(ConfigurationError):
        seeded.attendance_service.scan(_scan(datetime(2025, 3, 1, 8, 12), session=None, event_id="EVT-L0"))

    assert seeded.scan_sequencer.is_empty()
    assert seeded.attendance_service.list_for_event("EVT-L0") == []
