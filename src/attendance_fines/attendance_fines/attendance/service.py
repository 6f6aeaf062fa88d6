from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.constants import DEFAULT_SCAN_GRACE_DAYS
from ..core.enums import AttendanceMode, AttendanceStatus, Direction, ScanSource, Session
from ..core.exceptions import ConfigurationError, NotFoundError, ValidationError
from ..events.model import Event
from ..events.repository import EventRepository
from ..fines.service import FineService
from ..ledger.model import Fine
from ..students.model import Student
from ..students.repository import StudentRepository
from .evaluators.base import Evaluation
from .factory import AttendanceEvaluatorFactory
from .model import AttendanceRecord, ScanRequest
from .repository import AttendanceRepository
from .sequencer import ScanSequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalizationResult:
    event_id: str
    absent_marked: list[AttendanceRecord] = field(default_factory=list)
    fines_issued: list[Fine] = field(default_factory=list)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventRepository,
        students: StudentRepository,
        fines: FineService,
        *,
        evaluator_factory: AttendanceEvaluatorFactory | None = None,
        sequencer: ScanSequencer[ScanRequest] | None = None,
        scan_grace_days: int = DEFAULT_SCAN_GRACE_DAYS,
    ):
        self._attendance = attendance
        self._events = events
        self._students = students
        self._fines = fines
        self._factory = evaluator_factory or AttendanceEvaluatorFactory()
        self._sequencer = sequencer if sequencer is not None else ScanSequencer()
        self._scan_grace_days = int(scan_grace_days)

    def _get_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise ConfigurationError(f"Event not found: {event_id}")
        return event

    def _get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student not found: {student_id}")
        return student

    def _resolve_student(self, request: ScanRequest) -> tuple[Student, ScanSource]:
        if request.rfid_tag is not None:
            if not isinstance(request.rfid_tag, str):
                raise ValidationError("RFID tag must be a string")
            tag = request.rfid_tag.strip()
            if not tag:
                raise ValidationError("RFID tag cannot be empty")
            student = self._students.get_by_rfid(tag)
            if not student:
                raise NotFoundError(f"Student not found for RFID: {tag}")
            return student, ScanSource.RFID
        if request.student_id:
            return self._get_student(request.student_id), ScanSource.MANUAL
        raise ValidationError("A scan needs an RFID tag or a student ID")

    def _ensure_recordable(self, event: Event, now: datetime) -> None:
        days_after = (now.date() - event.event_date).days
        if days_after > self._scan_grace_days:
            raise ValidationError(
                f"Attendance cannot be recorded. The event date ({event.event_date}) "
                f"was more than {self._scan_grace_days} day(s) ago."
            )

    def scan(self, request: ScanRequest) -> AttendanceRecord:
        """Process a reader/operator scan in arrival order."""
        return self._sequencer.submit(request, self._process_scan)

    def _process_scan(self, request: ScanRequest) -> AttendanceRecord:
        try:
            student, source = self._resolve_student(request)
            return self.check_in(
                student.student_id,
                request.event_id,
                session=request.session,
                direction=request.direction,
                now=request.scanned_at,
                source=source,
            )
        except (ConfigurationError, NotFoundError, ValidationError) as e:
            logger.warning("Rejected scan for event=%s: %s", request.event_id, e)
            raise

    def check_in(
        self,
        student_id: str,
        event_id: str,
        *,
        session: Optional[Session] = None,
        direction: Direction = Direction.TIME_IN,
        now: datetime | None = None,
        source: ScanSource = ScanSource.MANUAL,
    ) -> AttendanceRecord:
        """Evaluate one scan and create or update the (student, event) record.

        A LATE outcome is fined right away; the fine service makes that a
        no-op when the pair is already fined.
        """
        now = now or now_local()
        event = self._get_event(event_id)
        self._get_student(student_id)
        self._ensure_recordable(event, now)

        evaluator = self._factory.for_scan(event=event, session=session, direction=direction)
        evaluation = evaluator.evaluate(now.time())

        existing = self._attendance.get_for_student_and_event(student_id, event_id)
        if existing:
            record = self._merge(existing, evaluation, direction=direction, session=session, now=now, source=source)
            self._attendance.update(record)
        else:
            record = self._new_record(student_id, event_id, evaluation, direction=direction, session=session, now=now, source=source)
            if not self._attendance.create(record):
                # Lost a race with another scan of the same pair; fold into theirs.
                current = self._attendance.get_for_student_and_event(student_id, event_id)
                record = self._merge(current, evaluation, direction=direction, session=session, now=now, source=source)
                self._attendance.update(record)

        logger.info(
            "Recorded %s %s for student=%s event=%s: %s (%s min late)",
            (session.value if session else "legacy"), direction.value, student_id, event_id,
            record.status.value, record.minutes_late,
        )

        if record.status is AttendanceStatus.LATE and record.minutes_late > 0:
            self._fines.issue_fine(record, event)
        return record

    def check_out(
        self,
        student_id: str,
        event_id: str,
        *,
        session: Optional[Session] = None,
        now: datetime | None = None,
        source: ScanSource = ScanSource.MANUAL,
    ) -> AttendanceRecord:
        return self.check_in(student_id, event_id, session=session, direction=Direction.TIME_OUT, now=now, source=source)

    @staticmethod
    def _new_record(
        student_id: str,
        event_id: str,
        evaluation: Evaluation,
        *,
        direction: Direction,
        session: Optional[Session],
        now: datetime,
        source: ScanSource,
    ) -> AttendanceRecord:
        return AttendanceRecord(
            attendance_id=new_id("ATT"),
            student_id=student_id,
            event_id=event_id,
            status=evaluation.status,
            minutes_late=evaluation.minutes_late,
            check_in_time=now if direction is Direction.TIME_IN else None,
            check_out_time=now if direction is Direction.TIME_OUT else None,
            scan_source=source,
            session=session,
        )

    @staticmethod
    def _merge(
        existing: AttendanceRecord,
        evaluation: Evaluation,
        *,
        direction: Direction,
        session: Optional[Session],
        now: datetime,
        source: ScanSource,
    ) -> AttendanceRecord:
        """Fold a rescan into the stored record.

        EXCUSED keeps its status. A time-in scan, or any scan on an ABSENT
        record, takes the new evaluation. A late time-out makes the record
        LATE with the larger minute count. A fine already issued for an
        earlier ABSENT is kept when a scan replaces it, since fines are
        issued once per (student, event) and never withdrawn here.
        """
        if direction is Direction.TIME_OUT:
            updated = replace(existing, check_out_time=now, scan_source=source)
        else:
            updated = replace(existing, check_in_time=now, scan_source=source, session=session or existing.session)

        if existing.status is AttendanceStatus.EXCUSED:
            return updated

        if direction is Direction.TIME_IN or existing.status is AttendanceStatus.ABSENT:
            return replace(updated, status=evaluation.status, minutes_late=evaluation.minutes_late)

        if evaluation.is_late:
            prior = existing.minutes_late if existing.status is AttendanceStatus.LATE else 0
            return replace(updated, status=AttendanceStatus.LATE, minutes_late=max(prior, evaluation.minutes_late))
        return updated

    def _mark_absentees(self, event: Event) -> list[AttendanceRecord]:
        """ABSENT for every registered student with no record; never touches existing ones."""
        already = {r.student_id for r in self._attendance.list_for_event(event.event_id)}
        marked = []
        for student in self._students.list_all():
            if student.student_id in already:
                continue
            record = AttendanceRecord(
                attendance_id=new_id("ATT"),
                student_id=student.student_id,
                event_id=event.event_id,
                status=AttendanceStatus.ABSENT,
                minutes_late=0,
                scan_source=ScanSource.MANUAL,
            )
            if self._attendance.create(record):
                marked.append(record)
        return marked

    def finalize_event(self, event_id: str) -> FinalizationResult:
        """Mark no-shows ABSENT and fine every LATE/ABSENT outcome.

        Safe to run repeatedly: existing records are left alone and already
        fined pairs are skipped.
        """
        event = self._get_event(event_id)
        absent = self._mark_absentees(event)
        records = self._attendance.list_for_event(event_id)
        fines = self._fines.generate_fines(records, event)

        logger.info(
            "Finalized event=%s: %s marked absent, %s fines issued",
            event_id, len(absent), len(fines),
        )
        return FinalizationResult(event_id=event_id, absent_marked=absent, fines_issued=fines)

    def mark_session_absentees(
        self,
        event_id: str,
        *,
        session: Session,
        direction: Direction = Direction.TIME_IN,
        now: datetime | None = None,
    ) -> FinalizationResult:
        """Mark and fine no-shows once the session's window has closed."""
        now = now or now_local()
        event = self._get_event(event_id)
        if not event.offers(session):
            raise ConfigurationError(
                f"Event {event_id} runs {event.session_config.value}; no {session.value} session"
            )

        if event.attendance_mode is AttendanceMode.WINDOW:
            window = event.window_for(session, direction)
            if window is not None and now < datetime.combine(event.event_date, window.stop):
                raise ValidationError(
                    f"Cannot mark absentees yet. The attendance window is still open until {window.stop:%H:%M}."
                )

        absent = self._mark_absentees(event)
        fines = self._fines.generate_fines(absent, event)
        logger.info(
            "Marked %s absentees for event=%s session=%s",
            len(absent), event_id, session.value,
        )
        return FinalizationResult(event_id=event_id, absent_marked=absent, fines_issued=fines)

    def get_for_student_and_event(self, student_id: str, event_id: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_student_and_event(student_id, event_id)

    def list_for_event(self, event_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_event(event_id)

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_student(student_id)
