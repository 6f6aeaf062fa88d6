from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .attendance.factory import AttendanceEvaluatorFactory
from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.model import ScanRequest
from .attendance.sequencer import ScanSequencer
from .attendance.service import AttendanceService
from .clearance.service import ClearanceService
from .core.constants import DEFAULT_RECENT_ACTIVITY_CAPACITY, DEFAULT_SCAN_GRACE_DAYS, SERVICE_CREDIT_PER_HOUR
from .database.store import MemoryStore
from .events.memory_event_repository import MemoryEventRepository
from .events.service import EventService
from .fines.calculator.standard_calculator import FineDefaults, StandardFineCalculator
from .fines.memory_fine_repository import MemoryFineRepository
from .fines.service import FineService
from .ledger.recent import RecentActivityLog
from .ledger.service import LedgerService
from .payments.memory_payment_repository import MemoryPaymentRepository
from .payments.service import PaymentService
from .reports.service import FinesReportService
from .service_credits.memory_service_repository import MemoryCommunityServiceRepository
from .service_credits.service import CommunityServiceService
from .students.memory_student_repository import MemoryStudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    store: MemoryStore

    events_repo: MemoryEventRepository
    students_repo: MemoryStudentRepository
    attendance_repo: MemoryAttendanceRepository
    fines_repo: MemoryFineRepository
    payments_repo: MemoryPaymentRepository
    services_repo: MemoryCommunityServiceRepository

    scan_sequencer: ScanSequencer[ScanRequest]
    recent_activity: RecentActivityLog

    event_service: EventService
    student_service: StudentService
    ledger_service: LedgerService
    fine_service: FineService
    attendance_service: AttendanceService
    payment_service: PaymentService
    community_service_service: CommunityServiceService
    clearance_service: ClearanceService
    report_service: FinesReportService


def build_container(*, settings: Optional[Any] = None, store: Optional[MemoryStore] = None) -> Container:
    """Wire repositories and services around one persistence handle.

    ``settings`` is any object exposing the names of a ``config.*`` module;
    missing names fall back to the engine defaults.
    """
    store = store or MemoryStore()

    fine_defaults = FineDefaults.from_mapping(getattr(settings, "FINE_DEFAULTS", None))
    credit_per_hour = Decimal(str(getattr(settings, "SERVICE_CREDIT_PER_HOUR", SERVICE_CREDIT_PER_HOUR)))
    recent_capacity = int(getattr(settings, "RECENT_ACTIVITY_CAPACITY", DEFAULT_RECENT_ACTIVITY_CAPACITY))
    scan_grace_days = int(getattr(settings, "SCAN_GRACE_DAYS", DEFAULT_SCAN_GRACE_DAYS))

    events_repo = MemoryEventRepository(store)
    students_repo = MemoryStudentRepository(store)
    attendance_repo = MemoryAttendanceRepository(store)
    fines_repo = MemoryFineRepository(store)
    payments_repo = MemoryPaymentRepository(store)
    services_repo = MemoryCommunityServiceRepository(store)

    scan_sequencer: ScanSequencer[ScanRequest] = ScanSequencer()
    recent_activity = RecentActivityLog(recent_capacity)

    event_service = EventService(events_repo)
    student_service = StudentService(students_repo)

    ledger_service = LedgerService(fines_repo, payments_repo, services_repo, recent=recent_activity)
    fine_service = FineService(fines_repo, ledger_service, calculator=StandardFineCalculator(fine_defaults))
    attendance_service = AttendanceService(
        attendance_repo,
        events_repo,
        students_repo,
        fine_service,
        evaluator_factory=AttendanceEvaluatorFactory(),
        sequencer=scan_sequencer,
        scan_grace_days=scan_grace_days,
    )
    payment_service = PaymentService(payments_repo, ledger_service)
    community_service_service = CommunityServiceService(services_repo, ledger_service, credit_per_hour=credit_per_hour)
    clearance_service = ClearanceService(ledger_service, students_repo)
    report_service = FinesReportService(ledger_service, students_repo)

    return Container(
        store=store,
        events_repo=events_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        fines_repo=fines_repo,
        payments_repo=payments_repo,
        services_repo=services_repo,
        scan_sequencer=scan_sequencer,
        recent_activity=recent_activity,
        event_service=event_service,
        student_service=student_service,
        ledger_service=ledger_service,
        fine_service=fine_service,
        attendance_service=attendance_service,
        payment_service=payment_service,
        community_service_service=community_service_service,
        clearance_service=clearance_service,
        report_service=report_service,
    )
