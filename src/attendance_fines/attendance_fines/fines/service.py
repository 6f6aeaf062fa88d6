from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..events.model import Event
from ..ledger.model import Fine
from .calculator.base import FineCalculator
from .calculator.standard_calculator import StandardFineCalculator
from .repository import FineRepository

if TYPE_CHECKING:
    from ..ledger.service import LedgerService

logger = logging.getLogger(__name__)

FINEABLE = (AttendanceStatus.LATE, AttendanceStatus.ABSENT)


class FineService:
    def __init__(
        self,
        fines: FineRepository,
        ledger: Optional["LedgerService"] = None,
        *,
        calculator: Optional[FineCalculator] = None,
        today: Callable[[], date] = lambda: now_local().date(),
    ):
        self._fines = fines
        self._ledger = ledger
        self._calculator = calculator or StandardFineCalculator()
        self._today = today

    def calculate_fine_amount(self, status: AttendanceStatus, minutes_late: int, event: Optional[Event] = None) -> Decimal:
        return self._calculator.calculate(status, minutes_late, event)

    def create_fine_from_attendance(self, record: AttendanceRecord, event: Optional[Event] = None) -> Optional[Fine]:
        """Build (but do not store) the fine for an outcome; None when nothing is owed."""
        amount = self.calculate_fine_amount(record.status, record.minutes_late, event)
        if amount <= 0:
            return None
        return Fine(
            fine_id=new_id("FINE"),
            transaction_id=new_id("TXN"),
            student_id=record.student_id,
            event_id=record.event_id,
            amount=amount,
            date=self._today(),
        )

    def issue_fine(self, record: AttendanceRecord, event: Optional[Event] = None) -> Optional[Fine]:
        """Fine an outcome at most once per (student, event).

        Returns the stored fine, or None when the outcome is not fineable or a
        fine already exists.
        """
        if record.status not in FINEABLE:
            return None
        # Sub-minute lateness floors to 0 minutes and is not charged.
        if record.status is AttendanceStatus.LATE and record.minutes_late <= 0:
            return None

        if self._fines.get_for_student_and_event(record.student_id, record.event_id):
            logger.debug("Fine already exists for student=%s event=%s", record.student_id, record.event_id)
            return None

        fine = self.create_fine_from_attendance(record, event)
        if fine is None:
            return None

        if not self._fines.save(fine):
            logger.debug("Concurrent fine detected for student=%s event=%s", record.student_id, record.event_id)
            return None

        logger.info(
            "Issued %s fine %s of %s to student=%s for event=%s",
            record.status.value, fine.fine_id, fine.amount, fine.student_id, fine.event_id,
        )
        if self._ledger is not None:
            self._ledger.add_transaction(fine)
        return fine

    def generate_fines(self, records: Iterable[AttendanceRecord], event: Optional[Event] = None) -> list[Fine]:
        issued = []
        for record in records:
            fine = self.issue_fine(record, event)
            if fine is not None:
                issued.append(fine)
        return issued

    def list_for_student(self, student_id: str) -> Sequence[Fine]:
        return self._fines.list_for_student(student_id)

    def list_for_event(self, event_id: str) -> Sequence[Fine]:
        return self._fines.list_for_event(event_id)

    def delete_fine(self, fine_id: str) -> None:
        if not self._fines.delete(fine_id):
            raise NotFoundError(f"Fine not found: {fine_id}")
        logger.info("Deleted fine %s", fine_id)
