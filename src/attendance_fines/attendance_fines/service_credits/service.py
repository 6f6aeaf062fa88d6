from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import SERVICE_CREDIT_PER_HOUR
from ..core.exceptions import NotFoundError
from .model import CommunityServiceRecord
from .repository import CommunityServiceRepository

if TYPE_CHECKING:
    from ..ledger.service import LedgerService

logger = logging.getLogger(__name__)


class CommunityServiceService:
    def __init__(
        self,
        services: CommunityServiceRepository,
        ledger: Optional["LedgerService"] = None,
        *,
        credit_per_hour: Decimal = SERVICE_CREDIT_PER_HOUR,
    ):
        self._services = services
        self._ledger = ledger
        self._credit_per_hour = Decimal(credit_per_hour)

    def calculate_credit_amount(self, hours_rendered: int) -> Decimal:
        return self._credit_per_hour * hours_rendered

    def record_service(
        self,
        *,
        student_id: str,
        hours_rendered: Any,
        on: date,
        description: Optional[str] = None,
    ) -> CommunityServiceRecord:
        student_id = require_non_empty(student_id, "Student ID")
        hours = require_positive_int(hours_rendered, "Hours rendered")

        record = CommunityServiceRecord(
            service_id=new_id("SVC"),
            student_id=student_id,
            hours_rendered=hours,
            credit_amount=self.calculate_credit_amount(hours),
            date=on,
            description=description,
        )
        self._services.save(record)
        logger.info("Recorded %s service hours (%s credit) for student=%s", hours, record.credit_amount, student_id)

        if self._ledger is not None:
            self._ledger.add_transaction(record.to_credit_entry())
        return record

    def delete_service(self, service_id: str) -> None:
        if not self._services.delete(service_id):
            raise NotFoundError(f"Community service record not found: {service_id}")
        logger.info("Deleted community service record %s", service_id)

    def list_for_student(self, student_id: str) -> Sequence[CommunityServiceRecord]:
        return self._services.list_for_student(student_id)
