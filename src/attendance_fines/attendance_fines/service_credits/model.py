from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import SERVICE_PAYMENT_PREFIX, SERVICE_TRANSACTION_PREFIX
from ..ledger.model import ServiceCredit


@dataclass(frozen=True)
class CommunityServiceRecord:
    """Community-service hours rendered by a student, with their credit value."""

    service_id: str
    student_id: str
    hours_rendered: int
    credit_amount: Decimal
    date: date
    description: Optional[str] = None

    def to_credit_entry(self) -> ServiceCredit:
        """Ledger row for this record (synthesized, never stored)."""
        if self.description and self.description.strip():
            description = f"Community Service: {self.description.strip()}"
        else:
            description = f"Community Service: {self.hours_rendered} hours"
        return ServiceCredit(
            payment_id=f"{SERVICE_PAYMENT_PREFIX}{self.service_id}",
            transaction_id=f"{SERVICE_TRANSACTION_PREFIX}{self.service_id}",
            student_id=self.student_id,
            amount=self.credit_amount,
            hours=self.hours_rendered,
            date=self.date,
            description=description,
        )
