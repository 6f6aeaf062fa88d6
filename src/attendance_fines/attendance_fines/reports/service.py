from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..ledger.aggregator import ZERO, outstanding_balance
from ..ledger.service import LedgerService
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def _money(value: Decimal) -> str:
    return f"{value:,.2f}"


class FinesReportService:
    """Per-student balance rows plus totals.

    Row ``balance`` is the ledger's unclamped closing balance; ``outstanding``
    is the clamped reporting figure. The summary's outstanding total is clamped
    on the aggregated totals, as the dashboard figures are.
    """

    def __init__(self, ledger: LedgerService, students: StudentRepository):
        self._ledger = ledger
        self._students = students

    def build_balance_report(
        self,
        *,
        student_ids: Optional[Iterable[str]] = None,
        course: Optional[str] = None,
        year_level: Optional[str] = None,
        section: Optional[str] = None,
    ) -> ReportData:
        wanted = set(student_ids) if student_ids is not None else None
        students = [
            s
            for s in self._students.list_all()
            if (wanted is None or s.student_id in wanted)
            and (not course or course == "all" or s.course == course)
            and (not year_level or year_level == "all" or s.year_level == year_level)
            and (not section or section == "all" or s.section == section)
        ]

        out_rows: list[dict] = []
        fines = payments = credits = ZERO

        for s in students:
            ledger = self._ledger.get_ledger(s.student_id)
            fines += ledger.total_fines
            payments += ledger.total_payments
            credits += ledger.total_service_credits

            out_rows.append(
                {
                    "student_id": s.student_id,
                    "full_name": s.full_name,
                    "course": s.course or "-",
                    "total_fines": _money(ledger.total_fines),
                    "total_payments": _money(ledger.total_payments),
                    "total_service_credits": _money(ledger.total_service_credits),
                    "balance": _money(ledger.balance),
                    "outstanding": _money(ledger.outstanding_balance),
                    "cleared": ledger.balance <= 0,
                }
            )

        out_rows.sort(key=lambda r: Decimal(r["balance"].replace(",", "")), reverse=True)
        summary = {
            "students": len(out_rows),
            "total_fines": _money(fines),
            "total_payments": _money(payments),
            "total_service_credits": _money(credits),
            "outstanding": _money(outstanding_balance(fines, payments, credits)),
            "cleared": sum(1 for r in out_rows if r["cleared"]),
        }
        return ReportData(rows=out_rows, summary=summary)
