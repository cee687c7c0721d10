"""Single-pass summaries over payment and study-tracking records."""
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from app.models.payment import PaymentStatus

UNKNOWN_STUDENT = "Unknown Student"


@dataclass
class PaymentSummary:
    total_revenue: float = 0.0
    pending_amount: float = 0.0
    pending_count: int = 0
    next_due_date: Optional[date] = None
    next_due_count: int = 0

    def as_dict(self) -> dict:
        return {
            "total_revenue": self.total_revenue,
            "pending_amount": self.pending_amount,
            "pending_count": self.pending_count,
            "next_due_date": self.next_due_date.isoformat() if self.next_due_date else None,
            "next_due_count": self.next_due_count,
        }


@dataclass
class ProgressSummary:
    overall_progress: int = 0
    active_students: int = 0
    total_hours: float = 0.0

    def as_dict(self) -> dict:
        return {
            "overall_progress": self.overall_progress,
            "active_students": self.active_students,
            "total_hours": self.total_hours,
        }


def student_display_name(student_id: Optional[str], names: dict[str, str]) -> str:
    """Name for a referenced student; dangling references get a placeholder."""
    if not student_id:
        return UNKNOWN_STUDENT
    return names.get(student_id, UNKNOWN_STUDENT)


def summarize_payments(records: Iterable) -> PaymentSummary:
    """
    Revenue is the sum of paid amounts. Pending amount/count cover pending
    records only, and the next due date is the earliest due date among them,
    with the number of pending records due on that exact day.
    Overdue records are not counted anywhere.
    """
    summary = PaymentSummary()
    for p in records:
        amount = float(p.amount or 0)
        if p.status == PaymentStatus.PAID:
            summary.total_revenue += amount
        elif p.status == PaymentStatus.PENDING:
            summary.pending_amount += amount
            summary.pending_count += 1
            if p.due_date is None:
                continue
            if summary.next_due_date is None or p.due_date < summary.next_due_date:
                summary.next_due_date = p.due_date
                summary.next_due_count = 1
            elif p.due_date == summary.next_due_date:
                summary.next_due_count += 1
    return summary


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize_progress(records: Iterable, now: Optional[datetime] = None) -> ProgressSummary:
    """
    Mean progress (rounded, 0 with no records), number of distinct students
    studied within the last 7 whole days, and total study hours.
    """
    now = now or datetime.utcnow()
    progress_sum = 0
    count = 0
    total_hours = 0.0
    active: set[str] = set()
    for r in records:
        count += 1
        progress_sum += r.progress or 0
        total_hours += r.study_hours or 0
        if r.last_studied is not None and (now - r.last_studied).days < 7:
            active.add(r.student_id)
    return ProgressSummary(
        overall_progress=_round_half_up(progress_sum / count) if count else 0,
        active_students=len(active),
        total_hours=total_hours,
    )
