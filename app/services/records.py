"""Derived fields for newly recorded payments and study progress."""
from datetime import datetime
from typing import Optional

from app.models.payment import PaymentCreate, PaymentStatus
from app.models.study import StudyTrackingCreate
from app.services.fee_cycle import compute_next_due


def payment_fields(data: PaymentCreate, now: Optional[datetime] = None) -> dict:
    """Fields of a new payment: due date from the fee cycle, payment date only when paid."""
    now = now or datetime.utcnow()
    return {
        "student_id": data.student_id,
        "amount": data.amount,
        "payment_method": data.payment_method,
        "status": data.status,
        "fee_cycle": data.fee_cycle,
        "start_date": data.start_date,
        "due_date": compute_next_due(data.fee_cycle, data.start_date),
        "payment_date": now if data.status == PaymentStatus.PAID else None,
        "created_at": now,
        "updated_at": now,
    }


def study_fields(data: StudyTrackingCreate, now: Optional[datetime] = None) -> dict:
    now = now or datetime.utcnow()
    return {
        **data.model_dump(),
        "last_studied": now,
        "created_at": now,
        "updated_at": now,
    }
