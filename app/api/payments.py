"""Fee payments: record, mark paid, summary cards and export."""
import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import AdminOnly, CurrentUser, object_id, store_errors
from app.models.payment import PaymentCreate, PaymentRecord, PaymentStatus
from app.models.student import Student
from app.services.aggregates import student_display_name, summarize_payments
from app.services.export import frame_response, payments_frame
from app.services.records import payment_fields

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_payment(p: PaymentRecord, student_names: dict[str, str]) -> dict:
    return {
        "id": str(p.id),
        "student_id": p.student_id,
        "student_name": student_display_name(p.student_id, student_names),
        "amount": p.amount,
        "payment_method": p.payment_method.value,
        "status": p.status.value,
        "fee_cycle": p.fee_cycle.value,
        "start_date": p.start_date.isoformat(),
        "due_date": p.due_date.isoformat(),
        "payment_date": p.payment_date.isoformat() if p.payment_date else None,
    }


async def _student_names() -> dict[str, str]:
    return {str(s.id): s.display_name for s in await Student.find_all().to_list()}


@router.get("/")
async def list_payments(user: CurrentUser, student_id: str | None = None):
    query = {}
    if student_id:
        query["student_id"] = student_id
    with store_errors("fetch payments"):
        payments = await PaymentRecord.find(query).sort("-created_at").to_list()
        names = await _student_names()
    return {
        "payments": [serialize_payment(p, names) for p in payments],
        "summary": summarize_payments(payments).as_dict(),
    }


@router.get("/summary")
async def payments_summary(user: CurrentUser):
    with store_errors("fetch payments"):
        payments = await PaymentRecord.find_all().to_list()
    return summarize_payments(payments).as_dict()


@router.post("/", status_code=201)
async def record_payment(data: PaymentCreate, user: AdminOnly):
    p = PaymentRecord(**payment_fields(data))
    with store_errors("record payment"):
        await p.insert()
    logger.info(f"Payment {p.id} recorded for student {p.student_id}: {p.amount} ({p.status.value})")
    return {
        "id": str(p.id),
        "due_date": p.due_date.isoformat(),
        "payment_date": p.payment_date.isoformat() if p.payment_date else None,
        "status": p.status.value,
    }


@router.patch("/{payment_id}/pay")
async def mark_paid(payment_id: str, user: AdminOnly):
    """Manual pending/overdue -> paid transition."""
    with store_errors("fetch payment"):
        p = await PaymentRecord.get(object_id(payment_id, "Payment"))
    if not p:
        raise HTTPException(status_code=404, detail="Payment not found")
    if p.status == PaymentStatus.PAID:
        raise HTTPException(status_code=400, detail="Payment is already paid")
    now = datetime.utcnow()
    p.status = PaymentStatus.PAID
    p.payment_date = now
    p.updated_at = now
    with store_errors("update payment"):
        await p.save()
    return {"id": str(p.id), "status": p.status.value, "payment_date": now.isoformat()}


@router.get("/export")
async def export_payments(
    user: CurrentUser,
    format: str = Query("csv", enum=["csv", "excel"]),
):
    with store_errors("export payments"):
        payments = await PaymentRecord.find_all().sort("-created_at").to_list()
        names = await _student_names()
    return frame_response(payments_frame(payments, names), "payments", format, "Payments")
