"""Student CRUD - identity, contact, batch and fee plan."""
import logging
from datetime import date, datetime

from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser, AdminOnly, object_id, store_errors
from app.models.student import Student, StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_student(s: Student) -> dict:
    return {
        "id": str(s.id),
        "first_name": s.first_name,
        "last_name": s.last_name,
        "display_name": s.display_name,
        "email": s.email,
        "phone": s.phone,
        "address": s.address,
        "emergency_contact_name": s.emergency_contact_name,
        "emergency_contact_phone": s.emergency_contact_phone,
        "batch_id": s.batch_id,
        "enrollment_date": s.enrollment_date.isoformat() if s.enrollment_date else None,
        "fee_cycle": s.fee_cycle.value,
        "fee_amount": s.fee_amount,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }


@router.get("/")
async def list_students(user: CurrentUser, batch_id: str | None = None):
    query = {}
    if batch_id:
        query["batch_id"] = batch_id
    with store_errors("fetch students"):
        students = await Student.find(query).sort("-created_at").to_list()
    return [serialize_student(s) for s in students]


@router.post("/", status_code=201)
async def create_student(data: StudentCreate, user: AdminOnly):
    fields = data.model_dump(exclude={"enrollment_date"})
    s = Student(**fields, enrollment_date=data.enrollment_date or date.today())
    with store_errors("add student"):
        await s.insert()
    logger.info(f"Student {s.id} enrolled by {user.id}")
    return serialize_student(s)


@router.get("/{student_id}")
async def get_student(student_id: str, user: CurrentUser):
    with store_errors("fetch student"):
        s = await Student.get(object_id(student_id, "Student"))
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    return serialize_student(s)


@router.patch("/{student_id}")
async def update_student(student_id: str, data: StudentUpdate, user: AdminOnly):
    with store_errors("fetch student"):
        s = await Student.get(object_id(student_id, "Student"))
    if not s:
        raise HTTPException(status_code=404, detail="Student not found")
    update_data = data.model_dump(exclude_unset=True)
    if "fee_amount" in update_data and update_data["fee_amount"] is None:
        raise HTTPException(status_code=400, detail="fee_amount cannot be cleared")
    if "fee_cycle" in update_data and update_data["fee_cycle"] is None:
        raise HTTPException(status_code=400, detail="fee_cycle cannot be cleared")
    for key, value in update_data.items():
        setattr(s, key, value)
    s.updated_at = datetime.utcnow()
    with store_errors("update student"):
        await s.save()
    return serialize_student(s)
