"""Batches - board, class level, subjects and weekly schedule."""
from collections import Counter
from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.api.deps import AdminOnly, CurrentUser, object_id, store_errors
from app.models.batch import SUBJECT_OPTIONS, Batch, BatchCreate, BatchUpdate, validate_date_range
from app.models.student import Student

router = APIRouter()

NULLABLE_BATCH_FIELDS = {"end_date"}


def serialize_batch(b: Batch, student_count: int = 0) -> dict:
    return {
        "id": str(b.id),
        "name": b.name,
        "board": b.board.value,
        "class_level": b.class_level.value,
        "start_date": b.start_date.isoformat(),
        "end_date": b.end_date.isoformat() if b.end_date else None,
        "subjects": b.subjects,
        "schedule": [
            {"day": slot.day.value, "start_time": slot.start_time, "end_time": slot.end_time}
            for slot in b.schedule
        ],
        "students": student_count,
    }


@router.get("/subject-options")
async def get_subject_options(user: CurrentUser):
    return SUBJECT_OPTIONS


@router.get("/")
async def list_batches(user: CurrentUser):
    with store_errors("fetch batches"):
        batches = await Batch.find_all().sort("-created_at").to_list()
        students = await Student.find(Student.batch_id != None).to_list()
    counts = Counter(s.batch_id for s in students)
    return [serialize_batch(b, counts.get(str(b.id), 0)) for b in batches]


@router.post("/", status_code=201)
async def create_batch(data: BatchCreate, user: AdminOnly):
    b = Batch(**data.model_dump())
    with store_errors("create batch"):
        await b.insert()
    return serialize_batch(b)


@router.get("/{batch_id}")
async def get_batch(batch_id: str, user: CurrentUser):
    with store_errors("fetch batch"):
        b = await Batch.get(object_id(batch_id, "Batch"))
        if not b:
            raise HTTPException(status_code=404, detail="Batch not found")
        student_count = await Student.find(Student.batch_id == batch_id).count()
    return serialize_batch(b, student_count)


@router.patch("/{batch_id}")
async def update_batch(batch_id: str, data: BatchUpdate, user: AdminOnly):
    with store_errors("fetch batch"):
        b = await Batch.get(object_id(batch_id, "Batch"))
    if not b:
        raise HTTPException(status_code=404, detail="Batch not found")
    update_data = data.model_dump(exclude_unset=True)
    # Only end_date is nullable; name and subjects must stay non-empty
    for key, value in update_data.items():
        if value is None and key not in NULLABLE_BATCH_FIELDS:
            raise HTTPException(status_code=400, detail=f"{key} cannot be cleared")
        if key in ("name", "subjects") and not value:
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")
    try:
        validate_date_range(
            update_data.get("start_date", b.start_date),
            update_data.get("end_date", b.end_date),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    for key in update_data:
        setattr(b, key, getattr(data, key))
    b.updated_at = datetime.utcnow()
    with store_errors("update batch"):
        await b.save()
    return serialize_batch(b)
