"""Study progress per student, subject and topic."""
import logging

from fastapi import APIRouter

from app.api.deps import CurrentUser, TeacherOrAdmin, store_errors
from app.models.batch import Batch
from app.models.student import Student
from app.models.study import StudyTrackingCreate, StudyTrackingRecord
from app.services.aggregates import student_display_name, summarize_progress
from app.services.records import study_fields

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_record(r: StudyTrackingRecord, student_names: dict[str, str]) -> dict:
    return {
        "id": str(r.id),
        "student_id": r.student_id,
        "student_name": student_display_name(r.student_id, student_names),
        "subject": r.subject,
        "topic": r.topic,
        "progress": r.progress,
        "study_hours": r.study_hours,
        "notes": r.notes,
        "last_studied": r.last_studied.isoformat(),
    }


@router.get("/")
async def list_records(user: CurrentUser, student_id: str | None = None):
    query = {}
    if student_id:
        query["student_id"] = student_id
    with store_errors("fetch study tracking data"):
        records = await StudyTrackingRecord.find(query).sort("-last_studied").to_list()
        names = {str(s.id): s.display_name for s in await Student.find_all().to_list()}
    return {
        "records": [serialize_record(r, names) for r in records],
        "summary": summarize_progress(records).as_dict(),
    }


@router.get("/summary")
async def progress_summary(user: CurrentUser):
    with store_errors("fetch study tracking data"):
        records = await StudyTrackingRecord.find_all().to_list()
    return summarize_progress(records).as_dict()


@router.get("/subjects")
async def list_subjects(user: CurrentUser):
    """Distinct subjects taught across all batches."""
    with store_errors("fetch batches"):
        batches = await Batch.find_all().to_list()
    return sorted({subject for b in batches for subject in b.subjects})


@router.post("/", status_code=201)
async def record_progress(data: StudyTrackingCreate, user: TeacherOrAdmin):
    r = StudyTrackingRecord(**study_fields(data))
    with store_errors("record study progress"):
        await r.insert()
    logger.info(f"Study progress {r.id} recorded for student {r.student_id}: {r.subject}/{r.topic} {r.progress}%")
    return {"id": str(r.id), "last_studied": r.last_studied.isoformat()}
