"""Attendance sessions: record a class (or its cancellation), list and export."""
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, TeacherOrAdmin, store_errors
from app.models.attendance import AttendanceSession, AttendanceSessionCreate, DateRange
from app.models.batch import Batch
from app.models.student import Student
from app.services.attendance import (
    missing_student_entries,
    order_sessions,
    serialize_session,
    session_query,
    start_of_day,
)
from app.services.export import attendance_frame, frame_response

logger = logging.getLogger(__name__)

router = APIRouter()


async def _fetch_sessions(batch_id: Optional[str], range: DateRange) -> list[AttendanceSession]:
    sessions = await AttendanceSession.find(session_query(range, batch_id)).sort("-date").to_list()
    return order_sessions(sessions)


async def _batch_names() -> dict[str, str]:
    return {str(b.id): b.name for b in await Batch.find_all().to_list()}


@router.get("/students/{batch_id}")
async def get_students_for_batch(batch_id: str, user: TeacherOrAdmin):
    """Students currently enrolled in a batch, for the roll-call form."""
    with store_errors("fetch students"):
        students = await Student.find(Student.batch_id == batch_id).sort("first_name").to_list()
    return [{"id": str(s.id), "name": s.display_name} for s in students]


@router.get("/")
async def list_sessions(
    user: CurrentUser,
    batch_id: Optional[str] = None,
    range: DateRange = Query(DateRange.TODAY),
):
    """Sessions from the start of the selected range onward, newest first."""
    with store_errors("fetch attendance records"):
        sessions = await _fetch_sessions(batch_id, range)
        names = await _batch_names()
    return [serialize_session(s, names) for s in sessions]


@router.post("/", status_code=201)
async def record_session(data: AttendanceSessionCreate, user: TeacherOrAdmin):
    """Append a session. When a class was taken every enrolled student needs an entry."""
    entries = data.attendance if data.class_taken else []
    if data.class_taken:
        with store_errors("fetch students"):
            enrolled = await Student.find(Student.batch_id == data.batch_id).to_list()
        missing = missing_student_entries(True, [str(s.id) for s in enrolled], entries)
        if missing:
            raise HTTPException(
                status_code=400,
                detail={"message": "Attendance missing for enrolled students", "student_ids": missing},
            )
    now = datetime.utcnow()
    session = AttendanceSession(
        batch_id=data.batch_id,
        date=start_of_day(data.date),
        class_taken=data.class_taken,
        class_notes=data.class_notes,
        attendance=entries,
        recorded_by=str(user.id),
        created_at=now,
        updated_at=now,
    )
    with store_errors("record attendance"):
        await session.insert()
    logger.info(f"Attendance session {session.id} recorded for batch {data.batch_id} on {data.date}")
    return {"id": str(session.id), "status": "success"}


@router.get("/export")
async def export_sessions(
    user: CurrentUser,
    batch_id: Optional[str] = None,
    range: DateRange = Query(DateRange.THIS_WEEK),
    format: str = Query("csv", enum=["csv", "excel"]),
):
    with store_errors("export attendance"):
        sessions = await _fetch_sessions(batch_id, range)
        batch_names = await _batch_names()
        student_names = {str(s.id): s.display_name for s in await Student.find_all().to_list()}
    df = attendance_frame(sessions, batch_names, student_names)
    return frame_response(df, f"attendance_{range.value}", format, "Attendance")
