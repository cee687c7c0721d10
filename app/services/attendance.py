"""Attendance sessions: date-range filters, roll-call validation, display shaping."""
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from app.models.attendance import DateRange, StudentAttendance

_RANGE_DAYS_BACK = {
    DateRange.TODAY: 0,
    DateRange.YESTERDAY: 1,
    DateRange.THIS_WEEK: 7,
}


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def resolve_range_start(keyword: DateRange | str, today: Optional[date] = None) -> datetime:
    """
    Inclusive lower bound for a date-range keyword.
    today -> start of today, yesterday -> one day earlier, this-week -> seven days earlier.
    There is no upper bound.
    """
    try:
        rng = DateRange(keyword)
    except ValueError:
        raise ValueError(f"Unknown date range: {keyword!r}") from None
    today = today or date.today()
    return start_of_day(today - timedelta(days=_RANGE_DAYS_BACK[rng]))


def missing_student_entries(
    class_taken: bool,
    enrolled_ids: Iterable[str],
    entries: Iterable[StudentAttendance],
) -> list[str]:
    """Enrolled student ids without an attendance entry. Nothing is required when no class was taken."""
    if not class_taken:
        return []
    marked = {e.student_id for e in entries}
    return [sid for sid in enrolled_ids if sid not in marked]


def order_sessions(sessions: Iterable) -> list:
    """Newest session first."""
    return sorted(sessions, key=lambda s: s.date, reverse=True)


def session_query(
    keyword: DateRange | str,
    batch_id: Optional[str] = None,
    today: Optional[date] = None,
) -> dict:
    """Mongo filter for sessions in a date range, optionally for one batch."""
    query = {"date": {"$gte": resolve_range_start(keyword, today)}}
    if batch_id:
        query["batch_id"] = batch_id
    return query


def session_counts(session) -> dict[str, int]:
    present = sum(1 for a in session.attendance if a.present)
    return {"present": present, "absent": len(session.attendance) - present}


def serialize_session(session, batch_names: dict[str, str]) -> dict:
    return {
        "id": str(session.id),
        "batch_id": session.batch_id,
        "batch_name": batch_names.get(session.batch_id, ""),
        "date": session.date.date().isoformat(),
        "class_taken": session.class_taken,
        "class_notes": session.class_notes,
        "attendance": [a.model_dump() for a in session.attendance],
        **session_counts(session),
    }
