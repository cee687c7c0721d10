from datetime import date, datetime
from enum import Enum
from typing import Optional
from beanie import Document, Indexed
from pydantic import Field, BaseModel


class DateRange(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this-week"


class StudentAttendance(BaseModel):
    student_id: str
    present: bool = True
    notes: str = ""


class AttendanceSession(Document):
    """One class session for one batch on one date. Sessions are append-only."""
    batch_id: Indexed(str)
    date: Indexed(datetime)  # start of the session day
    class_taken: bool = True
    class_notes: str = ""
    attendance: list[StudentAttendance] = Field(default_factory=list)
    recorded_by: Optional[str] = None  # user_id
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "attendance"
        use_state_management = True


class AttendanceSessionCreate(BaseModel):
    batch_id: str = Field(min_length=1)
    date: date
    class_taken: bool = True
    class_notes: str = ""
    # Required for every enrolled student only when class_taken is true
    attendance: list[StudentAttendance] = Field(default_factory=list)
