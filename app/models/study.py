"""Per-student study progress on a subject topic."""
from datetime import datetime

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class StudyTrackingRecord(Document):
    student_id: Indexed(str)
    subject: str
    topic: str
    progress: int  # percent, 0..100
    study_hours: float = 0.0
    notes: str = ""
    last_studied: datetime = Field(default_factory=datetime.utcnow)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "study_tracking"
        use_state_management = True


class StudyTrackingCreate(BaseModel):
    student_id: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    topic: str = Field(min_length=1)
    progress: int = Field(ge=0, le=100)
    study_hours: float = Field(default=0, ge=0)
    notes: str = ""
