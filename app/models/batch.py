"""Batches: a cohort sharing a board, class level and weekly schedule."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import BaseModel, Field, model_validator


class Board(str, Enum):
    CBSE = "CBSE"
    ASSEB = "ASSEB"


class ClassLevel(str, Enum):
    NINE = "9"
    TEN = "10"
    ELEVEN = "11"
    TWELVE = "12"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


# Subjects offered per board and class level.
SUBJECT_OPTIONS: dict[str, dict[str, list[str]]] = {
    "CBSE": {
        "9": ["Mathematics", "Science", "Social Science", "English", "Hindi"],
        "10": ["Mathematics", "Science", "Social Science", "English", "Hindi"],
        "11": ["Physics", "Chemistry", "Mathematics", "Biology", "Computer Science"],
        "12": ["Physics", "Chemistry", "Mathematics", "Biology", "Computer Science"],
    },
    "ASSEB": {
        "9": ["Mathematics", "General Science", "Social Studies", "English", "Assamese"],
        "10": ["Mathematics", "General Science", "Social Studies", "English", "Assamese"],
        "11": ["Physics", "Chemistry", "Mathematics", "Biology", "Computer Science"],
        "12": ["Physics", "Chemistry", "Mathematics", "Biology", "Computer Science"],
    },
}


class ScheduleSlot(BaseModel):
    day: Weekday
    start_time: str = Field(pattern=r"^\d{2}:\d{2}$")  # HH:MM
    end_time: str = Field(pattern=r"^\d{2}:\d{2}$")

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class Batch(Document):
    """Batch document."""

    name: str
    board: Board
    class_level: ClassLevel
    start_date: date
    end_date: Optional[date] = None
    subjects: list[str] = Field(default_factory=list)
    schedule: list[ScheduleSlot] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "batches"
        use_state_management = True


class BatchCreate(BaseModel):
    name: str = Field(min_length=1)
    board: Board
    class_level: ClassLevel
    start_date: date
    end_date: Optional[date] = None
    subjects: list[str] = Field(min_length=1)
    schedule: list[ScheduleSlot] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_dates(self):
        validate_date_range(self.start_date, self.end_date)
        return self


class BatchUpdate(BaseModel):
    name: Optional[str] = None
    board: Optional[Board] = None
    class_level: Optional[ClassLevel] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    subjects: Optional[list[str]] = None
    schedule: Optional[list[ScheduleSlot]] = None


def validate_date_range(start_date: date, end_date: date | None) -> None:
    """Raise ValueError when end_date precedes start_date."""
    if end_date is not None and end_date < start_date:
        raise ValueError("end_date must be on or after start_date")
