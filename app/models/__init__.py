"""Beanie document models and Pydantic schemas."""
from app.models.user import User
from app.models.payment import (
    FeeCycleType,
    PaymentMethod,
    PaymentStatus,
    PaymentRecord,
    PaymentCreate,
)
from app.models.student import Student, StudentCreate, StudentUpdate
from app.models.batch import Batch, BatchCreate, BatchUpdate, Board, ClassLevel, ScheduleSlot, SUBJECT_OPTIONS
from app.models.attendance import AttendanceSession, AttendanceSessionCreate, StudentAttendance, DateRange
from app.models.study import StudyTrackingRecord, StudyTrackingCreate
from app.models.settings import InstituteSettings, InstituteSettingsUpdate

__all__ = [
    "User",
    "FeeCycleType",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentRecord",
    "PaymentCreate",
    "Student",
    "StudentCreate",
    "StudentUpdate",
    "Batch",
    "BatchCreate",
    "BatchUpdate",
    "Board",
    "ClassLevel",
    "ScheduleSlot",
    "SUBJECT_OPTIONS",
    "AttendanceSession",
    "AttendanceSessionCreate",
    "StudentAttendance",
    "DateRange",
    "StudyTrackingRecord",
    "StudyTrackingCreate",
    "InstituteSettings",
    "InstituteSettingsUpdate",
]
