"""Enrolled students: contact details, batch and fee plan."""
from datetime import date, datetime
from typing import Optional

from beanie import Document
from pydantic import BaseModel, Field

from app.models.payment import FeeCycleType


class Student(Document):
    """Student document: identity, contact, batch, fee cycle."""

    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    batch_id: Optional[str] = None
    enrollment_date: date = Field(default_factory=date.today)

    fee_cycle: FeeCycleType
    fee_amount: float

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    class Settings:
        name = "students"
        use_state_management = True


class StudentCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    batch_id: Optional[str] = None
    enrollment_date: Optional[date] = None
    fee_cycle: FeeCycleType
    fee_amount: float = Field(gt=0)


class StudentUpdate(BaseModel):
    """All fields optional for PATCH; first_name and last_name are not updatable."""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    batch_id: Optional[str] = None
    fee_cycle: Optional[FeeCycleType] = None
    fee_amount: Optional[float] = Field(default=None, gt=0)
