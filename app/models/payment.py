"""Fee payments: method, status, fee cycle and computed due date."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class FeeCycleType(str, Enum):
    BIWEEKLY = "biweekly"
    TRIWEEKLY = "triweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class PaymentMethod(str, Enum):
    CASH = "cash"
    UPI = "upi"
    NET_BANKING = "net_banking"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentRecord(Document):
    """One fee payment (or pending charge) for a student."""

    student_id: Indexed(str)
    amount: float
    payment_method: PaymentMethod
    status: PaymentStatus = PaymentStatus.PAID
    fee_cycle: FeeCycleType
    start_date: date
    due_date: date
    payment_date: Optional[datetime] = None  # only set once status is paid
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "payments"
        use_state_management = True


class PaymentCreate(BaseModel):
    student_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    payment_method: PaymentMethod
    fee_cycle: FeeCycleType
    status: PaymentStatus = PaymentStatus.PAID
    start_date: date
