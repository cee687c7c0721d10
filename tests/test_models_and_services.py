import asyncio
from datetime import date, datetime
from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError, NoCredentialsError
from pydantic import ValidationError

from app.models.attendance import StudentAttendance
from app.models.batch import BatchCreate, ScheduleSlot, validate_date_range
from app.models.payment import FeeCycleType, PaymentMethod, PaymentStatus
from app.services import s3
from app.services.export import attendance_frame, payments_frame
from app.services.s3 import InvalidLogo, delete_from_s3, logo_key, validate_logo


def test_batch_allows_open_end_date():
    b = BatchCreate(
        name="Class 9 Morning",
        board="ASSEB",
        class_level="9",
        start_date=date(2024, 4, 1),
        subjects=["Mathematics"],
    )
    assert b.end_date is None


def test_batch_requires_subjects():
    with pytest.raises(ValidationError):
        BatchCreate(name="X", board="CBSE", class_level="11", start_date=date(2024, 4, 1), subjects=[])


def test_batch_rejects_unknown_board_and_class():
    with pytest.raises(ValidationError):
        BatchCreate(name="X", board="ICSE", class_level="11", start_date=date(2024, 4, 1), subjects=["Physics"])
    with pytest.raises(ValidationError):
        BatchCreate(name="X", board="CBSE", class_level="8", start_date=date(2024, 4, 1), subjects=["Physics"])


def test_date_range_same_day_is_allowed():
    validate_date_range(date(2024, 4, 1), date(2024, 4, 1))
    with pytest.raises(ValueError):
        validate_date_range(date(2024, 4, 2), date(2024, 4, 1))


def test_schedule_slot_end_after_start():
    ScheduleSlot(day="Monday", start_time="09:00", end_time="10:00")
    with pytest.raises(ValidationError):
        ScheduleSlot(day="Monday", start_time="10:00", end_time="09:00")
    with pytest.raises(ValidationError):
        ScheduleSlot(day="Funday", start_time="09:00", end_time="10:00")


def test_logo_validation():
    validate_logo("image/png", 5 * 1024 * 1024, max_bytes=5 * 1024 * 1024)
    with pytest.raises(InvalidLogo):
        validate_logo("application/pdf", 10, max_bytes=5 * 1024 * 1024)
    with pytest.raises(InvalidLogo):
        validate_logo(None, 10, max_bytes=5 * 1024 * 1024)
    with pytest.raises(InvalidLogo):
        validate_logo("image/jpeg", 5 * 1024 * 1024 + 1, max_bytes=5 * 1024 * 1024)


def test_logo_key_is_under_logos_prefix():
    key = logo_key("my/logo.png")
    assert key.startswith("logos/")
    assert key.endswith("_my_logo.png")


def test_attendance_frame_rows():
    sessions = [
        SimpleNamespace(
            batch_id="b1",
            date=datetime(2024, 5, 10),
            class_taken=True,
            class_notes="Chapter 3",
            attendance=[
                StudentAttendance(student_id="st1", present=True),
                StudentAttendance(student_id="gone", present=False, notes="left"),
            ],
        ),
        SimpleNamespace(batch_id="b1", date=datetime(2024, 5, 9), class_taken=False, class_notes="Holiday", attendance=[]),
    ]
    df = attendance_frame(sessions, {"b1": "Class 10"}, {"st1": "Asha Das"})

    assert len(df) == 3
    assert list(df["Student Name"]) == ["Asha Das", "Unknown Student", ""]
    assert list(df["Status"]) == ["Present", "Absent", ""]
    assert list(df["Class Taken"]) == ["Yes", "Yes", "No"]


def test_payments_frame_rows():
    payments = [
        SimpleNamespace(
            student_id="st1",
            amount=1500.0,
            status=PaymentStatus.PENDING,
            due_date=date(2024, 1, 14),
            payment_date=None,
            payment_method=PaymentMethod.NET_BANKING,
            fee_cycle=FeeCycleType.BIWEEKLY,
        )
    ]
    df = payments_frame(payments, {})
    row = df.iloc[0]
    assert row["Student Name"] == "Unknown Student"
    assert row["Payment Date"] == "-"
    assert row["Payment Method"] == "net_banking"


class _FailingS3:
    def __init__(self, error):
        self.error = error
        self.calls = []

    def delete_object(self, **kwargs):
        self.calls.append(kwargs)
        raise self.error


@pytest.mark.parametrize(
    "error",
    [
        NoCredentialsError(),
        ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "DeleteObject"),
    ],
)
def test_logo_delete_failures_are_logged_not_raised(monkeypatch, caplog, error):
    client = _FailingS3(error)
    monkeypatch.setattr(s3, "get_s3", lambda: client)

    asyncio.run(delete_from_s3("logos/old.png", bucket="logos"))

    assert client.calls == [{"Bucket": "logos", "Key": "logos/old.png"}]
    assert "Failed to delete s3://logos/logos/old.png" in caplog.text
