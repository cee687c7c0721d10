import itertools
from datetime import date, datetime, timedelta
from types import SimpleNamespace

from app.models.payment import FeeCycleType, PaymentCreate, PaymentMethod, PaymentStatus
from app.models.study import StudyTrackingCreate
from app.services.aggregates import (
    UNKNOWN_STUDENT,
    student_display_name,
    summarize_payments,
    summarize_progress,
)
from app.services.records import payment_fields, study_fields

NOW = datetime(2024, 5, 10, 12, 0)


def _payment(amount, status, due, student_id="st1"):
    return SimpleNamespace(amount=amount, status=status, due_date=due, student_id=student_id)


def _study(student_id, progress, hours, last_studied):
    return SimpleNamespace(student_id=student_id, progress=progress, study_hours=hours, last_studied=last_studied)


PAYMENTS = [
    _payment(1500, PaymentStatus.PAID, date(2024, 5, 1)),
    _payment(2000, PaymentStatus.PENDING, date(2024, 6, 1)),
    _payment(1000, PaymentStatus.PENDING, date(2024, 5, 20)),
    _payment(500, PaymentStatus.PAID, date(2024, 4, 1)),
    _payment(700, PaymentStatus.OVERDUE, date(2024, 3, 1)),
]


def test_payment_summary():
    summary = summarize_payments(PAYMENTS)
    assert summary.total_revenue == 2000
    assert summary.pending_amount == 3000
    assert summary.pending_count == 2
    assert summary.next_due_date == date(2024, 5, 20)
    assert summary.next_due_count == 1


def test_overdue_counts_nowhere():
    summary = summarize_payments([_payment(700, PaymentStatus.OVERDUE, date(2024, 3, 1))])
    assert summary.as_dict() == {
        "total_revenue": 0.0,
        "pending_amount": 0.0,
        "pending_count": 0,
        "next_due_date": None,
        "next_due_count": 0,
    }


def test_payment_summary_is_order_independent():
    expected = summarize_payments(PAYMENTS)
    for perm in itertools.permutations(PAYMENTS):
        assert summarize_payments(perm) == expected


def test_tied_next_due_date_counts_both():
    records = [
        _payment(100, PaymentStatus.PENDING, date(2024, 6, 1)),
        _payment(200, PaymentStatus.PENDING, date(2024, 5, 15)),
        _payment(300, PaymentStatus.PENDING, date(2024, 5, 15)),
        _payment(400, PaymentStatus.PAID, date(2024, 5, 1)),
    ]
    summary = summarize_payments(records)
    assert summary.next_due_date == date(2024, 5, 15)
    assert summary.next_due_count == 2
    assert summary.as_dict()["next_due_date"] == "2024-05-15"


def test_unknown_student_placeholder():
    names = {"st1": "Asha Das"}
    assert student_display_name("st1", names) == "Asha Das"
    assert student_display_name("deleted", names) == UNKNOWN_STUDENT
    assert student_display_name(None, names) == UNKNOWN_STUDENT


def test_progress_of_no_records_is_zero():
    summary = summarize_progress([], now=NOW)
    assert summary.overall_progress == 0
    assert summary.active_students == 0
    assert summary.total_hours == 0


def test_progress_summary():
    records = [
        _study("st1", 40, 2.5, NOW - timedelta(days=1)),
        _study("st1", 60, 1.0, NOW - timedelta(days=2)),
        _study("st2", 81, 3.0, NOW - timedelta(days=30)),
    ]
    summary = summarize_progress(records, now=NOW)
    assert summary.overall_progress == 60
    assert summary.active_students == 1
    assert summary.total_hours == 6.5


def test_progress_rounds_half_up():
    records = [_study("st1", 50, 0, NOW), _study("st2", 51, 0, NOW)]
    assert summarize_progress(records, now=NOW).overall_progress == 51


def test_active_window_is_under_seven_whole_days():
    records = [
        _study("almost", 10, 0, NOW - timedelta(days=6, hours=23)),
        _study("expired", 10, 0, NOW - timedelta(days=7)),
    ]
    assert summarize_progress(records, now=NOW).active_students == 1


def test_progress_summary_is_order_independent():
    records = [
        _study("st1", 10, 1.5, NOW),
        _study("st2", 90, 2.0, NOW - timedelta(days=3)),
        _study("st3", 33, 0.5, NOW - timedelta(days=9)),
    ]
    expected = summarize_progress(records, now=NOW)
    for perm in itertools.permutations(records):
        assert summarize_progress(perm, now=NOW) == expected


def test_paid_payment_is_stamped():
    data = PaymentCreate(
        student_id="st1",
        amount=1200,
        payment_method=PaymentMethod.UPI,
        fee_cycle=FeeCycleType.BIWEEKLY,
        status=PaymentStatus.PAID,
        start_date=date(2024, 1, 1),
    )
    fields = payment_fields(data, now=NOW)
    assert fields["due_date"] == date(2024, 1, 14)
    assert fields["payment_date"] == NOW


def test_pending_payment_has_no_payment_date():
    data = PaymentCreate(
        student_id="st1",
        amount=1200,
        payment_method=PaymentMethod.CASH,
        fee_cycle=FeeCycleType.MONTHLY,
        status=PaymentStatus.PENDING,
        start_date=date(2024, 1, 31),
    )
    fields = payment_fields(data, now=NOW)
    assert fields["due_date"] == date(2024, 3, 2)
    assert fields["payment_date"] is None


def test_study_record_is_stamped():
    data = StudyTrackingCreate(student_id="st1", subject="Physics", topic="Optics", progress=70, study_hours=1.5)
    fields = study_fields(data, now=NOW)
    assert fields["last_studied"] == NOW
    assert fields["progress"] == 70
