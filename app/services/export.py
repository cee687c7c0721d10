"""CSV / Excel exports of the attendance and payment grids."""
import io
from typing import Iterable

import pandas as pd
from fastapi.responses import StreamingResponse

from app.services.aggregates import student_display_name


def attendance_frame(sessions: Iterable, batch_names: dict[str, str], student_names: dict[str, str]) -> pd.DataFrame:
    """One row per student entry; a session without a class gets a single row."""
    rows = []
    for s in sessions:
        base = {
            "Date": s.date.date().isoformat(),
            "Batch": batch_names.get(s.batch_id, s.batch_id),
            "Class Taken": "Yes" if s.class_taken else "No",
            "Class Notes": s.class_notes,
        }
        if not s.attendance:
            rows.append({**base, "Student Name": "", "Status": "", "Notes": ""})
            continue
        for a in s.attendance:
            rows.append(
                {
                    **base,
                    "Student Name": student_display_name(a.student_id, student_names),
                    "Status": "Present" if a.present else "Absent",
                    "Notes": a.notes,
                }
            )
    return pd.DataFrame(
        rows,
        columns=["Date", "Batch", "Student Name", "Status", "Notes", "Class Taken", "Class Notes"],
    )


def payments_frame(payments: Iterable, student_names: dict[str, str]) -> pd.DataFrame:
    rows = [
        {
            "Student Name": student_display_name(p.student_id, student_names),
            "Amount": p.amount,
            "Status": p.status.value,
            "Due Date": p.due_date.isoformat() if p.due_date else "",
            "Payment Date": p.payment_date.date().isoformat() if p.payment_date else "-",
            "Payment Method": p.payment_method.value,
            "Fee Cycle": p.fee_cycle.value,
        }
        for p in payments
    ]
    return pd.DataFrame(
        rows,
        columns=["Student Name", "Amount", "Status", "Due Date", "Payment Date", "Payment Method", "Fee Cycle"],
    )


def frame_response(df: pd.DataFrame, filename: str, format: str, sheet_name: str) -> StreamingResponse:
    if format == "csv":
        stream = io.StringIO()
        df.to_csv(stream, index=False)
        return StreamingResponse(
            iter([stream.getvalue()]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    output.seek(0)
    return StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}.xlsx"},
    )
