"""Next due date for a fee cycle."""
from datetime import date, timedelta

from app.models.payment import FeeCycleType

# Fixed-day cycles. 13 and 16 days are the institute's billing rule, not 14/21.
_DAY_OFFSETS = {
    FeeCycleType.BIWEEKLY: 13,
    FeeCycleType.TRIWEEKLY: 16,
}

_MONTH_OFFSETS = {
    FeeCycleType.MONTHLY: 1,
    FeeCycleType.QUARTERLY: 3,
    FeeCycleType.YEARLY: 12,
}


def add_months(anchor: date, months: int) -> date:
    """
    Add calendar months keeping the day of month.
    If the target month is shorter, the extra days roll over into the next
    month: 2024-01-31 + 1 month is 2024-03-02.
    """
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=anchor.day - 1)


def compute_next_due(cycle_type: FeeCycleType | str, anchor: date) -> date:
    """Return the due date one fee cycle after ``anchor``."""
    try:
        cycle = FeeCycleType(cycle_type)
    except ValueError:
        raise ValueError(f"Unknown fee cycle: {cycle_type!r}") from None
    if cycle in _DAY_OFFSETS:
        return anchor + timedelta(days=_DAY_OFFSETS[cycle])
    return add_months(anchor, _MONTH_OFFSETS[cycle])
