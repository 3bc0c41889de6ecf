"""Date manipulation utilities"""

from datetime import date, timedelta
from dateutil.relativedelta import relativedelta

# Days between payments for fixed-interval frequencies; monthly uses calendar months
FREQUENCY_INTERVAL_DAYS = {
    "daily": 1,
    "weekly": 7,
    "biweekly": 14,
}


def nth_payment_date(start: date, frequency: str, n: int) -> date:
    """
    Due date of the n-th payment (1-indexed) starting on `start`.

    Monthly plans step by calendar month; the day is clamped to the end of
    shorter months (Jan 31 -> Feb 28/29 -> Mar 31).
    """
    if frequency == "monthly":
        return start + relativedelta(months=n - 1)
    return start + timedelta(days=FREQUENCY_INTERVAL_DAYS[frequency] * (n - 1))
