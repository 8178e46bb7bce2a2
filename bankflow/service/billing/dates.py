"""Calendar arithmetic for bill scheduling and payment history."""

import calendar
from datetime import date, datetime, timezone
from typing import Union


def to_iso_timestamp(moment: datetime) -> str:
    """Render a moment as an ISO-8601 UTC timestamp with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Timestamps without an offset are taken as UTC.

    Raises:
        ValueError: If the value isn't ISO-8601
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def subtract_months(moment: datetime, months: int) -> datetime:
    """
    Step back a whole number of calendar months.

    The day of month is kept where possible and clamped to the last day
    of the target month otherwise (March 31 minus one month is Feb 28/29).
    """
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, days_in_month(year, month))
    return moment.replace(year=year, month=month, day=day)


def format_local_date(value: Union[date, datetime]) -> str:
    """
    Build a YYYY-MM-DD string from the calendar fields as given.

    No timezone conversion happens here; pass a local datetime to get
    the local date.
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def next_payment_date(recurring_day: int, today: date) -> date:
    """
    Next date a bill recurring on recurring_day falls due, strictly after today.

    On the due day itself the next occurrence is next month's. Days past
    the end of a month fall on that month's last day.

    Raises:
        ValueError: If recurring_day is outside 1-31
    """
    if not 1 <= recurring_day <= 31:
        raise ValueError(f"recurring_day must be between 1 and 31, got {recurring_day}")

    day = min(recurring_day, days_in_month(today.year, today.month))
    candidate = today.replace(day=day)
    if candidate > today:
        return candidate

    year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
    return date(year, month, min(recurring_day, days_in_month(year, month)))


def days_until_next_payment(recurring_day: int, today: date) -> int:
    """Whole days until the next payment date; never 0."""
    return (next_payment_date(recurring_day, today) - today).days
