"""Date manipulation utilities

All calendar arithmetic happens in UTC so the same reference instant always
lands on the same calendar day.
"""

import calendar
import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def is_iso_date(value: Optional[str]) -> bool:
    """Syntactic YYYY-MM-DD check (no calendar validation)"""
    return isinstance(value, str) and ISO_DATE_PATTERN.fullmatch(value) is not None


def to_utc(moment: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are taken as already UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_date(reference: Union[date, datetime]) -> date:
    """Calendar day of the reference in UTC"""
    if isinstance(reference, datetime):
        return to_utc(reference).date()
    return reference


def epoch_millis(moment: datetime) -> int:
    return (to_utc(moment) - EPOCH) // timedelta(milliseconds=1)


def to_iso_timestamp(moment: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM:SS.mmmZ"""
    moment = to_utc(moment)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


def add_days_iso(reference: Union[date, datetime], days: int) -> str:
    """Reference plus N days, truncated to the UTC calendar date"""
    return (utc_date(reference) + timedelta(days=days)).isoformat()


def days_in_month(year: int, month: int) -> int:
    """Number of days in month (1-based month)"""
    return calendar.monthrange(year, month)[1]


def next_date_from_day_of_month(day_of_month: int, reference: Union[date, datetime]) -> date:
    """
    Next occurrence of a day-of-month on or after the reference date.

    The day is clamped to the length of the target month, so day 31 in April
    yields April 30. Days outside 1-31 are clamped into that range first.
    """
    day_of_month = min(max(day_of_month, 1), 31)
    today = utc_date(reference)

    candidate = today.replace(day=min(day_of_month, days_in_month(today.year, today.month)))
    if candidate >= today:
        return candidate

    year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
    return date(year, month, min(day_of_month, days_in_month(year, month)))


def get_next_due_date(day_of_month: int, reference: Union[date, datetime]) -> str:
    """Next due date as YYYY-MM-DD"""
    return next_date_from_day_of_month(day_of_month, reference).isoformat()


def get_next_statement_close_date(day_of_month: int, reference: Union[date, datetime]) -> str:
    """Next statement close date as YYYY-MM-DD"""
    return next_date_from_day_of_month(day_of_month, reference).isoformat()
