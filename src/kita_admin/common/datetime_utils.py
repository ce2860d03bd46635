from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now()


def monday_of(value: date) -> date:
    return value - timedelta(days=value.weekday())


def friday_of(value: date) -> date:
    return monday_of(value) + timedelta(days=4)


def sunday_of(value: date) -> date:
    return monday_of(value) + timedelta(days=6)


def week_days(value: date, *, days: int = 5) -> List[date]:
    """Consecutive days of the week containing ``value``, starting Monday."""
    monday = monday_of(value)
    return [monday + timedelta(days=i) for i in range(days)]


def week_from_param(value: str | None, *, today: date) -> date:
    """Reference date for a ``?week=`` query parameter; falls back to today."""
    if not value:
        return today
    try:
        return parse_iso_date(value)
    except ValueError:
        return today
