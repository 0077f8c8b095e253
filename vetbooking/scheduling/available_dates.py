"""Selectable consultation dates for a location's weekly schedule."""

from calendar import monthrange
from collections.abc import Sequence
from datetime import date, timedelta

from vetbooking.scheduling.schemas import DaySchedule
from vetbooking.scheduling.weekdays import SUNDAY, day_of_week, find_day_schedule

DEFAULT_HORIZON_DAYS = 30
FALLBACK_WINDOW_DAYS = 14


def _next_month(value: date) -> date:
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def candidate_dates(today: date, horizon_days: int = DEFAULT_HORIZON_DAYS) -> list[date]:
    """Days from tomorrow to the end of next month, at most ``horizon_days`` of them."""
    candidates: list[date] = []

    current = today + timedelta(days=1)
    following_month = _next_month(today)
    last_day = following_month.replace(day=monthrange(following_month.year, following_month.month)[1])

    while current <= last_day and len(candidates) < horizon_days:
        candidates.append(current)
        current += timedelta(days=1)

    return candidates


def generate_available_dates(
    day_schedules: Sequence[DaySchedule],
    today: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> list[date]:
    if not day_schedules:
        window = (today + timedelta(days=offset) for offset in range(1, FALLBACK_WINDOW_DAYS + 1))
        return [value for value in window if day_of_week(value) != SUNDAY]

    return [
        value
        for value in candidate_dates(today, horizon_days)
        if find_day_schedule(day_schedules, day_of_week(value)) is not None
    ]
