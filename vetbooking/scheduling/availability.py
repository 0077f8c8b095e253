"""Expansion of a weekday's open hours into fixed-duration bookable slots."""

from collections.abc import Sequence
from datetime import date

from vetbooking.scheduling.hours import MINUTES_PER_HOUR, format_clock, parse_clock, parse_ranges
from vetbooking.scheduling.schemas import DaySchedule
from vetbooking.scheduling.weekdays import SUNDAY, day_of_week, find_day_schedule

DEFAULT_SLOT_MINUTES = 30
DEFAULT_RANGES = (
    (8 * MINUTES_PER_HOUR, 12 * MINUTES_PER_HOUR),
    (14 * MINUTES_PER_HOUR, 18 * MINUTES_PER_HOUR),
)


def iterate_slot_starts(start: int, end: int, slot_minutes: int) -> list[int]:
    starts: list[int] = []
    current = start

    while current + slot_minutes <= end:
        starts.append(current)
        current += slot_minutes

    return starts


def generate_slots(
    day: int,
    day_schedules: Sequence[DaySchedule],
    slot_minutes: int = DEFAULT_SLOT_MINUTES,
) -> list[str]:
    """Return the ``HH:MM:SS`` slot starts for weekday ``day`` (0 = Sunday).

    A weekday with hours listed in ``day_schedules`` uses exactly those
    ranges; malformed ranges contribute nothing. A weekday without hours
    falls back to 08:00-12:00 and 14:00-18:00, except Sunday, which stays
    closed.
    """
    if slot_minutes <= 0:
        raise ValueError('slot_minutes must be positive.')

    day_schedule = find_day_schedule(day_schedules, day)

    if day_schedule is not None and day_schedule.hours:
        ranges = parse_ranges(day_schedule.hours)
    elif day != SUNDAY:
        ranges = list(DEFAULT_RANGES)
    else:
        ranges = []

    slots: list[str] = []
    booked_until = -1
    for start, end in sorted(ranges):
        for offset in iterate_slot_starts(start, end, slot_minutes):
            # overlapping ranges must not produce overlapping slots
            if offset < booked_until:
                continue
            slots.append(format_clock(offset))
            booked_until = offset + slot_minutes

    return slots


def slots_for_date(
    value: date,
    day_schedules: Sequence[DaySchedule],
    slot_minutes: int = DEFAULT_SLOT_MINUTES,
) -> list[str]:
    return generate_slots(day_of_week(value), day_schedules, slot_minutes)


def _format_hour_label(minutes: int) -> str:
    hour, minute = divmod(minutes, MINUTES_PER_HOUR)
    if minute:
        return f'{hour}h{minute:02d}min'
    return f'{hour}h'


def format_slot_label(slot: str, slot_minutes: int = DEFAULT_SLOT_MINUTES) -> str:
    """Render a slot as shown to tutors, e.g. ``"08:00:00"`` -> ``"8h às 8h30min"``."""
    start = parse_clock(slot)
    if start is None:
        return slot
    return f'{_format_hour_label(start)} às {_format_hour_label(start + slot_minutes)}'
