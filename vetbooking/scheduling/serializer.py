"""Conversion between stored schedule rows and the display-form payload.

The store keeps one row per (location, weekday, range); the display form
keeps one ``{dayName: hours}`` pair per weekday, where ``hours`` may list
several ``"HH:MM-HH:MM"`` ranges separated by ``", "``.

Grouping: every active row of a weekday is sorted by start time and joined
into a single hours string. Splitting: every range of an hours string
becomes its own row for that weekday.
"""

import json
import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import time
from typing import Any

from vetbooking.scheduling.hours import MINUTES_PER_HOUR, parse_ranges
from vetbooking.scheduling.schemas import DaySchedule, Err, Ok, ScheduleEntry
from vetbooking.scheduling.weekdays import DAY_NAMES, day_index, day_name

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = ', '


def _minutes_to_time(minutes: int) -> time:
    return time(minutes // MINUTES_PER_HOUR, minutes % MINUTES_PER_HOUR)


def to_display_form(entries: Iterable[Any]) -> list[DaySchedule]:
    grouped: dict[int, list[tuple[time, time]]] = defaultdict(list)

    for entry in entries:
        if not entry.is_active:
            continue
        if entry.day_of_week not in range(len(DAY_NAMES)):
            logger.warning('Skipping schedule entry %s with invalid weekday %r', entry.id, entry.day_of_week)
            continue
        if entry.start_time >= entry.end_time:
            logger.warning('Skipping schedule entry %s: start time is not before end time', entry.id)
            continue
        grouped[entry.day_of_week].append((entry.start_time, entry.end_time))

    day_schedules: list[DaySchedule] = []
    for day in sorted(grouped):
        ranges = sorted(grouped[day])
        hours = RANGE_SEPARATOR.join(f'{start:%H:%M}-{end:%H:%M}' for start, end in ranges)
        day_schedules.append(DaySchedule(day_name=day_name(day), hours=hours))

    return day_schedules


def from_display_form(
    day_schedules: Iterable[DaySchedule],
    work_location_id: int | None = None,
) -> list[ScheduleEntry]:
    entries: list[ScheduleEntry] = []

    for day_schedule in day_schedules:
        day = day_index(day_schedule.day_name)
        if day is None:
            logger.warning('Dropping schedule for unknown weekday %r', day_schedule.day_name)
            continue

        for start, end in parse_ranges(day_schedule.hours):
            if start >= end:
                logger.warning('Skipping empty range on %s: %s', day_schedule.day_name, day_schedule.hours)
                continue
            entries.append(
                ScheduleEntry(
                    work_location_id=work_location_id,
                    day_of_week=day,
                    start_time=_minutes_to_time(start),
                    end_time=_minutes_to_time(end),
                    is_active=True,
                )
            )

    return entries


def parse_schedule_payload(raw: str | bytes | list | None) -> Ok | Err:
    """Validate a display-form payload such as ``[{"Segunda": "08:00-12:00"}]``.

    Structural problems with the document itself are reported as ``Err``.
    Elements that cannot be read as a weekday entry are dropped.
    """
    if raw is None:
        return Err(reason='Schedule payload is missing.')

    if isinstance(raw, (str, bytes)):
        try:
            document = json.loads(raw)
        except (ValueError, RecursionError):
            return Err(reason='Schedule payload is not valid JSON.')
    else:
        document = raw

    if not isinstance(document, list):
        return Err(reason='Schedule payload must be a JSON array.')

    day_schedules: list[DaySchedule] = []
    for item in document:
        if not isinstance(item, dict) or len(item) != 1:
            logger.warning('Dropping schedule element %r: expected a single weekday key', item)
            continue

        (name, hours), = item.items()
        day = day_index(name)
        if day is None:
            logger.warning('Dropping schedule element for unknown weekday %r', name)
            continue

        if hours is None:
            hours = ''
        if not isinstance(hours, str):
            logger.warning('Dropping schedule element for %s: hours must be a string', name)
            continue

        day_schedules.append(DaySchedule(day_name=day_name(day), hours=hours.strip()))

    return Ok(value=day_schedules)


def dump_schedule_payload(day_schedules: Iterable[DaySchedule]) -> str:
    return json.dumps(
        [{day_schedule.day_name: day_schedule.hours} for day_schedule in day_schedules],
        ensure_ascii=False,
        separators=(',', ':'),
    )
