"""Weekday naming shared by the schedule display form and the engines.

Days are numbered 0 = Sunday through 6 = Saturday. The display form keys
each day by its short Portuguese name; the operator screens use the long
``-feira`` labels.
"""

from collections.abc import Iterable
from datetime import date

DAY_NAMES = ('Domingo', 'Segunda', 'Terça', 'Quarta', 'Quinta', 'Sexta', 'Sábado')
DAY_LABELS = (
    'Domingo',
    'Segunda-feira',
    'Terça-feira',
    'Quarta-feira',
    'Quinta-feira',
    'Sexta-feira',
    'Sábado',
)
SUNDAY = 0

_INDEX_BY_NAME = {name.lower(): index for index, name in enumerate(DAY_NAMES)}


def day_of_week(value: date) -> int:
    return value.isoweekday() % 7


def day_name(day: int) -> str:
    return DAY_NAMES[day]


def day_label(day: int) -> str:
    return DAY_LABELS[day]


def day_index(name: str) -> int | None:
    if not isinstance(name, str):
        return None
    return _INDEX_BY_NAME.get(name.strip().lower())


def find_day_schedule(day_schedules: Iterable, day: int):
    """Return the first display-form entry naming ``day``, or None."""
    wanted = day_name(day).lower()
    for schedule in day_schedules:
        if schedule is not None and schedule.day_name and schedule.day_name.lower() == wanted:
            return schedule
    return None
