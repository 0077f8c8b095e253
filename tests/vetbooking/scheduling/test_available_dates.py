from datetime import date

import pytest

from vetbooking.scheduling.available_dates import candidate_dates, generate_available_dates
from vetbooking.scheduling.schemas import DaySchedule
from vetbooking.scheduling.weekdays import DAY_NAMES, day_of_week

# 2026-01-01 is a Thursday; 2026-01-04 is a Sunday.
NEW_YEAR = date(2026, 1, 1)


def test_generate_available_dates_without_schedule_uses_next_fourteen_days_minus_sundays() -> None:
    dates = generate_available_dates([], NEW_YEAR)

    assert dates == [date(2026, 1, day) for day in range(2, 16) if day not in (4, 11)]


def test_generate_available_dates_keeps_only_scheduled_weekdays() -> None:
    schedules = [DaySchedule(day_name='Segunda', hours='08:00-09:00')]

    assert generate_available_dates(schedules, NEW_YEAR) == [
        date(2026, 1, 5),
        date(2026, 1, 12),
        date(2026, 1, 19),
        date(2026, 1, 26),
    ]


def test_generate_available_dates_continues_into_following_month() -> None:
    schedules = [DaySchedule(day_name='Segunda', hours='08:00-09:00')]

    assert generate_available_dates(schedules, date(2026, 1, 20)) == [
        date(2026, 1, 26),
        date(2026, 2, 2),
        date(2026, 2, 9),
        date(2026, 2, 16),
    ]


def test_generate_available_dates_includes_sunday_only_when_scheduled() -> None:
    sunday_only = [DaySchedule(day_name='Domingo', hours='09:00-12:00')]

    assert generate_available_dates(sunday_only, date(2026, 12, 20)) == [
        date(2026, 12, 27),
        date(2027, 1, 3),
        date(2027, 1, 10),
        date(2027, 1, 17),
    ]


def test_generate_available_dates_excludes_today_and_past() -> None:
    schedules = [DaySchedule(day_name='Segunda', hours='08:00-09:00')]
    today = date(2026, 1, 5)

    dates = generate_available_dates(schedules, today)

    assert dates[0] == date(2026, 1, 12)
    assert all(value > today for value in dates)


def test_generate_available_dates_matches_day_names_case_insensitively() -> None:
    schedules = [DaySchedule(day_name='SEGUNDA', hours='08:00-09:00')]

    assert generate_available_dates(schedules, NEW_YEAR)[0] == date(2026, 1, 5)


def test_generate_available_dates_respects_horizon() -> None:
    every_day = [DaySchedule(day_name=name, hours='08:00-09:00') for name in DAY_NAMES]

    assert generate_available_dates(every_day, NEW_YEAR, horizon_days=5) == [
        date(2026, 1, day) for day in range(2, 7)
    ]


def test_generate_available_dates_with_only_unknown_day_names_is_empty() -> None:
    schedules = [DaySchedule(day_name='Monday', hours='08:00-09:00')]

    assert generate_available_dates(schedules, NEW_YEAR) == []


@pytest.mark.parametrize('today', [NEW_YEAR, date(2026, 2, 27), date(2026, 12, 31), date(2028, 2, 28)])
def test_generate_available_dates_is_sorted_and_never_contains_unscheduled_sundays(today: date) -> None:
    weekdays = [DaySchedule(day_name=name, hours='08:00-12:00') for name in DAY_NAMES[1:]]

    dates = generate_available_dates(weekdays, today)

    assert dates == sorted(set(dates))
    assert all(day_of_week(value) != 0 for value in dates)
    assert all(value > today for value in dates)


def test_candidate_dates_stop_at_end_of_following_month() -> None:
    candidates = candidate_dates(date(2026, 1, 31))

    assert candidates[0] == date(2026, 2, 1)
    assert candidates[-1] == date(2026, 2, 28)
    assert len(candidates) == 28


def test_candidate_dates_cap_at_thirty_days() -> None:
    candidates = candidate_dates(NEW_YEAR)

    assert len(candidates) == 30
    assert candidates[-1] == date(2026, 1, 31)
