from datetime import date, time, timedelta

import pytest
from fastapi import HTTPException

from vetbooking.routes.availability_routes import (
    compute_available_dates,
    get_display_schedule,
    list_available_dates,
    list_available_times,
    load_day_schedules,
)
from vetbooking.scheduling.schemas import DaySchedule


def next_weekday(weekday: int) -> date:
    today = date.today()
    return today + timedelta(days=(weekday - today.weekday()) % 7 or 7)


def test_load_day_schedules_builds_display_form_from_active_rows(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(14, 0), time(18, 0))
    add_schedule(1, time(8, 0), time(12, 0))
    add_schedule(2, time(8, 0), time(12, 0), is_active=False)
    add_schedule(6, time(8, 0), time(12, 0))

    assert load_day_schedules(location.id, schedule_db) == [
        DaySchedule(day_name='Segunda', hours='08:00-12:00, 14:00-18:00'),
        DaySchedule(day_name='Sábado', hours='08:00-12:00'),
    ]


def test_get_display_schedule_returns_exact_payload(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(12, 0))
    add_schedule(1, time(14, 0), time(18, 0))
    add_schedule(6, time(8, 0), time(12, 0))

    response = get_display_schedule(location_id=location.id, db=schedule_db)

    assert response.media_type == 'application/json'
    assert response.body.decode('utf-8') == '[{"Segunda":"08:00-12:00, 14:00-18:00"},{"Sábado":"08:00-12:00"}]'


def test_get_display_schedule_requires_existing_location(schedule_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_display_schedule(location_id=999, db=schedule_db)

    assert exception_info.value.status_code == 404


def test_compute_available_dates_uses_fixed_today() -> None:
    schedules = [DaySchedule(day_name='Segunda', hours='08:00-09:00')]

    assert compute_available_dates(schedules, date(2026, 1, 1))[:2] == [date(2026, 1, 5), date(2026, 1, 12)]


def test_list_available_dates_only_returns_scheduled_weekdays(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(9, 0))

    response = list_available_dates(location_id=location.id, db=schedule_db)

    assert response.vet_work_id == location.id
    assert response.dates
    assert response.dates[0] == next_weekday(0)
    assert all(value.weekday() == 0 and value > date.today() for value in response.dates)


def test_list_available_dates_without_schedule_uses_fallback_window(schedule_db, location) -> None:
    response = list_available_dates(location_id=location.id, db=schedule_db)

    today = date.today()
    expected = [today + timedelta(days=offset) for offset in range(1, 15)]
    assert response.dates == [value for value in expected if value.weekday() != 6]


def test_list_available_dates_rejects_inactive_location(schedule_db, location) -> None:
    location.is_active = False
    schedule_db.commit()

    with pytest.raises(HTTPException) as exception_info:
        list_available_dates(location_id=location.id, db=schedule_db)

    assert exception_info.value.status_code == 404


def test_list_available_times_returns_labelled_slots(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(9, 0))
    monday = next_weekday(0)

    response = list_available_times(location_id=location.id, consultation_date=monday, db=schedule_db)

    assert response.is_available is True
    assert [(slot.time, slot.label) for slot in response.slots] == [
        ('08:00:00', '8h às 8h30min'),
        ('08:30:00', '8h30min às 9h'),
    ]
    assert response.model_dump(mode='json', by_alias=True)['vetWorkId'] == location.id


def test_list_available_times_for_unavailable_date_is_empty(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(9, 0))

    response = list_available_times(location_id=location.id, consultation_date=next_weekday(1), db=schedule_db)

    assert response.is_available is False
    assert response.slots == []
