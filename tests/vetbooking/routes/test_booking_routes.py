from datetime import date, time, timedelta

import pytest
from fastapi import HTTPException

from vetbooking.booking.schemas import AppointmentRequest
from vetbooking.models.appointment import Appointment
from vetbooking.routes.booking_routes import AppointmentResponse, create_appointment, validate_requested_slot


def next_weekday(weekday: int) -> date:
    today = date.today()
    return today + timedelta(days=(weekday - today.weekday()) % 7 or 7)


def make_request(vet_work_id: int, consultation_date: date, slot: str = '08:00:00') -> AppointmentRequest:
    return AppointmentRequest(
        tutor_name='Ana Souza',
        pet_name='Rex',
        vet_work_id=vet_work_id,
        consultation_date=consultation_date,
        time=slot,
        reason='Vacina anual',
    )


def test_create_appointment_persists_pending_request(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(9, 0))
    monday = next_weekday(0)

    appointment = create_appointment(data=make_request(location.id, monday), db=schedule_db)

    stored = schedule_db.query(Appointment).filter(Appointment.id == appointment.id).first()
    assert stored is not None
    assert stored.status == 'PENDING'
    assert stored.consultation_date == monday
    assert stored.time == '08:00:00'

    payload = AppointmentResponse.model_validate(appointment).model_dump(mode='json', by_alias=True)
    assert payload['tutorName'] == 'Ana Souza'
    assert payload['vetWorkId'] == location.id
    assert payload['consultationDate'] == monday.isoformat()


def test_create_appointment_rejects_time_outside_schedule(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(9, 0))

    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=make_request(location.id, next_weekday(0), '09:00:00'), db=schedule_db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'The selected time is not available on this date.'
    assert schedule_db.query(Appointment).count() == 0


def test_create_appointment_rejects_unscheduled_date(schedule_db, location, add_schedule) -> None:
    add_schedule(1, time(8, 0), time(9, 0))

    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=make_request(location.id, next_weekday(1)), db=schedule_db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'The selected date is not available for this location.'


def test_create_appointment_rejects_unknown_location(schedule_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        create_appointment(data=make_request(999, next_weekday(0)), db=schedule_db)

    assert exception_info.value.status_code == 404


def test_validate_requested_slot_uses_default_hours_without_schedule(schedule_db, location) -> None:
    # 2026-01-05 is a Monday; with no schedule rows the default 08:00-12:00 / 14:00-18:00 applies.
    request = make_request(location.id, date(2026, 1, 5), '17:30:00')

    validate_requested_slot(request, schedule_db, today=date(2026, 1, 1))

    with pytest.raises(HTTPException):
        validate_requested_slot(
            make_request(location.id, date(2026, 1, 5), '12:00:00'), schedule_db, today=date(2026, 1, 1)
        )
    with pytest.raises(HTTPException):
        validate_requested_slot(make_request(location.id, date(2026, 1, 4)), schedule_db, today=date(2026, 1, 1))
