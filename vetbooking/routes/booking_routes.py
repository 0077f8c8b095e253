import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.booking.schemas import AppointmentRequest
from vetbooking.core import config
from vetbooking.models.appointment import Appointment
from vetbooking.routes.availability_routes import (
    compute_available_dates,
    get_active_location_or_404,
    load_day_schedules,
)
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db
from vetbooking.scheduling.availability import slots_for_date

router = APIRouter(tags=['booking'])

logger = logging.getLogger(__name__)

PENDING_STATUS = 'PENDING'


class AppointmentResponse(BaseModel):
    id: int
    tutor_name: str
    pet_name: str
    vet_work_id: int
    consultation_date: date
    time: str
    reason: str | None = None
    status: str
    created_at: datetime | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def validate_requested_slot(data: AppointmentRequest, db: Session, today: date | None = None) -> None:
    get_active_location_or_404(data.vet_work_id, db)
    day_schedules = load_day_schedules(data.vet_work_id, db)

    if data.consultation_date not in compute_available_dates(day_schedules, today):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='The selected date is not available for this location.',
        )

    if data.time not in slots_for_date(data.consultation_date, day_schedules, config.SLOT_DURATION_MINUTES):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='The selected time is not available on this date.',
        )


@router.post('/scheduling', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(data: AppointmentRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        validate_requested_slot(data, db)

        # TODO: reject slots already held by another appointment for this location once
        # the booking backend defines how concurrent requests for one slot are resolved.
        appointment = Appointment(
            tutor_name=data.tutor_name,
            pet_name=data.pet_name,
            vet_work_id=data.vet_work_id,
            consultation_date=data.consultation_date,
            time=data.time,
            reason=data.reason,
            status=PENDING_STATUS,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)

        logger.info(
            'Appointment %s requested for location %s on %s at %s',
            appointment.id,
            appointment.vet_work_id,
            appointment.consultation_date.isoformat(),
            appointment.time,
        )

        return appointment
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc
