from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.core import config
from vetbooking.models.work_location import WorkLocation
from vetbooking.models.work_schedule import WorkSchedule
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db
from vetbooking.routes.location_routes import get_location_or_404
from vetbooking.scheduling.availability import format_slot_label, slots_for_date
from vetbooking.scheduling.available_dates import generate_available_dates
from vetbooking.scheduling.schemas import DaySchedule
from vetbooking.scheduling.serializer import dump_schedule_payload, to_display_form

router = APIRouter(tags=['availability'])


class AvailableDatesResponse(BaseModel):
    vet_work_id: int
    dates: list[date]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TimeSlotResponse(BaseModel):
    time: str
    label: str


class AvailableTimesResponse(BaseModel):
    vet_work_id: int
    date: date
    is_available: bool
    slots: list[TimeSlotResponse]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


def get_active_location_or_404(location_id: int, db: Session) -> WorkLocation:
    location = get_location_or_404(location_id, db)
    if not location.is_active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Work location is not accepting appointments.',
        )
    return location


def load_day_schedules(location_id: int, db: Session) -> list[DaySchedule]:
    schedules = db.query(WorkSchedule).filter(
        WorkSchedule.work_location_id == location_id,
        WorkSchedule.is_active.is_(True),
    ).order_by(WorkSchedule.day_of_week.asc(), WorkSchedule.start_time.asc()).all()

    return to_display_form(schedules)


def compute_available_dates(day_schedules: list[DaySchedule], today: date | None = None) -> list[date]:
    return generate_available_dates(day_schedules, today or date.today(), config.CALENDAR_HORIZON_DAYS)


@router.get('/{location_id}/schedule')
def get_display_schedule(location_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        get_location_or_404(location_id, db)
        day_schedules = load_day_schedules(location_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc

    return Response(content=dump_schedule_payload(day_schedules), media_type='application/json')


@router.get('/{location_id}/available-dates', response_model=AvailableDatesResponse)
def list_available_dates(location_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        get_active_location_or_404(location_id, db)
        day_schedules = load_day_schedules(location_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc

    return AvailableDatesResponse(vet_work_id=location_id, dates=compute_available_dates(day_schedules))


@router.get('/{location_id}/available-times', response_model=AvailableTimesResponse)
def list_available_times(
    location_id: int,
    consultation_date: date = Query(..., alias='date'),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        get_active_location_or_404(location_id, db)
        day_schedules = load_day_schedules(location_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc

    is_available = consultation_date in compute_available_dates(day_schedules)
    slots = slots_for_date(consultation_date, day_schedules, config.SLOT_DURATION_MINUTES) if is_available else []

    return AvailableTimesResponse(
        vet_work_id=location_id,
        date=consultation_date,
        is_available=is_available,
        slots=[
            TimeSlotResponse(time=slot, label=format_slot_label(slot, config.SLOT_DURATION_MINUTES))
            for slot in slots
        ],
    )
