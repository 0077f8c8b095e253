from datetime import time

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.models.work_schedule import WorkSchedule
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db
from vetbooking.routes.location_routes import get_location_or_404
from vetbooking.scheduling.schemas import ScheduleEntry
from vetbooking.scheduling.weekdays import day_label

router = APIRouter(tags=['schedules'])

DEFAULT_START_TIME = time(8, 0)
DEFAULT_END_TIME = time(18, 0)
WEEKDAYS = range(1, 6)
ORDER_COLUMNS = {
    'dayOfWeek': WorkSchedule.day_of_week,
    'startTime': WorkSchedule.start_time,
    'createdAt': WorkSchedule.created_at,
}


class CreateWorkScheduleRequest(BaseModel):
    day_of_week: int = Field(ge=0, le=6)
    start_time: time = DEFAULT_START_TIME
    end_time: time = DEFAULT_END_TIME

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UpdateWorkScheduleRequest(BaseModel):
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: time | None = None
    end_time: time | None = None
    is_active: bool | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ScheduleEntryResponse(ScheduleEntry):
    @computed_field(alias='dayLabel')
    @property
    def day_label(self) -> str:
        return day_label(self.day_of_week)


class DeleteScheduleResponse(BaseModel):
    message: str


def validate_time_range(start_time: time, end_time: time) -> None:
    if start_time >= end_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Start time must be earlier than end time.',
        )


def get_schedule_or_404(schedule_id: int, db: Session) -> WorkSchedule:
    schedule = db.query(WorkSchedule).filter(WorkSchedule.id == schedule_id).first()
    if not schedule:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Schedule not found.',
        )
    return schedule


def query_location_schedules(
    location_id: int,
    db: Session,
    active: bool | None = None,
    order_by: str = 'dayOfWeek',
    order_direction: str = 'asc',
) -> list[WorkSchedule]:
    if order_by not in ORDER_COLUMNS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'orderBy must be one of: {", ".join(ORDER_COLUMNS)}.',
        )
    if order_direction not in ('asc', 'desc'):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='orderDirection must be asc or desc.',
        )

    query = db.query(WorkSchedule).filter(WorkSchedule.work_location_id == location_id)
    if active is not None:
        query = query.filter(WorkSchedule.is_active.is_(active))

    column = ORDER_COLUMNS[order_by]
    primary = column.asc() if order_direction == 'asc' else column.desc()

    return query.order_by(primary, WorkSchedule.start_time.asc(), WorkSchedule.id.asc()).all()


@router.post(
    '/{location_id}/schedules',
    response_model=ScheduleEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_work_schedule(
    location_id: int,
    data: CreateWorkScheduleRequest,
    db: Session = Depends(get_db),
):
    validate_time_range(data.start_time, data.end_time)

    ensure_database_ready()

    try:
        get_location_or_404(location_id, db)

        schedule = WorkSchedule(
            work_location_id=location_id,
            day_of_week=data.day_of_week,
            start_time=data.start_time,
            end_time=data.end_time,
            is_active=True,
        )
        db.add(schedule)
        db.commit()
        db.refresh(schedule)

        return schedule
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.get('/{location_id}/schedules', response_model=list[ScheduleEntryResponse])
def list_work_schedules(
    location_id: int,
    active: bool | None = Query(default=None),
    order_by: str = Query(default='dayOfWeek', alias='orderBy'),
    order_direction: str = Query(default='asc', alias='orderDirection'),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        get_location_or_404(location_id, db)
        return query_location_schedules(location_id, db, active, order_by, order_direction)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.post('/{location_id}/schedules/weekdays', response_model=list[ScheduleEntryResponse])
def activate_weekdays(location_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        get_location_or_404(location_id, db)

        for day in WEEKDAYS:
            existing = db.query(WorkSchedule).filter(
                WorkSchedule.work_location_id == location_id,
                WorkSchedule.day_of_week == day,
            ).order_by(WorkSchedule.is_active.desc(), WorkSchedule.id.asc()).first()

            if existing is None:
                db.add(
                    WorkSchedule(
                        work_location_id=location_id,
                        day_of_week=day,
                        start_time=DEFAULT_START_TIME,
                        end_time=DEFAULT_END_TIME,
                        is_active=True,
                    )
                )
            elif not existing.is_active:
                existing.is_active = True

        db.commit()

        return query_location_schedules(location_id, db)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.get('/schedules/{schedule_id}', response_model=ScheduleEntryResponse)
def get_work_schedule(schedule_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        return get_schedule_or_404(schedule_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.put('/schedules/{schedule_id}', response_model=ScheduleEntryResponse)
def update_work_schedule(
    schedule_id: int,
    data: UpdateWorkScheduleRequest,
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        schedule = get_schedule_or_404(schedule_id, db)

        start_time = data.start_time if data.start_time is not None else schedule.start_time
        end_time = data.end_time if data.end_time is not None else schedule.end_time
        validate_time_range(start_time, end_time)

        if data.day_of_week is not None:
            schedule.day_of_week = data.day_of_week
        if data.is_active is not None:
            schedule.is_active = data.is_active
        schedule.start_time = start_time
        schedule.end_time = end_time

        db.commit()
        db.refresh(schedule)

        return schedule
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.delete('/schedules/{schedule_id}', response_model=DeleteScheduleResponse)
def delete_work_schedule(schedule_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        schedule = get_schedule_or_404(schedule_id, db)
        db.delete(schedule)
        db.commit()

        return DeleteScheduleResponse(message='Schedule deleted.')
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc
