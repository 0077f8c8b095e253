from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vetbooking.models.work_location import WorkLocation
from vetbooking.routes.dependencies import database_unavailable, ensure_database_ready, get_db

router = APIRouter(tags=['work-locations'])


class CreateWorkLocationRequest(BaseModel):
    name: str
    address: str
    number: str
    complement: str | None = None
    neighborhood: str
    zip_code: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator('name', 'address', 'number', 'neighborhood', 'zip_code')
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('This field is required.')
        return normalized

    @field_validator('complement')
    @classmethod
    def validate_complement(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class WorkLocationResponse(BaseModel):
    id: int
    name: str
    address: str
    number: str
    complement: str | None = None
    neighborhood: str
    zip_code: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def get_location_or_404(location_id: int, db: Session) -> WorkLocation:
    location = db.query(WorkLocation).filter(WorkLocation.id == location_id).first()
    if not location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Work location not found.',
        )
    return location


@router.post('', response_model=WorkLocationResponse, status_code=status.HTTP_201_CREATED)
def create_work_location(data: CreateWorkLocationRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        location = WorkLocation(
            name=data.name,
            address=data.address,
            number=data.number,
            complement=data.complement,
            neighborhood=data.neighborhood,
            zip_code=data.zip_code,
            is_active=True,
        )
        db.add(location)
        db.commit()
        db.refresh(location)

        return location
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.get('', response_model=list[WorkLocationResponse])
def list_work_locations(
    active: bool | None = Query(default=None),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        query = db.query(WorkLocation)
        if active is not None:
            query = query.filter(WorkLocation.is_active.is_(active))

        return query.order_by(WorkLocation.name.asc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/{location_id}', response_model=WorkLocationResponse)
def get_work_location(location_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    try:
        return get_location_or_404(location_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
