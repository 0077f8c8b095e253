"""Schedule value types shared by the serializer, the engines and the routes."""

from datetime import datetime, time

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from vetbooking.scheduling.weekdays import DAY_NAMES


class DaySchedule(BaseModel):
    """One weekday of the display form: a day name and its hours string."""

    day_name: str
    hours: str = ''

    class Config:
        frozen = True


class ScheduleEntry(BaseModel):
    """A weekly recurring availability rule for one location and weekday."""

    id: int | None = None
    work_location_id: int | None = Field(default=None, alias='vetWorkLocationId')
    day_of_week: int = Field(ge=0, le=len(DAY_NAMES) - 1)
    start_time: time
    end_time: time
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @model_validator(mode='after')
    def validate_time_range(self) -> 'ScheduleEntry':
        if self.start_time >= self.end_time:
            raise ValueError('Start time must be earlier than end time.')
        return self


class Ok(BaseModel):
    """Successful parse of a display-form schedule payload."""

    value: list[DaySchedule]


class Err(BaseModel):
    """Rejected display-form schedule payload."""

    reason: str

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('A rejection reason is required.')
        return normalized


ParseResult = Ok | Err
