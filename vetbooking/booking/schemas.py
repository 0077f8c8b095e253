import re
from datetime import date

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

MAX_REASON_LENGTH = 600
SLOT_PATTERN = re.compile(r'^\d{2}:\d{2}:\d{2}$')


class AppointmentRequest(BaseModel):
    tutor_name: str
    pet_name: str
    vet_work_id: int
    consultation_date: date
    time: str
    reason: str | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator('tutor_name', 'pet_name')
    @classmethod
    def validate_names(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('This field is required.')
        return normalized

    @field_validator('time')
    @classmethod
    def validate_time(cls, value: str) -> str:
        normalized = value.strip()
        if not SLOT_PATTERN.match(normalized):
            raise ValueError('Time must use the HH:MM:SS format.')
        return normalized

    @field_validator('reason')
    @classmethod
    def validate_reason(cls, value: str | None) -> str | None:
        if value is None:
            return None

        normalized = value.strip()
        if not normalized:
            return None

        if len(normalized) > MAX_REASON_LENGTH:
            raise ValueError(f'Reason must be {MAX_REASON_LENGTH} characters or fewer.')

        return normalized

    def to_payload(self) -> dict:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class SubmissionResult(BaseModel):
    success: bool
    error: str | None = None
    appointment_id: int | None = None
