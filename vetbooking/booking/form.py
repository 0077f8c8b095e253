"""State machine behind the "book a consultation" form.

    IDLE -> DATE_SELECTED -> TIME_SELECTED -> SUBMITTING -> SUCCEEDED | FAILED

A success resets the form to IDLE; a failure returns it to TIME_SELECTED
with everything the tutor typed still in place. ``close()`` goes back to
IDLE from anywhere.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import date
from enum import Enum

from pydantic import ValidationError as PydanticValidationError

from vetbooking.booking.client import BookingSubmissionClient
from vetbooking.booking.errors import SubmissionError, ValidationError
from vetbooking.booking.pickers import ClickOutsideEvents, PickerKind
from vetbooking.booking.schemas import AppointmentRequest
from vetbooking.scheduling.availability import DEFAULT_SLOT_MINUTES, slots_for_date
from vetbooking.scheduling.available_dates import DEFAULT_HORIZON_DAYS, generate_available_dates
from vetbooking.scheduling.schemas import DaySchedule

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = 'Please fill in all required fields.'


class FormState(str, Enum):
    IDLE = 'idle'
    DATE_SELECTED = 'date_selected'
    TIME_SELECTED = 'time_selected'
    SUBMITTING = 'submitting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


class BookingForm:
    def __init__(
        self,
        vet_work_id: int,
        day_schedules: Iterable[DaySchedule],
        client: BookingSubmissionClient,
        *,
        today: date | None = None,
        tutor_name: str = '',
        on_success: Callable[[], None] | None = None,
        slot_minutes: int = DEFAULT_SLOT_MINUTES,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
    ):
        self.vet_work_id = vet_work_id
        self.day_schedules = tuple(day_schedules)
        self.client = client
        self.today = today
        self.default_tutor_name = tutor_name
        self.on_success = on_success
        self.slot_minutes = slot_minutes
        self.horizon_days = horizon_days

        self.last_outcome: FormState | None = None
        self.active_picker: PickerKind | None = None
        self._generation = 0
        self.reset()

    @property
    def picker_visible(self) -> bool:
        return self.active_picker is not None

    @property
    def submit_enabled(self) -> bool:
        return self.state is not FormState.SUBMITTING

    def reset(self) -> None:
        self._generation += 1
        self.state = FormState.IDLE
        self.tutor_name = self.default_tutor_name
        self.pet_name = ''
        self.reason = ''
        self.consultation_date: date | None = None
        self.time: str | None = None
        self.available_times: list[str] = []
        self.available_dates = generate_available_dates(
            self.day_schedules,
            self.today or date.today(),
            self.horizon_days,
        )
        self.active_picker = None

    def close(self) -> None:
        self.reset()

    def _ensure_editable(self) -> None:
        if self.state is FormState.SUBMITTING:
            raise ValidationError('The booking request is already being submitted.')

    def select_date(self, value: date) -> list[str]:
        self._ensure_editable()
        if value not in self.available_dates:
            raise ValidationError(f'{value.isoformat()} is not an available date.')

        self.consultation_date = value
        self.available_times = slots_for_date(value, self.day_schedules, self.slot_minutes)
        self.time = None
        self.state = FormState.DATE_SELECTED
        if self.active_picker is PickerKind.CALENDAR:
            self.active_picker = None
        return self.available_times

    def select_time(self, slot: str) -> None:
        self._ensure_editable()
        if self.consultation_date is None:
            raise ValidationError('Select a date before choosing a time.', ('consultation_date',))
        if slot not in self.available_times:
            raise ValidationError(f'{slot} is not an available time for {self.consultation_date.isoformat()}.')

        self.time = slot
        self.state = FormState.TIME_SELECTED
        if self.active_picker is PickerKind.TIME:
            self.active_picker = None

    def close_picker(self) -> None:
        self.active_picker = None

    @contextmanager
    def picker(self, kind: PickerKind, events: ClickOutsideEvents) -> Iterator['BookingForm']:
        """Show one picker while the block runs; clicks outside it close it."""
        self._ensure_editable()
        self.active_picker = kind
        unsubscribe = events.subscribe(self.close_picker)
        try:
            yield self
        finally:
            unsubscribe()
            if self.active_picker is kind:
                self.active_picker = None

    def missing_fields(self) -> tuple[str, ...]:
        values = {
            'tutor_name': self.tutor_name,
            'pet_name': self.pet_name,
            'consultation_date': self.consultation_date,
            'time': self.time,
        }
        return tuple(
            field for field, value in values.items()
            if value is None or (isinstance(value, str) and not value.strip())
        )

    def build_request(self) -> AppointmentRequest:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE, missing)

        if self.consultation_date not in self.available_dates:
            raise ValidationError(f'{self.consultation_date.isoformat()} is no longer an available date.')
        if self.time not in self.available_times:
            raise ValidationError(f'{self.time} is no longer an available time.')

        try:
            return AppointmentRequest(
                tutor_name=self.tutor_name,
                pet_name=self.pet_name,
                vet_work_id=self.vet_work_id,
                consultation_date=self.consultation_date,
                time=self.time,
                reason=self.reason or None,
            )
        except PydanticValidationError as exc:
            raise ValidationError(str(exc)) from exc

    async def submit(self) -> FormState | None:
        """Send the request; returns SUCCEEDED, or None if the form was closed meanwhile."""
        self._ensure_editable()
        request = self.build_request()

        generation = self._generation
        self.state = FormState.SUBMITTING
        self.active_picker = None

        try:
            result = await asyncio.to_thread(self.client.submit, request)
        except Exception as exc:
            if generation != self._generation:
                logger.info('Ignoring failed booking for closed form (location %s)', self.vet_work_id)
                return None
            self._fail()
            logger.exception('Booking submission failed for location %s', self.vet_work_id)
            raise SubmissionError('Could not complete the booking.') from exc

        if generation != self._generation:
            logger.info('Ignoring late booking response for closed form (location %s)', self.vet_work_id)
            return None

        if not result.success:
            self._fail()
            logger.info('Booking rejected for location %s: %s', self.vet_work_id, result.error)
            raise SubmissionError(result.error or 'Could not complete the booking.')

        logger.info(
            'Booked location %s on %s at %s',
            self.vet_work_id,
            request.consultation_date.isoformat(),
            request.time,
        )
        self.last_outcome = FormState.SUCCEEDED
        self.reset()
        if self.on_success is not None:
            self.on_success()
        return FormState.SUCCEEDED

    def _fail(self) -> None:
        self.last_outcome = FormState.FAILED
        self.state = FormState.TIME_SELECTED
