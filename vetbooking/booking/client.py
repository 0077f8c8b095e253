"""Clients that hand a validated appointment request to the booking endpoint."""

import logging
from typing import Protocol

import requests

from vetbooking.booking.schemas import AppointmentRequest, SubmissionResult
from vetbooking.core import config

logger = logging.getLogger(__name__)

SCHEDULING_PATH = '/dashboard/scheduling'
UNAUTHORIZED_ERROR = 'UNAUTHORIZED_TOKEN'


class BookingSubmissionClient(Protocol):
    def submit(self, request: AppointmentRequest) -> SubmissionResult:
        ...


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ('message', 'error', 'detail'):
            if body.get(key):
                return str(body[key])

    return f'HTTP {response.status_code}'


class HttpBookingClient:
    """Posts appointment requests as JSON to ``{base_url}/dashboard/scheduling``."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'HttpBookingClient':
        return cls(
            base_url=config.BOOKING_API_URL,
            token=config.BOOKING_API_TOKEN or None,
            timeout=config.BOOKING_API_TIMEOUT_SECONDS,
        )

    def _headers(self) -> dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def submit(self, request: AppointmentRequest) -> SubmissionResult:
        url = f'{self.base_url}{SCHEDULING_PATH}'

        try:
            response = self.session.post(
                url,
                json=request.to_payload(),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning('Booking request to %s failed: %s', url, exc)
            return SubmissionResult(success=False, error=str(exc) or 'Booking endpoint unreachable.')

        if response.status_code == 401:
            return SubmissionResult(success=False, error=UNAUTHORIZED_ERROR)

        if not response.ok:
            message = _error_message(response)
            logger.warning('Booking request to %s rejected with %s: %s', url, response.status_code, message)
            return SubmissionResult(success=False, error=message)

        appointment_id = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get('id'), int):
            appointment_id = body['id']

        return SubmissionResult(success=True, appointment_id=appointment_id)
