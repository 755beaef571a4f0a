"""Booking workflow for a selected flight."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

from flybook.flights.errors import FlightBookingError, ValidationError
from flybook.flights.models import Booking, BookingRequest, FlightRecord, PassengerFields, RequestState
from flybook.flights.notifications import NotificationKind, NotificationQueue
from flybook.flights.sanitizer import Ok, parse_flight_record

logger = logging.getLogger(__name__)

BOOKING_FAILED_MESSAGE = "Failed to create booking"
INCOMPLETE_FLIGHT_MESSAGE = "Flight data is incomplete. Please select a different flight."


@dataclass
class BookingOutcome:
    state: RequestState
    booking: Optional[Booking] = None
    request: Optional[BookingRequest] = None
    message: Optional[str] = None
    notification_id: Optional[str] = None


def validate_selection(selected: Any) -> FlightRecord:
    """Return the selection as a complete FlightRecord or raise ValidationError.

    Checked independently of the search sanitizer, since a selection can be
    held across a new search.
    """
    result = parse_flight_record(selected)
    if not isinstance(result, Ok):
        raise ValidationError(INCOMPLETE_FLIGHT_MESSAGE)
    return result.value


class BookingOrchestrator:
    """Holds the current flight selection and passenger form, and submits bookings."""

    def __init__(self, service, notifications: NotificationQueue):
        self._service = service
        self._notifications = notifications
        self.selected_flight: Optional[Any] = None
        self.form = PassengerFields()
        self.state = RequestState.IDLE
        self.busy = False
        self.error: Optional[str] = None
        self.last_booking: Optional[Booking] = None

    def select(self, flight: Any) -> None:
        self.selected_flight = flight

    def clear_selection(self) -> None:
        self.selected_flight = None

    async def book(
        self,
        selected_flight: Optional[Any] = None,
        passenger: Optional[PassengerFields] = None,
    ) -> BookingOutcome:
        """Submit a booking; defaults to the held selection and form.

        On success the form and selection are cleared. On failure both are
        kept so the user can resubmit.
        """
        flight = self.selected_flight if selected_flight is None else selected_flight
        fields = self.form if passenger is None else passenger

        try:
            record = validate_selection(flight)
        except ValidationError as e:
            self.state = RequestState.ERROR
            self.error = e.message
            nid = self._notifications.enqueue("Booking Failed", e.message, NotificationKind.ERROR)
            return BookingOutcome(self.state, message=e.message, notification_id=nid)

        request = BookingRequest.from_flight(record, fields)
        self.busy = True
        self.state = RequestState.LOADING
        self.error = None
        try:
            booking = await asyncio.to_thread(self._service.create_booking, request)
        except FlightBookingError as e:
            logger.warning("Booking for flight %s failed: %s", request.flight_iata, e)
            return self._fail(request, e.message or BOOKING_FAILED_MESSAGE)
        except Exception:
            logger.exception("Booking for flight %s raised unexpectedly", request.flight_iata)
            return self._fail(request, BOOKING_FAILED_MESSAGE)
        finally:
            self.busy = False

        logger.info("Booked flight %s: booking %s", request.flight_iata, booking.id)
        self.last_booking = booking
        self.state = RequestState.SUCCESS
        self.form.clear()
        if passenger is not None:
            passenger.clear()
        self.selected_flight = None

        message = f"Your booking has been confirmed. Booking ID: {booking.id}"
        nid = self._notifications.enqueue("Booking Confirmed", message, NotificationKind.SUCCESS)
        return BookingOutcome(self.state, booking, request, message, nid)

    def _fail(self, request: BookingRequest, message: str) -> BookingOutcome:
        self.state = RequestState.ERROR
        self.error = message
        nid = self._notifications.enqueue("Booking Failed", message, NotificationKind.ERROR)
        return BookingOutcome(self.state, request=request, message=message, notification_id=nid)
