"""Unit tests for BookingOrchestrator."""

import asyncio
from unittest.mock import MagicMock

import pytest

from conftest import make_raw_flight
from flybook.flights.booking import BookingOrchestrator, validate_selection
from flybook.flights.errors import ServiceError, ValidationError
from flybook.flights.models import (
    Booking,
    BookingStatus,
    PassengerFields,
    RequestState,
)
from flybook.flights.notifications import NotificationKind
from flybook.flights.sanitizer import sanitize


def _booking(booking_id="BK-1"):
    return Booking(
        id=booking_id,
        flight_iata="AA100",
        passenger_name="Ada Lovelace",
        passenger_email="ada@example.com",
        phone_number="555-0100",
        airline_name="American Airlines",
        departure_airport="JFK",
        arrival_airport="LAX",
        flight_date="2024-01-01",
        booking_status=BookingStatus.CONFIRMED,
        created_at="2024-01-01T08:00:00",
    )


def _passenger():
    return PassengerFields(
        passenger_name="Ada Lovelace",
        passenger_email="ada@example.com",
        phone_number="555-0100",
    )


@pytest.fixture
def flight():
    return sanitize([make_raw_flight()])[0]


class TestValidateSelection:
    """Tests for validate_selection."""

    def test_none_rejected(self) -> None:
        with pytest.raises(ValidationError, match="incomplete"):
            validate_selection(None)

    def test_incomplete_raw_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_selection(make_raw_flight(departure=None))

    def test_raw_record_accepted(self) -> None:
        assert validate_selection(make_raw_flight()).key == "AA100"


class TestBookingSuccess:
    """Successful submission."""

    def test_request_copies_flight_fields(self, notifications, flight) -> None:
        service = MagicMock()
        service.create_booking.return_value = _booking()
        booker = BookingOrchestrator(service, notifications)

        outcome = asyncio.run(booker.book(flight, _passenger()))

        request = service.create_booking.call_args[0][0]
        assert request.flight_iata == flight.flight.iata
        assert request.flight_date == flight.flight_date
        assert request.airline_name == "American Airlines"
        assert request.departure_airport == "JFK"
        assert request.arrival_airport == "LAX"
        assert request.departure_terminal == "8"
        assert request.arrival_terminal == "4"
        assert request.aircraft_iata == "B738"
        assert request.passenger_name == "Ada Lovelace"
        assert outcome.request == request

    def test_success_resets_form_and_selection(self, notifications, flight) -> None:
        service = MagicMock()
        service.create_booking.return_value = _booking("BK-7")
        booker = BookingOrchestrator(service, notifications)
        booker.select(flight)
        booker.form = _passenger()

        outcome = asyncio.run(booker.book())

        assert outcome.state is RequestState.SUCCESS
        assert outcome.booking.id == "BK-7"
        assert booker.last_booking.id == "BK-7"
        assert booker.selected_flight is None
        assert booker.form == PassengerFields()
        assert booker.busy is False
        n = notifications.active()[0]
        assert n.kind is NotificationKind.SUCCESS
        assert "BK-7" in n.description

    def test_busy_during_submission(self, notifications, flight) -> None:
        seen = []
        booker = None

        def create_booking(request):
            seen.append(booker.busy)
            return _booking()

        service = MagicMock()
        service.create_booking.side_effect = create_booking
        booker = BookingOrchestrator(service, notifications)

        asyncio.run(booker.book(flight, _passenger()))

        assert seen == [True]
        assert booker.busy is False


class TestBookingFailure:
    """Rejections and service failures."""

    def test_incomplete_selection_no_network(self, notifications) -> None:
        service = MagicMock()
        booker = BookingOrchestrator(service, notifications)
        booker.select(make_raw_flight(aircraft=None))

        outcome = asyncio.run(booker.book())

        service.create_booking.assert_not_called()
        assert outcome.state is RequestState.ERROR
        active = notifications.active()
        assert len(active) == 1
        assert active[0].kind is NotificationKind.ERROR
        assert "incomplete" in active[0].description

    def test_no_selection_no_network(self, notifications) -> None:
        service = MagicMock()
        booker = BookingOrchestrator(service, notifications)

        asyncio.run(booker.book())

        service.create_booking.assert_not_called()
        assert notifications.active()[0].kind is NotificationKind.ERROR

    def test_failure_keeps_form_and_selection(self, notifications, flight) -> None:
        service = MagicMock()
        service.create_booking.side_effect = ServiceError("Flight is full")
        booker = BookingOrchestrator(service, notifications)
        booker.select(flight)
        booker.form = _passenger()

        outcome = asyncio.run(booker.book())

        assert outcome.state is RequestState.ERROR
        assert booker.selected_flight is flight
        assert booker.form == _passenger()
        assert booker.error == "Flight is full"
        assert booker.busy is False
        n = notifications.active()[0]
        assert n.title == "Booking Failed"
        assert n.description == "Flight is full"

    def test_failure_without_message_uses_fallback(self, notifications, flight) -> None:
        service = MagicMock()
        service.create_booking.side_effect = ServiceError()
        booker = BookingOrchestrator(service, notifications)

        asyncio.run(booker.book(flight, _passenger()))

        assert notifications.active()[0].description == "Failed to create booking"

    def test_unexpected_exception_is_reported(self, notifications, flight) -> None:
        service = MagicMock()
        service.create_booking.side_effect = RuntimeError("boom")
        booker = BookingOrchestrator(service, notifications)
        booker.select(flight)
        booker.form = _passenger()

        outcome = asyncio.run(booker.book())

        assert outcome.state is RequestState.ERROR
        assert booker.busy is False
        assert booker.selected_flight is flight
        assert booker.form == _passenger()
        assert booker.error == "Failed to create booking"
        n = notifications.active()[0]
        assert n.kind is NotificationKind.ERROR
        assert n.title == "Booking Failed"
        assert n.description == "Failed to create booking"

    def test_retry_after_failure(self, notifications, flight) -> None:
        service = MagicMock()
        service.create_booking.side_effect = [ServiceError("Timeout upstream"), _booking()]
        booker = BookingOrchestrator(service, notifications)
        booker.select(flight)
        booker.form = _passenger()

        first = asyncio.run(booker.book())
        second = asyncio.run(booker.book())

        assert first.state is RequestState.ERROR
        assert second.state is RequestState.SUCCESS
        assert service.create_booking.call_count == 2
        assert booker.selected_flight is None
