"""Read-side workflows: supported cities and existing bookings."""

import asyncio
import logging
from typing import List

from flybook.flights.errors import FlightBookingError
from flybook.flights.models import Booking, RequestState
from flybook.flights.notifications import NotificationKind, NotificationQueue

logger = logging.getLogger(__name__)

FALLBACK_CITIES = [
    "New York",
    "London",
    "Paris",
    "Tokyo",
    "Sydney",
    "Los Angeles",
    "Dubai",
    "Singapore",
]

FETCH_FAILED_MESSAGE = "Failed to fetch bookings. Please try again."


class BookingLookups:
    """Cities and booking queries, each failure reported as a notification."""

    def __init__(self, service, notifications: NotificationQueue):
        self._service = service
        self._notifications = notifications
        self.state = RequestState.IDLE

    def _fail(self, description: str) -> None:
        self.state = RequestState.ERROR
        self._notifications.enqueue("Error", description, NotificationKind.ERROR)

    async def load_supported_cities(self) -> List[str]:
        """Cities the service can search, or the built-in list if it is unreachable."""
        self.state = RequestState.LOADING
        try:
            cities = await asyncio.to_thread(self._service.supported_cities)
        except FlightBookingError as e:
            logger.warning("Failed to load cities: %s", e)
            self._fail("Failed to load supported cities")
            return list(FALLBACK_CITIES)
        except Exception:
            logger.exception("Loading cities raised unexpectedly")
            self._fail("Failed to load supported cities")
            return list(FALLBACK_CITIES)
        self.state = RequestState.SUCCESS
        return cities

    async def recent_bookings(self, limit: int = 3) -> List[Booking]:
        """The ``limit`` most recently created bookings, newest first."""
        self.state = RequestState.LOADING
        try:
            bookings = await asyncio.to_thread(self._service.list_bookings)
        except FlightBookingError as e:
            logger.warning("Failed to load bookings: %s", e)
            self._fail("Failed to load recent bookings")
            return []
        except Exception:
            logger.exception("Loading bookings raised unexpectedly")
            self._fail("Failed to load recent bookings")
            return []
        self.state = RequestState.SUCCESS
        # ISO-8601 createdAt values sort chronologically as strings
        ordered = sorted(bookings, key=lambda b: b.created_at, reverse=True)
        return ordered[:limit]

    async def bookings_by_email(self, email: str) -> List[Booking]:
        email = (email or "").strip()
        if not email:
            self._notifications.enqueue(
                "Error", "Please enter an email address", NotificationKind.ERROR
            )
            return []

        self.state = RequestState.LOADING
        try:
            bookings = await asyncio.to_thread(self._service.bookings_by_email, email)
        except FlightBookingError as e:
            logger.warning("Failed to fetch bookings for %s: %s", email, e)
            self._fail(FETCH_FAILED_MESSAGE)
            return []
        except Exception:
            logger.exception("Fetching bookings for %s raised unexpectedly", email)
            self._fail(FETCH_FAILED_MESSAGE)
            return []

        self.state = RequestState.SUCCESS
        if not bookings:
            self._notifications.enqueue(
                "No bookings found",
                "No bookings were found for this email address.",
                NotificationKind.INFO,
            )
        return bookings
