"""Flight search and booking workflows."""

from flybook.flights.booking import BookingOrchestrator
from flybook.flights.formatting import format_clock_time, format_duration
from flybook.flights.lookups import BookingLookups
from flybook.flights.models import (
    Booking,
    BookingRequest,
    BookingStatus,
    FlightRecord,
    PassengerFields,
    RequestState,
    SearchResult,
)
from flybook.flights.notifications import Notification, NotificationKind, NotificationQueue
from flybook.flights.sanitizer import sanitize
from flybook.flights.search import SearchOrchestrator

__all__ = [
    "Booking",
    "BookingLookups",
    "BookingOrchestrator",
    "BookingRequest",
    "BookingStatus",
    "FlightRecord",
    "Notification",
    "NotificationKind",
    "NotificationQueue",
    "PassengerFields",
    "RequestState",
    "SearchOrchestrator",
    "SearchResult",
    "format_clock_time",
    "format_duration",
    "sanitize",
]
