"""Flight search workflow: validate, dispatch, sanitize, notify."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from flybook.flights.errors import FlightBookingError, ValidationError
from flybook.flights.models import FlightRecord, RequestState, SearchResult
from flybook.flights.notifications import NotificationKind, NotificationQueue
from flybook.flights.sanitizer import sanitize

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to search flights"
NO_FLIGHTS_MESSAGE = (
    "No flights available for the selected route. "
    "Only current-day domestic flights are supported."
)


@dataclass
class SearchOutcome:
    state: RequestState
    flights: List[FlightRecord] = field(default_factory=list)
    message: Optional[str] = None
    notification_id: Optional[str] = None
    stale: bool = False


def validate_cities(from_city: str, to_city: str) -> None:
    """Raise ValidationError unless both cities are set and differ (case-sensitive)."""
    if not from_city or not to_city:
        raise ValidationError("Please select both departure and destination cities")
    if from_city == to_city:
        raise ValidationError("Departure and destination cities cannot be the same")


class SearchOrchestrator:
    """Runs flight searches and holds the latest result set.

    Every call to ``search`` emits exactly one notification, except for a
    response that arrives after a newer search was dispatched: it is
    discarded without touching state or notifying.
    """

    def __init__(self, service, notifications: NotificationQueue):
        self._service = service
        self._notifications = notifications
        self._generation = 0
        self.result = SearchResult()
        self.state = RequestState.IDLE
        self.error: Optional[str] = None

    @property
    def flights(self) -> List[FlightRecord]:
        return self.result.flights

    @property
    def busy(self) -> bool:
        return self.state is RequestState.LOADING

    async def search(self, from_city: str, to_city: str) -> SearchOutcome:
        try:
            validate_cities(from_city, to_city)
        except ValidationError as e:
            nid = self._notifications.enqueue("Error", e.message, NotificationKind.ERROR)
            return SearchOutcome(self.state, self.flights, e.message, nid)

        self._generation += 1
        generation = self._generation
        self.state = RequestState.LOADING
        self.error = None

        try:
            raw = await asyncio.to_thread(
                self._service.search_flights, from_city.lower(), to_city.lower()
            )
        except FlightBookingError as e:
            logger.warning("Search %s -> %s failed: %s", from_city, to_city, e)
            return self._fail(generation, from_city, to_city, e.message or SEARCH_FAILED_MESSAGE)
        except Exception:
            logger.exception("Search %s -> %s raised unexpectedly", from_city, to_city)
            return self._fail(generation, from_city, to_city, SEARCH_FAILED_MESSAGE)

        if generation != self._generation:
            return self._discard_stale(generation)

        flights = sanitize(raw)
        self.result = SearchResult(flights=flights, from_city=from_city, to_city=to_city)
        self.state = RequestState.SUCCESS
        logger.info("Search %s -> %s: %d flight(s)", from_city, to_city, len(flights))

        if not flights:
            nid = self._notifications.enqueue(
                "No Flights Available", NO_FLIGHTS_MESSAGE, NotificationKind.INFO
            )
            return SearchOutcome(self.state, [], NO_FLIGHTS_MESSAGE, nid)

        message = f"Found {len(flights)} flights from {from_city} to {to_city}"
        nid = self._notifications.enqueue("Success", message, NotificationKind.SUCCESS)
        return SearchOutcome(self.state, list(flights), message, nid)

    def _fail(self, generation: int, from_city: str, to_city: str, message: str) -> SearchOutcome:
        if generation != self._generation:
            return self._discard_stale(generation)
        self.result = SearchResult(from_city=from_city, to_city=to_city)
        self.state = RequestState.ERROR
        self.error = message
        nid = self._notifications.enqueue("Search Failed", message, NotificationKind.ERROR)
        return SearchOutcome(self.state, [], message, nid)

    def _discard_stale(self, generation: int) -> SearchOutcome:
        logger.warning(
            "Discarding stale search response (generation %d, current %d)",
            generation,
            self._generation,
        )
        return SearchOutcome(self.state, self.flights, stale=True)
