"""Interface for the remote flight/booking service."""

from typing import Any, List, Protocol, runtime_checkable

from flybook.flights.errors import ServiceError, TransportError
from flybook.flights.models import Booking, BookingRequest


_REQUIRED = object()


def unwrap_envelope(
    envelope: Any, data_key: str, fallback_message: str, default: Any = _REQUIRED
) -> Any:
    """Return ``envelope[data_key]`` from a ``{success, message, <data>}`` response.

    ``success=false`` raises ServiceError with the service message (or
    ``fallback_message``). The data key is only read on success; a
    successful envelope without it (or with null) returns ``default``,
    or is a malformed body when no default is given.
    """
    if not isinstance(envelope, dict):
        raise TransportError("Malformed response from flight service")
    if not envelope.get("success"):
        raise ServiceError(envelope.get("message") or fallback_message)
    if envelope.get(data_key) is None:
        if default is not _REQUIRED:
            return default
        raise TransportError(f"Malformed response from flight service: missing {data_key!r}")
    return envelope[data_key]


@runtime_checkable
class FlightService(Protocol):
    """Protocol for the flight/booking service collaborator.

    Every method raises ServiceError or TransportError on failure.
    """

    def search_flights(self, from_city: str, to_city: str) -> List[Any]:
        """Raw (unsanitized) flight records for a route."""
        ...

    def create_booking(self, request: BookingRequest) -> Booking:
        ...

    def get_booking(self, booking_id: str) -> Booking:
        ...

    def list_bookings(self) -> List[Booking]:
        ...

    def bookings_by_email(self, email: str) -> List[Booking]:
        ...

    def supported_cities(self) -> List[str]:
        ...
