"""HTTP client for the flight/booking service."""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from flybook.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from flybook.flights.errors import ServiceError, ShapeError, TransportError
from flybook.flights.models import Booking, BookingRequest
from flybook.flights.sources.base import unwrap_envelope

logger = logging.getLogger(__name__)


class HttpFlightService:
    """Flight service reached over HTTP with JSON envelopes."""

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        """Send a request and return the decoded JSON body.

        Raises TransportError for network failures and unreadable bodies,
        ServiceError for non-2xx statuses.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s", method, url)
        try:
            if method == "POST":
                resp = requests.post(url, json=payload, timeout=self.timeout)
            else:
                resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Could not reach flight service: {e}") from e
        logger.debug("%s %s -> %s", method, url, resp.status_code)

        if not resp.ok:
            raise ServiceError(
                self._error_message(resp) or f"HTTP error! status: {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError("Malformed response from flight service") from e

    def _error_message(self, resp) -> Optional[str]:
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return None

    def _parse_bookings(self, items: Any) -> List[Booking]:
        if not isinstance(items, list):
            raise TransportError("Malformed response from flight service: bookings is not a list")
        try:
            return [Booking.from_dict(item) for item in items]
        except ShapeError as e:
            raise TransportError(f"Malformed booking in response: {e}") from e

    def search_flights(self, from_city: str, to_city: str) -> List[Any]:
        """POST /flights/search. Returns raw records; callers sanitize."""
        body = self._request("POST", "/flights/search", {"fromCity": from_city, "toCity": to_city})
        flights = unwrap_envelope(body, "flights", "Failed to search flights", default=[])
        if not isinstance(flights, list):
            raise TransportError("Malformed response from flight service: flights is not a list")
        return flights

    def create_booking(self, request: BookingRequest) -> Booking:
        """POST /bookings."""
        body = self._request("POST", "/bookings", request.to_payload())
        data = unwrap_envelope(body, "booking", "Failed to create booking")
        try:
            return Booking.from_dict(data)
        except ShapeError as e:
            raise TransportError(f"Malformed booking in response: {e}") from e

    def get_booking(self, booking_id: str) -> Booking:
        """GET /bookings/{id}."""
        body = self._request("GET", f"/bookings/{quote(str(booking_id), safe='')}")
        data = unwrap_envelope(body, "booking", "Failed to get booking")
        try:
            return Booking.from_dict(data)
        except ShapeError as e:
            raise TransportError(f"Malformed booking in response: {e}") from e

    def list_bookings(self) -> List[Booking]:
        """GET /bookings."""
        body = self._request("GET", "/bookings")
        return self._parse_bookings(unwrap_envelope(body, "bookings", "Failed to get bookings"))

    def bookings_by_email(self, email: str) -> List[Booking]:
        """GET /bookings/email/{email}."""
        body = self._request("GET", f"/bookings/email/{quote(email, safe='')}")
        return self._parse_bookings(unwrap_envelope(body, "bookings", "Failed to get bookings"))

    def supported_cities(self) -> List[str]:
        """GET /cities."""
        body = self._request("GET", "/cities")
        cities = unwrap_envelope(body, "cities", "Failed to get cities")
        if not isinstance(cities, list):
            raise TransportError("Malformed response from flight service: cities is not a list")
        return [str(c) for c in cities]
