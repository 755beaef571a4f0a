"""Flight/booking service backends."""

from flybook.flights.sources.base import FlightService, unwrap_envelope
from flybook.flights.sources.http_service import HttpFlightService

__all__ = ["FlightService", "HttpFlightService", "unwrap_envelope"]
