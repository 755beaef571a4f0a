"""Error types for flight search and booking."""

from typing import Optional


class FlightBookingError(Exception):
    """Base class for all errors raised by the flights package."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(FlightBookingError):
    """Local, user-correctable input problem detected before any network call."""


class ServiceError(FlightBookingError):
    """The service reported failure (success=false or a non-2xx status)."""

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(FlightBookingError):
    """Network failure, timeout, or a response body that could not be read."""


class ShapeError(FlightBookingError):
    """A raw record does not have the shape of a domain object."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason
