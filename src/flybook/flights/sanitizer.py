"""Typed parsing of raw flight records and the result sanitizer.

Service responses are not guaranteed to be complete. Every raw record goes
through ``parse_flight_record``, which returns ``Ok(FlightRecord)`` or
``Err(ShapeError)``; ``sanitize`` keeps only the ``Ok`` values, in order.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Mapping, Optional, TypeVar, Union

from flybook.flights.errors import ShapeError
from flybook.flights.models import Aircraft, Airline, Endpoint, FlightNumber, FlightRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUIRED_SECTIONS = ("flight", "airline", "aircraft", "departure", "arrival")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ShapeError


ParseResult = Union[Ok[FlightRecord], Err]


def _get_str(d: Mapping, *keys: str) -> str:
    for k in keys:
        v = d.get(k)
        if v is not None and str(v).strip():
            return str(v).strip()
    return ""


def _get_optional_str(d: Mapping, *keys: str) -> Optional[str]:
    return _get_str(d, *keys) or None


def _section(raw: Mapping, name: str) -> Mapping:
    value = raw.get(name)
    if value is None:
        raise ShapeError(name, "missing")
    if not isinstance(value, Mapping):
        raise ShapeError(name, f"expected an object, got {type(value).__name__}")
    return value


def _endpoint(d: Mapping) -> Endpoint:
    return Endpoint(
        airport=_get_str(d, "airport"),
        iata=_get_str(d, "iata"),
        icao=_get_str(d, "icao"),
        scheduled=_get_str(d, "scheduled"),
        terminal=_get_optional_str(d, "terminal"),
        gate=_get_optional_str(d, "gate"),
    )


def parse_flight_record(raw: Any) -> ParseResult:
    """Parse one raw record. Never raises."""
    if isinstance(raw, FlightRecord):
        if raw.is_complete():
            return Ok(raw)
        return Err(ShapeError("record", "incomplete flight record"))
    if not isinstance(raw, Mapping):
        return Err(ShapeError("record", f"expected an object, got {type(raw).__name__}"))

    try:
        sections = {name: _section(raw, name) for name in REQUIRED_SECTIONS}
    except ShapeError as e:
        return Err(e)

    aircraft = sections["aircraft"]
    airline = sections["airline"]
    flight = sections["flight"]
    return Ok(
        FlightRecord(
            aircraft=Aircraft(
                iata=_get_str(aircraft, "iata"),
                icao=_get_str(aircraft, "icao"),
                registration=_get_str(aircraft, "registration"),
            ),
            airline=Airline(
                iata=_get_str(airline, "iata"),
                icao=_get_str(airline, "icao"),
                name=_get_str(airline, "name"),
            ),
            departure=_endpoint(sections["departure"]),
            arrival=_endpoint(sections["arrival"]),
            flight=FlightNumber(
                iata=_get_str(flight, "iata"),
                icao=_get_str(flight, "icao"),
                number=_get_str(flight, "number"),
            ),
            flight_date=_get_str(raw, "flight_date", "flightDate"),
            flight_status=_get_str(raw, "flight_status", "flightStatus"),
        )
    )


def is_valid_record(raw: Any) -> bool:
    """True when ``raw`` satisfies the FlightRecord validity invariant."""
    return isinstance(parse_flight_record(raw), Ok)


def sanitize(records: Optional[Iterable[Any]]) -> List[FlightRecord]:
    """Return only well-formed flight records, preserving order.

    Pure and idempotent: parsed records pass through unchanged, so
    ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    if records is None:
        return []

    kept = []
    dropped = []
    for raw in records:
        result = parse_flight_record(raw)
        if isinstance(result, Ok):
            kept.append(result.value)
        else:
            dropped.append(result.error)

    if dropped:
        logger.warning(
            "Dropped %d malformed flight record(s); first: %s", len(dropped), dropped[0]
        )
    return kept
