"""Data models for flight search and booking."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from flybook.flights.errors import ShapeError


@dataclass(frozen=True)
class Aircraft:
    iata: str = ""
    icao: str = ""
    registration: str = ""


@dataclass(frozen=True)
class Airline:
    iata: str = ""
    icao: str = ""
    name: str = ""


@dataclass(frozen=True)
class Endpoint:
    """Departure or arrival side of a flight."""

    airport: str = ""
    iata: str = ""
    icao: str = ""
    scheduled: str = ""
    terminal: Optional[str] = None
    gate: Optional[str] = None


@dataclass(frozen=True)
class FlightNumber:
    iata: str = ""
    icao: str = ""
    number: str = ""


@dataclass(frozen=True)
class FlightRecord:
    """One scheduled flight offering, as returned by a search."""

    aircraft: Aircraft
    airline: Airline
    departure: Endpoint
    arrival: Endpoint
    flight: FlightNumber
    flight_date: str = ""
    flight_status: str = ""

    @property
    def key(self) -> str:
        """Display/selection key. Not unique across dates."""
        return self.flight.iata

    def is_complete(self) -> bool:
        """True when every required section is present."""
        return all(
            part is not None
            for part in (self.flight, self.airline, self.aircraft, self.departure, self.arrival)
        )

    def route(self) -> str:
        """Return route as DEPARTURE-ARRIVAL IATA codes."""
        return f"{self.departure.iata}-{self.arrival.iata}"


@dataclass
class PassengerFields:
    """User-entered passenger details for a booking."""

    passenger_name: str = ""
    passenger_email: str = ""
    phone_number: str = ""

    def clear(self) -> None:
        self.passenger_name = ""
        self.passenger_email = ""
        self.phone_number = ""

    def is_empty(self) -> bool:
        return not (self.passenger_name or self.passenger_email or self.phone_number)


@dataclass(frozen=True)
class BookingRequest:
    """Payload for creating a booking.

    Flight fields are copied from the selected FlightRecord at submission
    time; only the passenger fields come from user input.
    """

    passenger_name: str
    passenger_email: str
    phone_number: str
    flight_iata: str
    airline_name: str
    departure_airport: str
    arrival_airport: str
    flight_date: str
    aircraft_iata: str
    departure_terminal: Optional[str] = None
    arrival_terminal: Optional[str] = None

    @classmethod
    def from_flight(cls, flight: FlightRecord, passenger: PassengerFields) -> "BookingRequest":
        """Assemble a request from a complete flight and passenger input."""
        if not isinstance(flight, FlightRecord) or not flight.is_complete():
            raise ShapeError("flight", "flight data is incomplete")
        return cls(
            passenger_name=passenger.passenger_name,
            passenger_email=passenger.passenger_email,
            phone_number=passenger.phone_number,
            flight_iata=flight.flight.iata,
            airline_name=flight.airline.name,
            departure_airport=flight.departure.iata,
            arrival_airport=flight.arrival.iata,
            departure_terminal=flight.departure.terminal,
            arrival_terminal=flight.arrival.terminal,
            flight_date=flight.flight_date,
            aircraft_iata=flight.aircraft.iata,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the service's camelCase JSON body (None terminals omitted)."""
        payload = {
            "passengerName": self.passenger_name,
            "passengerEmail": self.passenger_email,
            "phoneNumber": self.phone_number,
            "flightIata": self.flight_iata,
            "airlineName": self.airline_name,
            "departureAirport": self.departure_airport,
            "arrivalAirport": self.arrival_airport,
            "departureTerminal": self.departure_terminal,
            "arrivalTerminal": self.arrival_terminal,
            "flightDate": self.flight_date,
            "aircraftIata": self.aircraft_iata,
        }
        return {k: v for k, v in payload.items() if v is not None}


class BookingStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    PENDING = "PENDING"


@dataclass(frozen=True)
class Booking:
    """A booking as stored by the service. Read-only on the client."""

    id: str
    flight_iata: str
    passenger_name: str
    passenger_email: str
    phone_number: str
    airline_name: str
    departure_airport: str
    arrival_airport: str
    flight_date: str
    booking_status: BookingStatus
    created_at: str = ""
    departure_terminal: Optional[str] = None
    arrival_terminal: Optional[str] = None
    aircraft_iata: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Booking":
        """Parse a booking object from a service response."""
        if not isinstance(data, dict):
            raise ShapeError("booking", "expected an object")
        if data.get("id") is None:
            raise ShapeError("booking.id", "missing")
        raw_status = str(data.get("bookingStatus") or "").upper()
        try:
            status = BookingStatus(raw_status)
        except ValueError:
            raise ShapeError("booking.bookingStatus", f"unknown status {raw_status!r}")

        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            id=str(data["id"]),
            flight_iata=text("flightIata"),
            passenger_name=text("passengerName"),
            passenger_email=text("passengerEmail"),
            phone_number=text("phoneNumber"),
            airline_name=text("airlineName"),
            departure_airport=text("departureAirport"),
            arrival_airport=text("arrivalAirport"),
            flight_date=text("flightDate"),
            booking_status=status,
            created_at=text("createdAt"),
            departure_terminal=data.get("departureTerminal"),
            arrival_terminal=data.get("arrivalTerminal"),
            aircraft_iata=data.get("aircraftIata"),
        )


class RequestState(str, Enum):
    """Lifecycle of one asynchronous workflow."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


FLIGHT_COLUMNS = [
    "flight",
    "airline",
    "departure",
    "arrival",
    "departure_time",
    "arrival_time",
    "duration",
    "terminal",
    "aircraft",
    "status",
]

BOOKING_COLUMNS = [
    "id",
    "flight_iata",
    "passenger_name",
    "passenger_email",
    "departure_airport",
    "arrival_airport",
    "flight_date",
    "booking_status",
    "created_at",
]


@dataclass
class SearchResult:
    """Sanitized flights of a search, plus the cities as entered."""

    flights: List[FlightRecord] = field(default_factory=list)
    from_city: str = ""
    to_city: str = ""

    def __len__(self) -> int:
        return len(self.flights)

    def to_dataframe(self):
        """Convert to pandas DataFrame with display-formatted times."""
        import pandas as pd

        from flybook.flights.formatting import format_clock_time, format_duration

        if not self.flights:
            return pd.DataFrame(columns=FLIGHT_COLUMNS)
        return pd.DataFrame(
            [
                {
                    "flight": f.flight.iata,
                    "airline": f.airline.name,
                    "departure": f.departure.airport,
                    "arrival": f.arrival.airport,
                    "departure_time": format_clock_time(f.departure.scheduled),
                    "arrival_time": format_clock_time(f.arrival.scheduled),
                    "duration": format_duration(f.departure.scheduled, f.arrival.scheduled),
                    "terminal": f.departure.terminal,
                    "aircraft": f.aircraft.iata,
                    "status": f.flight_status,
                }
                for f in self.flights
            ],
            columns=FLIGHT_COLUMNS,
        )


def bookings_to_dataframe(bookings: List[Booking]):
    """Convert bookings to a pandas DataFrame."""
    import pandas as pd

    if not bookings:
        return pd.DataFrame(columns=BOOKING_COLUMNS)
    rows = []
    for b in bookings:
        row = asdict(b)
        row["booking_status"] = b.booking_status.value
        rows.append({col: row[col] for col in BOOKING_COLUMNS})
    return pd.DataFrame(rows, columns=BOOKING_COLUMNS)
