"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

from flybook.flights.notifications import NotificationQueue  # noqa: E402


class FakeTimer:
    def __init__(self, when, seq, callback, args):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.args = args
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled


class FakeScheduler:
    """Deterministic stand-in for an event loop's call_later."""

    def __init__(self):
        self.now = 0.0
        self._timers = []
        self._seq = 0

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        self._seq += 1
        timer = FakeTimer(self.now + delay, self._seq, callback, args)
        self._timers.append(timer)
        return timer

    def advance(self, seconds):
        """Move the clock forward, firing due timers in order."""
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled() and t.when <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(timer)
            self.now = max(self.now, timer.when)
            timer.callback(*timer.args)
        self.now = target

    def pending(self):
        return [t for t in self._timers if not t.cancelled()]


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifications(scheduler):
    return NotificationQueue(dwell=4.7, grace=0.3, scheduler=scheduler)


def make_raw_flight(
    flight_iata="AA100",
    airline_name="American Airlines",
    dep_iata="JFK",
    arr_iata="LAX",
    flight_date="2024-01-01",
    **overrides,
):
    """Raw flight record in the service's wire shape."""
    raw = {
        "aircraft": {"iata": "B738", "icao": "B738", "registration": "N123AA"},
        "airline": {"iata": "AA", "icao": "AAL", "name": airline_name},
        "departure": {
            "airport": "John F Kennedy International",
            "iata": dep_iata,
            "icao": "KJFK",
            "scheduled": "2024-01-01T10:00:00+00:00",
            "terminal": "8",
            "gate": "B12",
        },
        "arrival": {
            "airport": "Los Angeles International",
            "iata": arr_iata,
            "icao": "KLAX",
            "scheduled": "2024-01-01T12:30:00+00:00",
            "terminal": "4",
        },
        "flight": {"iata": flight_iata, "icao": "AAL100", "number": "100"},
        "flight_date": flight_date,
        "flight_status": "scheduled",
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def raw_flight():
    return make_raw_flight()
