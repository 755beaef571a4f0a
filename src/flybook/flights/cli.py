"""CLI for flight search and booking."""

import argparse
import asyncio
import logging
import sys

from flybook.config import Settings
from flybook.flights.booking import BookingOrchestrator
from flybook.flights.lookups import BookingLookups
from flybook.flights.models import PassengerFields, RequestState, bookings_to_dataframe
from flybook.flights.notifications import NotificationQueue
from flybook.flights.search import SearchOrchestrator
from flybook.flights.sources.http_service import HttpFlightService


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Search and book flights")
    parser.add_argument("--api-url", help="Flight service base URL (overrides FLYBOOK_API_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("cities", help="List supported cities")

    search = sub.add_parser("search", help="Search flights between two cities")
    search.add_argument("from_city", help="Departure city")
    search.add_argument("to_city", help="Destination city")
    search.add_argument("--output", "-o", help="Write results to CSV file")

    book = sub.add_parser("book", help="Search, then book one of the results")
    book.add_argument("from_city", help="Departure city")
    book.add_argument("to_city", help="Destination city")
    book.add_argument(
        "--index", "-i", type=int, default=1, help="1-based position of the flight in the results"
    )
    book.add_argument("--name", required=True, help="Passenger name")
    book.add_argument("--email", required=True, help="Passenger email")
    book.add_argument("--phone", default="", help="Passenger phone number")

    bookings = sub.add_parser("bookings", help="Show existing bookings")
    group = bookings.add_mutually_exclusive_group()
    group.add_argument("--email", "-e", help="Bookings for this email address")
    group.add_argument("--recent", "-n", type=int, default=3, help="Most recent N bookings")

    return parser.parse_args(argv)


def _print_new_notifications(shown):
    """Listener printing each notification once, when it first appears."""

    def listener(notifications):
        for n in notifications:
            if n.id in shown:
                continue
            shown.add(n.id)
            line = f"[{n.kind.value}] {n.title}"
            if n.description:
                line += f": {n.description}"
            print(line, file=sys.stderr)

    return listener


async def _run(args, settings: Settings) -> int:
    service = HttpFlightService(base_url=args.api_url or settings.api_url, timeout=settings.timeout)
    notifications = NotificationQueue(
        dwell=settings.notification_dwell, grace=settings.notification_grace
    )
    notifications.add_listener(_print_new_notifications(set()))

    if args.command == "cities":
        lookups = BookingLookups(service, notifications)
        for city in await lookups.load_supported_cities():
            print(city)
        return 0 if lookups.state is RequestState.SUCCESS else 1

    if args.command == "bookings":
        lookups = BookingLookups(service, notifications)
        if args.email:
            found = await lookups.bookings_by_email(args.email)
        else:
            found = await lookups.recent_bookings(limit=args.recent)
        df = bookings_to_dataframe(found)
        if not df.empty:
            print(df.to_string(index=False))
        return 0 if lookups.state is RequestState.SUCCESS else 1

    searcher = SearchOrchestrator(service, notifications)
    outcome = await searcher.search(args.from_city, args.to_city)
    if outcome.state is not RequestState.SUCCESS:
        return 1

    df = searcher.result.to_dataframe()
    if not df.empty:
        df.index = range(1, len(df) + 1)
        print(df.to_string())

    if args.command == "search":
        if args.output and not df.empty:
            df.to_csv(args.output, index=False)
            print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)
        return 0

    if not 1 <= args.index <= len(searcher.flights):
        print(f"Error: no flight at position {args.index}", file=sys.stderr)
        return 1

    booker = BookingOrchestrator(service, notifications)
    booker.select(searcher.flights[args.index - 1])
    booker.form = PassengerFields(
        passenger_name=args.name, passenger_email=args.email, phone_number=args.phone
    )
    outcome = await booker.book()
    return 0 if outcome.state is RequestState.SUCCESS else 1


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
    sys.exit(asyncio.run(_run(args, settings)))


if __name__ == "__main__":
    main()
