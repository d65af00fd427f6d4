#!/usr/bin/env python3
"""
Walk through a complete booking with the Bus Booking client.

Searches routes, picks seats, books, pays and shows the bus location. When the
backend is unreachable every step is answered from demo data.
"""

import argparse
import json
import logging
import sys
import time

from config import get_config
from dependencies import get_container
from logging_config import configure_logging

logger = logging.getLogger(__name__)


def run_demo(args) -> int:
    container = get_container()
    auth = container.get_auth_service()
    service = container.get_transport_service()

    user = auth.restore_session() or auth.login(args.phone, args.password)
    print(f"Signed in as {user.get('first_name', '')} {user.get('last_name', '')} ({user.get('phone_number')})")

    routes = service.search_routes(args.source, args.destination, args.date)
    if not routes:
        print(f"No routes from city {args.source} to city {args.destination} on {args.date}")
        return 1

    route = routes[0]
    print(f"{len(routes)} route(s) found; taking {route['bus_name']} at {route['departure_time']}")

    available = service.get_available_seats(route['id'])
    if len(available) < args.seats:
        print(f"Only {len(available)} seat(s) left on route {route['id']}")
        return 1
    seats = [seat['seat_number'] for seat in available[:args.seats]]
    price = float(route['price'])

    booking = service.create_booking({
        'route_id': route['id'],
        'from': route['source_name'],
        'to': route['destination_name'],
        'date': route['date'],
        'seats': seats,
        'passengers': [
            {'name': args.passenger, 'phone': args.phone, 'seat_number': seat}
            for seat in seats
        ],
        'totalPrice': price * len(seats),
        'bus_name': route['bus_name'],
        'operator_name': route['operator_name'],
        'departure_time': route['departure_time'],
        'arrival_time': route['arrival_time'],
    })
    print(f"Booking {booking['id']} created for seats {', '.join(seats)}")

    payment = service.create_payment({
        'booking': booking['id'],
        'amount': booking.get('totalPrice', price * len(seats)),
        'payment_method': args.payment_method,
    })
    verification = service.verify_payment({'transaction_id': payment.get('transaction_id')})
    print(f"Payment {payment.get('id')} {payment.get('status')}; verified={verification.get('verified')}")

    location = service.get_bus_location(booking['id'])
    if args.track:
        tracker = container.get_bus_tracker(start=location)
        tracker.start()
        try:
            for _ in range(args.track):
                time.sleep(tracker.interval)
                print(json.dumps(tracker.snapshot()))
        finally:
            tracker.stop()
    elif location:
        print(json.dumps(location, indent=2))
    else:
        print(f"No live location for {booking['id']} yet")

    notice = service.consume_fallback_notice()
    if notice:
        print(notice)
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Bus Booking client walkthrough')
    parser.add_argument('--phone', default='+251911234567', help='Login phone number')
    parser.add_argument('--password', default='demo', help='Login password')
    parser.add_argument('--passenger', default='Demo User', help='Passenger name')
    parser.add_argument('--source', type=int, default=1, help='Source city id')
    parser.add_argument('--destination', type=int, default=2, help='Destination city id')
    parser.add_argument('--date', default='2024-01-15', help='Travel date (YYYY-MM-DD)')
    parser.add_argument('--seats', type=int, default=1, help='Number of seats to book')
    parser.add_argument('--payment-method', default='mobile_money',
                        choices=['mobile_money', 'bank', 'card'], help='Payment method')
    parser.add_argument('--track', type=int, default=0, help='Print N simulated location updates')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    args = parser.parse_args()

    configure_logging(get_config())
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        sys.exit(run_demo(args))
    except Exception as e:
        logger.error(f"Demo failed: {str(e)}", exc_info=True)
        sys.exit(1)
