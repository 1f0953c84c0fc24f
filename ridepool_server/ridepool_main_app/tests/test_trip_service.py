"""Tests for trip service"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from ..models import TripBooking
from ..services import (
    BookingService, TripService, ValidationError, NotFoundError, NotOwnerError, InvalidTransitionError,
    TripNotBookableError,
)
from ..utils.constants import BookingStatus, TripStatus
from .factories import make_profile, make_trip


class CreateTripTest(TestCase):
    def setUp(self):
        self.driver = make_profile('driver')
        self.service = TripService()
        self.start = timezone.now() + timedelta(days=2)

    def create(self, **overrides):
        fields = {
            'driver_id': self.driver.id,
            'from_destination': ' Paris ',
            'to_destination': 'Lyon',
            'start_time': self.start,
            'reach_time': self.start + timedelta(hours=5),
            'total_seats': 3,
            'price_per_seat': '19.90',
        }
        fields.update(overrides)
        return self.service.create_trip(**fields)

    def test_create_trip(self):
        result = self.create(car_model='Zoe', car_number_plate='AB-123-CD')

        self.assertTrue(result.success)
        trip = result.value
        self.assertEqual(trip.from_destination, 'Paris')
        self.assertEqual(trip.available_seats, 3)
        self.assertEqual(trip.price_per_seat, Decimal('19.90'))
        self.assertEqual(trip.status, TripStatus.ACTIVE)
        self.assertEqual(trip.driver_id, self.driver.id)

    def test_stops_are_ordered_by_time(self):
        stops = [
            {'stop_location': 'Dijon', 'stop_time': self.start + timedelta(hours=3)},
            {'stop_location': 'Auxerre', 'stop_time': self.start + timedelta(hours=2)},
        ]

        trip = self.create(stops=stops).value

        self.assertEqual(
            [(s.stop_order, s.stop_location) for s in trip.stops.all()],
            [(1, 'Auxerre'), (2, 'Dijon')],
        )

    def test_invalid_trips(self):
        cases = {
            'blank destination': {'to_destination': '  '},
            'arrival before departure': {'reach_time': self.start - timedelta(hours=1)},
            'no seats': {'total_seats': 0},
            'negative price': {'price_per_seat': '-1'},
            'stop outside schedule': {
                'stops': [{'stop_location': 'Nice', 'stop_time': self.start + timedelta(days=1)}],
            },
        }
        for label, overrides in cases.items():
            with self.subTest(label):
                self.assertIsInstance(self.create(**overrides).error, ValidationError)

    def test_unknown_driver(self):
        self.assertIsInstance(self.create(driver_id=999999).error, NotFoundError)


class TripLifecycleTest(TestCase):
    def setUp(self):
        self.driver = make_profile('driver')
        self.passenger = make_profile('passenger')
        self.trip = make_trip(self.driver, total_seats=3)
        self.service = TripService()
        self.bookings = BookingService()

    def book(self, passenger):
        return self.bookings.book_trip(
            self.trip.id, passenger.id, 'Gare de Lyon', self.trip.start_time, '+33600000000',
        ).value

    def test_complete_trip_completes_bookings(self):
        booking = self.book(self.passenger)

        result = self.service.complete_trip(self.trip.id, self.driver.id)

        self.assertTrue(result.success)
        self.assertEqual(result.value.status, TripStatus.COMPLETED)
        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingStatus.COMPLETED)

    def test_cancel_trip_restores_capacity(self):
        self.book(self.passenger)
        self.book(make_profile('second'))

        result = self.service.cancel_trip(self.trip.id, self.driver.id)

        self.assertTrue(result.success)
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.status, TripStatus.CANCELLED)
        self.assertEqual(self.trip.available_seats, 3)
        self.assertFalse(TripBooking.objects.filter(status=BookingStatus.CONFIRMED).exists())
        self.assertEqual(TripBooking.objects.filter(status=BookingStatus.CANCELLED).count(), 2)

    def test_cancelled_trip_not_bookable(self):
        self.service.cancel_trip(self.trip.id, self.driver.id)

        result = self.bookings.book_trip(
            self.trip.id, self.passenger.id, 'Gare de Lyon', self.trip.start_time, '+33600000000',
        )

        self.assertIsInstance(result.error, TripNotBookableError)

    def test_only_driver_can_finish(self):
        result = self.service.complete_trip(self.trip.id, self.passenger.id)
        self.assertIsInstance(result.error, NotOwnerError)

    def test_finished_trip_is_terminal(self):
        self.service.complete_trip(self.trip.id, self.driver.id)

        result = self.service.cancel_trip(self.trip.id, self.driver.id)

        self.assertIsInstance(result.error, InvalidTransitionError)

    def test_unknown_trip(self):
        self.assertIsInstance(self.service.cancel_trip(999999, self.driver.id).error, NotFoundError)


class SearchTripsTest(TestCase):
    def setUp(self):
        self.driver = make_profile('driver')
        now = timezone.now()
        self.later = make_trip(self.driver, from_destination='Paris Nord', to_destination='Lille',
                               start_time=now + timedelta(days=3))
        self.sooner = make_trip(self.driver, from_destination='paris', to_destination='Lille Europe',
                                start_time=now + timedelta(days=1))
        make_trip(self.driver, from_destination='Paris', to_destination='Lille', available_seats=0)
        make_trip(self.driver, from_destination='Paris', to_destination='Lille', status=TripStatus.CANCELLED)
        make_trip(self.driver, from_destination='Marseille', to_destination='Lille')

    def test_partial_case_insensitive_match(self):
        trips = list(TripService().search_trips('PARIS', 'lille'))
        self.assertEqual(trips, [self.sooner, self.later])

    def test_no_filters(self):
        self.assertEqual(TripService().search_trips().count(), 3)
