"""Tests for booking service"""
from datetime import date, time, timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from ..models import TripBooking, VehicleBooking
from ..services import (
    AvailabilityLedger, BookingService, ValidationError, NotFoundError, TripFullError, TripNotBookableError,
    NotOwnerError, AlreadyCancelledError, InvalidTransitionError, OverlapError, DurationExceededError, StoreError,
)
from ..services.repositories import TripRepository, TripBookingRepository, VehicleBookingRepository
from ..utils.constants import BookingStatus, BusinessRules, RentalType, TripStatus
from .factories import make_profile, make_trip, make_listing


class FailingTripBookingRepository(TripBookingRepository):
    def __init__(self, error, store=None):
        super().__init__(store)
        self.error = error

    def create(self, **fields):
        raise self.error


class FailingConfirmVehicleBookingRepository(VehicleBookingRepository):
    def set_status(self, booking, status):
        if status == BookingStatus.CONFIRMED:
            raise StoreError('disk I/O error', retryable=True)
        return super().set_status(booking, status)


class UnreachableLedger(AvailabilityLedger):
    def release(self, trip_id, seats=1):
        raise StoreError('database is locked', retryable=True)


class LockRecordingTripRepository(TripRepository):
    def __init__(self, locks, store=None):
        super().__init__(store)
        self.locks = locks

    def get_for_update(self, pk):
        self.locks.append('trip')
        return super().get_for_update(pk)


class LockRecordingTripBookingRepository(TripBookingRepository):
    def __init__(self, locks, store=None):
        super().__init__(store)
        self.locks = locks

    def get_for_update(self, pk):
        self.locks.append('booking')
        return super().get_for_update(pk)


class TripBookingTest(TestCase):
    def setUp(self):
        self.driver = make_profile('driver')
        self.passenger = make_profile('passenger')
        self.trip = make_trip(self.driver, total_seats=2)
        self.service = BookingService()

    def book(self, passenger=None, **overrides):
        fields = {
            'trip_id': self.trip.id,
            'passenger_id': (passenger or self.passenger).id,
            'pickup_location': 'Gare de Lyon',
            'pickup_time': self.trip.start_time,
            'phone_number': '+33600000000',
        }
        fields.update(overrides)
        return self.service.book_trip(**fields)

    def test_book_trip_success(self):
        result = self.book()

        self.assertTrue(result.success)
        booking = result.value
        self.assertEqual(booking.status, BookingStatus.CONFIRMED)
        self.assertEqual(booking.passenger_id, self.passenger.id)
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 1)

    def test_blank_fields_rejected_before_reserving(self):
        result = self.book(pickup_location='  ', phone_number='')

        self.assertIsInstance(result.error, ValidationError)
        self.assertEqual(result.error.details['fields'], ['pickup_location', 'phone_number'])
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)

    def test_full_trip(self):
        self.book()
        self.book(passenger=make_profile('second'))

        result = self.book(passenger=make_profile('third'))

        self.assertIsInstance(result.error, TripFullError)
        self.assertEqual(result.error.code, 'full')
        self.assertEqual(TripBooking.objects.count(), 2)

    def test_driver_cannot_book_own_trip(self):
        result = self.book(passenger=self.driver)
        self.assertIsInstance(result.error, ValidationError)

    def test_unknown_trip(self):
        result = self.book(trip_id=999999)
        self.assertIsInstance(result.error, NotFoundError)

    def test_completed_trip_not_bookable(self):
        self.trip.status = TripStatus.COMPLETED
        self.trip.save()

        result = self.book()

        self.assertIsInstance(result.error, TripNotBookableError)

    def test_cancel_returns_the_seat(self):
        booking = self.book().value

        result = self.service.cancel_trip_booking(booking.id, self.passenger.id)

        self.assertTrue(result.success)
        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingStatus.CANCELLED)
        self.assertIsNotNone(booking.cancelled_at)
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)

    def test_cancel_twice(self):
        booking = self.book().value
        self.service.cancel_trip_booking(booking.id, self.passenger.id)

        result = self.service.cancel_trip_booking(booking.id, self.passenger.id)

        self.assertIsInstance(result.error, AlreadyCancelledError)
        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)

    def test_only_passenger_can_cancel(self):
        booking = self.book().value

        result = self.service.cancel_trip_booking(booking.id, self.driver.id)

        self.assertIsInstance(result.error, NotOwnerError)

    def test_cancel_unknown_booking(self):
        result = self.service.cancel_trip_booking(999999, self.passenger.id)
        self.assertIsInstance(result.error, NotFoundError)

    def test_cancel_locks_trip_before_booking(self):
        booking = self.book().value
        locks = []
        service = BookingService(
            trips=LockRecordingTripRepository(locks),
            trip_bookings=LockRecordingTripBookingRepository(locks),
        )

        result = service.cancel_trip_booking(booking.id, self.passenger.id)

        self.assertTrue(result.success)
        self.assertEqual(locks, ['trip', 'booking'])

    def test_capacity_matches_confirmed_bookings(self):
        others = [make_profile(f'rider{i}') for i in range(3)]
        bookings = []
        for step, passenger in enumerate(others + others):
            if step % 2 == 0:
                result = self.book(passenger=passenger)
                if result.success:
                    bookings.append(result.value)
            elif bookings:
                booking = bookings.pop(0)
                self.service.cancel_trip_booking(booking.id, booking.passenger_id)

            self.trip.refresh_from_db()
            confirmed = TripBooking.objects.filter(trip=self.trip, status=BookingStatus.CONFIRMED).count()
            self.assertGreaterEqual(self.trip.available_seats, 0)
            self.assertLessEqual(self.trip.available_seats, self.trip.total_seats)
            self.assertEqual(self.trip.total_seats - self.trip.available_seats, confirmed)


class CompensationTest(TestCase):
    def setUp(self):
        self.driver = make_profile('driver')
        self.passenger = make_profile('passenger')
        self.trip = make_trip(self.driver, total_seats=2)
        self.delays = []

    def book(self, service):
        return service.book_trip(self.trip.id, self.passenger.id, 'Gare de Lyon', self.trip.start_time, '+33600000000')

    def test_failed_insert_releases_the_seat(self):
        service = BookingService(trip_bookings=FailingTripBookingRepository(StoreError('disk full')))

        with self.assertRaises(StoreError):
            self.book(service)

        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)
        self.assertFalse(TripBooking.objects.exists())

    def test_unexpected_insert_error_surfaces_as_store_error(self):
        service = BookingService(trip_bookings=FailingTripBookingRepository(RuntimeError('boom')))

        with self.assertRaises(StoreError):
            self.book(service)

        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)

    def test_exhausted_compensation_is_logged_for_reconciliation(self):
        service = BookingService(
            trip_bookings=FailingTripBookingRepository(StoreError('disk full')),
            ledger=UnreachableLedger(),
            sleep=self.delays.append,
        )

        with self.assertLogs('ridepool_main_app.services.booking_service', level='CRITICAL') as logs:
            with self.assertRaises(StoreError):
                self.book(service)

        self.assertIn('[RECONCILE]', logs.output[0])
        self.assertEqual(len(self.delays), BusinessRules.COMPENSATION_MAX_ATTEMPTS - 1)
        self.assertEqual(self.delays[1], self.delays[0] * 2)

    def test_failed_confirmation_voids_the_hold(self):
        owner = make_profile('owner')
        listing = make_listing(owner, rental_type=RentalType.LONG_TERM, max_rental_period=30)
        service = BookingService(vehicle_bookings=FailingConfirmVehicleBookingRepository())
        start = timezone.localdate() + timedelta(days=3)

        with self.assertRaises(StoreError):
            service.book_vehicle(listing.id, self.passenger.id, start, start + timedelta(days=2), time(9), time(18))

        hold = VehicleBooking.objects.get(listing=listing)
        self.assertEqual(hold.status, BookingStatus.CANCELLED)
        listing.refresh_from_db()
        self.assertTrue(listing.is_available)


class VehicleBookingTest(TestCase):
    def setUp(self):
        self.owner = make_profile('owner')
        self.renter = make_profile('renter')
        self.listing = make_listing(self.owner, rental_type=RentalType.SHORT_TERM, rate='100.00', max_rental_period=24)
        self.day = date(2024, 6, 1)
        self.service = BookingService()

    def rent(self, renter=None, from_date=None, to_date=None, from_time=time(10, 0), to_time=time(13, 12)):
        return self.service.book_vehicle(
            self.listing.id, (renter or self.renter).id, from_date or self.day, to_date or self.day, from_time, to_time,
        )

    def test_book_vehicle_success(self):
        result = self.rent()

        self.assertTrue(result.success)
        booking = result.value
        self.assertEqual(booking.status, BookingStatus.CONFIRMED)
        self.assertEqual(booking.total_price, Decimal('400.00'))
        self.assertEqual(booking.renter_name, self.renter.display_name)
        self.listing.refresh_from_db()
        self.assertFalse(self.listing.is_available)

    def test_overlapping_rental_rejected(self):
        self.rent()

        result = self.rent(renter=make_profile('other'), from_time=time(15), to_time=time(16))

        self.assertIsInstance(result.error, OverlapError)
        self.assertEqual(VehicleBooking.objects.count(), 1)

    def test_owner_cannot_rent_own_vehicle(self):
        result = self.rent(renter=self.owner)
        self.assertIsInstance(result.error, ValidationError)

    def test_end_before_start(self):
        result = self.rent(from_time=time(13), to_time=time(10))
        self.assertIsInstance(result.error, ValidationError)
        self.assertFalse(VehicleBooking.objects.exists())

    def test_missing_fields(self):
        result = self.service.book_vehicle(self.listing.id, self.renter.id, self.day, None, time(10), time(12))
        self.assertIsInstance(result.error, ValidationError)
        self.assertEqual(result.error.details['fields'], ['to_date'])

    def test_duration_over_limit(self):
        result = self.rent(to_date=self.day + timedelta(days=2))

        self.assertIsInstance(result.error, DurationExceededError)
        self.listing.refresh_from_db()
        self.assertTrue(self.listing.is_available)

    def test_unknown_listing(self):
        result = self.service.book_vehicle(999999, self.renter.id, self.day, self.day, time(10), time(12))
        self.assertIsInstance(result.error, NotFoundError)

    def test_cancel_frees_the_listing(self):
        booking = self.rent().value

        result = self.service.cancel_vehicle_booking(booking.id, self.renter.id)

        self.assertTrue(result.success)
        self.listing.refresh_from_db()
        self.assertTrue(self.listing.is_available)
        self.assertTrue(self.rent(renter=make_profile('next')).success)

    def test_cancel_twice(self):
        booking = self.rent().value
        self.service.cancel_vehicle_booking(booking.id, self.renter.id)

        result = self.service.cancel_vehicle_booking(booking.id, self.renter.id)

        self.assertIsInstance(result.error, AlreadyCancelledError)

    def test_only_renter_can_cancel(self):
        booking = self.rent().value

        result = self.service.cancel_vehicle_booking(booking.id, self.owner.id)

        self.assertIsInstance(result.error, NotOwnerError)

    def test_owner_completes_rental(self):
        booking = self.rent().value

        result = self.service.complete_vehicle_booking(booking.id, self.owner.id)

        self.assertTrue(result.success)
        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingStatus.COMPLETED)
        self.listing.refresh_from_db()
        self.assertTrue(self.listing.is_available)

    def test_renter_cannot_complete(self):
        booking = self.rent().value

        result = self.service.complete_vehicle_booking(booking.id, self.renter.id)

        self.assertIsInstance(result.error, NotOwnerError)

    def test_cancelled_rental_cannot_complete(self):
        booking = self.rent().value
        self.service.cancel_vehicle_booking(booking.id, self.renter.id)

        result = self.service.complete_vehicle_booking(booking.id, self.owner.id)

        self.assertIsInstance(result.error, InvalidTransitionError)

    def test_completed_booking_still_blocks_its_dates(self):
        booking = self.rent().value
        self.service.complete_vehicle_booking(booking.id, self.owner.id)

        result = self.rent(renter=make_profile('late'))

        self.assertIsInstance(result.error, OverlapError)
