"""Tests for the reconcile_availability management command"""
from datetime import date, time, timedelta
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone

from ..models import Trip, TripBooking, UserProfile, UserRating, VehicleBooking, VehicleListing
from ..utils.constants import BookingStatus
from .factories import make_profile, make_trip, make_listing


class ReconcileAvailabilityTest(TestCase):
    def setUp(self):
        self.driver = make_profile('driver')
        self.passenger = make_profile('passenger')
        self.trip = make_trip(self.driver, total_seats=3, available_seats=2)
        TripBooking.objects.create(trip=self.trip, passenger=self.passenger, pickup_location='A',
                                   pickup_time=self.trip.start_time, phone_number='1',
                                   status=BookingStatus.CONFIRMED)

    def reconcile(self, *args):
        out = StringIO()
        call_command('reconcile_availability', *args, stdout=out)
        return out.getvalue()

    def test_restores_stranded_seats(self):
        Trip.objects.filter(pk=self.trip.id).update(available_seats=0)

        output = self.reconcile()

        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)
        self.assertIn('Trips fixed: 1', output)

    def test_consistent_trip_untouched(self):
        output = self.reconcile()

        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 2)
        self.assertIn('Trips fixed: 0', output)

    def test_dry_run_writes_nothing(self):
        Trip.objects.filter(pk=self.trip.id).update(available_seats=0)

        output = self.reconcile('--dry-run')

        self.trip.refresh_from_db()
        self.assertEqual(self.trip.available_seats, 0)
        self.assertIn('Trips fixed: 1', output)

    def test_voids_stale_holds(self):
        listing = make_listing(self.driver)
        hold = VehicleBooking.objects.create(
            listing=listing, renter=self.passenger, renter_name='passenger',
            from_date=date(2030, 1, 1), to_date=date(2030, 1, 1), from_time=time(9), to_time=time(12),
            status=BookingStatus.PENDING,
        )
        VehicleBooking.objects.filter(pk=hold.id).update(created_at=timezone.now() - timedelta(hours=2))
        VehicleListing.objects.filter(pk=listing.id).update(is_available=False)

        output = self.reconcile('--hold-minutes', '30')

        hold.refresh_from_db()
        self.assertEqual(hold.status, BookingStatus.CANCELLED)
        listing.refresh_from_db()
        self.assertTrue(listing.is_available)
        self.assertIn('holds voided: 1', output)

    def test_fresh_hold_kept(self):
        listing = make_listing(self.driver)
        hold = VehicleBooking.objects.create(
            listing=listing, renter=self.passenger, renter_name='passenger',
            from_date=date(2030, 1, 1), to_date=date(2030, 1, 1), from_time=time(9), to_time=time(12),
            status=BookingStatus.PENDING,
        )
        VehicleListing.objects.filter(pk=listing.id).update(is_available=False)

        self.reconcile()

        hold.refresh_from_db()
        self.assertEqual(hold.status, BookingStatus.PENDING)
        listing.refresh_from_db()
        self.assertFalse(listing.is_available)

    def test_rebuilds_ratings(self):
        UserRating.objects.create(rater=self.passenger, ratee=self.driver, rating=3)
        UserProfile.objects.filter(pk=self.driver.id).update(rating=5.0, total_ratings=4)

        output = self.reconcile('--ratings')

        self.driver.refresh_from_db()
        self.assertEqual(self.driver.rating, 3.0)
        self.assertEqual(self.driver.total_ratings, 1)
        self.assertIn('profiles fixed: 1', output)

    def test_reports_overlapping_bookings(self):
        listing = make_listing(self.driver)
        for from_day, to_day in ((1, 3), (2, 4)):
            VehicleBooking.objects.create(
                listing=listing, renter=self.passenger, renter_name='passenger',
                from_date=date(2030, 1, from_day), to_date=date(2030, 1, to_day),
                from_time=time(9), to_time=time(12), status=BookingStatus.CONFIRMED,
            )

        output = self.reconcile()

        self.assertIn('overlapping bookings: 1', output)
        self.assertEqual(VehicleBooking.objects.filter(status=BookingStatus.CONFIRMED).count(), 2)
