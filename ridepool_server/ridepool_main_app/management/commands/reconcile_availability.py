"""Management command to repair capacity and rating drift"""
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from ridepool_main_app.models import UserProfile
from ridepool_main_app.services import AvailabilityLedger, RatingService, ReservationToken
from ridepool_main_app.services.repositories import (
    TripRepository, TripBookingRepository, VehicleListingRepository, VehicleBookingRepository,
)
from ridepool_main_app.utils.constants import BusinessRules


class Command(BaseCommand):
    help = 'Recompute trip seats and listing availability from bookings, void stale holds'

    def add_arguments(self, parser):
        parser.add_argument('--dry-run', action='store_true', help='Report drift without writing')
        parser.add_argument('--ratings', action='store_true', help='Also rebuild profile ratings')
        parser.add_argument(
            '--hold-minutes', type=int, default=BusinessRules.PENDING_HOLD_EXPIRY_MINUTES,
            help=f'Void pending vehicle holds older than X minutes (default: {BusinessRules.PENDING_HOLD_EXPIRY_MINUTES})',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        ledger = AvailabilityLedger()
        trips = TripRepository()
        trip_bookings = TripBookingRepository()
        listings = VehicleListingRepository()
        vehicle_bookings = VehicleBookingRepository()

        if dry_run:
            self.stdout.write(self.style.WARNING('Dry run: nothing will be written'))

        trips_fixed = 0
        for trip_id in list(trips.active().values_list('pk', flat=True)):
            outcome = ledger.reconcile_trip(trip_id, trip_bookings.count_seated, dry_run=dry_run)
            if outcome and outcome[0] != outcome[1]:
                trips_fixed += 1
                self.stdout.write(f'Trip {trip_id}: available_seats {outcome[0]} -> {outcome[1]}')

        cutoff = timezone.now() - timedelta(minutes=options['hold_minutes'])
        holds_voided = 0
        for hold in list(vehicle_bookings.stale_holds(cutoff)):
            self.stdout.write(f'Stale hold {hold.id} on listing {hold.listing_id} from {hold.created_at:%Y-%m-%d %H:%M}')
            if not dry_run:
                ledger.void_vehicle_hold(ReservationToken(
                    kind=ReservationToken.VEHICLE, resource_id=hold.listing_id, booking_id=hold.id,
                ))
            holds_voided += 1

        listings_fixed = 0
        overlaps_found = 0
        for listing_id in listings.all_ids():
            outcome = ledger.reconcile_listing(listing_id, dry_run=dry_run)
            if outcome and outcome[0] != outcome[1]:
                listings_fixed += 1
                self.stdout.write(f'Listing {listing_id}: is_available {outcome[0]} -> {outcome[1]}')

            for booking, later in ledger.find_overlaps(listing_id):
                overlaps_found += 1
                self.stdout.write(self.style.ERROR(
                    f'Listing {listing_id}: bookings {booking.id} ({booking.from_date} -> {booking.to_date}) '
                    f'and {later.id} ({later.from_date} -> {later.to_date}) overlap'
                ))

        summary = (
            f'Trips fixed: {trips_fixed}, holds voided: {holds_voided}, listings fixed: {listings_fixed}, '
            f'overlapping bookings: {overlaps_found}'
        )

        if options['ratings']:
            rating_service = RatingService()
            profiles_fixed = sum(
                1 for profile_id in list(UserProfile.objects.values_list('pk', flat=True))
                if rating_service.recompute_profile_rating(profile_id, dry_run=dry_run)
            )
            summary += f', profiles fixed: {profiles_fixed}'

        self.stdout.write(self.style.SUCCESS(summary))
