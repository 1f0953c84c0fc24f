"""Availability ledger - record of seat and vehicle capacity

Trip seats are reserved and released with single conditional UPDATE
statements. Vehicle reservations lock the listing row, check for overlapping
bookings and insert a pending hold inside the same transaction.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from django.utils import timezone

from ..utils.constants import TripStatus, BookingStatus
from .errors import (
    ValidationError, NotFoundError, InsufficientCapacityError, OverlapError, TripNotBookableError,
)
from .repositories import TripRepository, VehicleListingRepository, VehicleBookingRepository
from .results import ServiceResult
from .store import default_store

logger = logging.getLogger(__name__)


END_OF_DAY = time.max.replace(microsecond=0)


@dataclass(frozen=True)
class DateRange:
    from_date: date
    to_date: date
    from_time: Optional[time] = None
    to_time: Optional[time] = None

    @property
    def start(self):
        return datetime.combine(self.from_date, self.from_time or time.min)

    @property
    def end(self):
        """Open-ended days run to the last second of to_date"""
        return datetime.combine(self.to_date, self.to_time or END_OF_DAY)

    def validate(self):
        """Raise ValidationError unless the range ends after it starts"""
        if self.end <= self.start:
            raise ValidationError('Rental must end after it starts', field='to_date')
        return self

    def overlaps(self, other):
        """Inclusive comparison on dates"""
        return self.from_date <= other.to_date and other.from_date <= self.to_date


@dataclass(frozen=True)
class ReservationToken:
    kind: str
    resource_id: int
    seats: int = 1
    booking_id: Optional[int] = None
    token_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    issued_at: datetime = field(default_factory=timezone.now)

    TRIP = 'trip'
    VEHICLE = 'vehicle'


class AvailabilityLedger:
    """Only component allowed to change available_seats and is_available"""

    def __init__(self, trips=None, listings=None, vehicle_bookings=None, store=None):
        self.store = store or default_store
        self.trips = trips or TripRepository(self.store)
        self.listings = listings or VehicleListingRepository(self.store)
        self.vehicle_bookings = vehicle_bookings or VehicleBookingRepository(self.store)

    # Trips

    def reserve(self, trip_id, seats=1):
        """
        Take seats from a trip if enough remain.

        Returns:
            ServiceResult with a ReservationToken, or InsufficientCapacityError,
            TripNotBookableError, NotFoundError
        """
        if isinstance(seats, bool) or not isinstance(seats, int) or seats < 1:
            return ServiceResult.fail(ValidationError('Seat count must be a positive integer', field='seats'))

        with self.store.atomic():
            changed = self.trips.decrement_seats(trip_id, seats)
            if not changed:
                trip = self.trips.get(trip_id)

        if changed:
            token = ReservationToken(kind=ReservationToken.TRIP, resource_id=trip_id, seats=seats)
            logger.info(f'[LEDGER] Reserved {seats} seat(s) on trip {trip_id} (token {token.token_id})')
            return ServiceResult.ok(token)

        if trip is None:
            return ServiceResult.fail(NotFoundError(f'Trip {trip_id} not found'))
        if trip.status != TripStatus.ACTIVE:
            return ServiceResult.fail(TripNotBookableError(f'Trip is {trip.status}', status=trip.status))
        logger.warning(f'[LEDGER] Trip {trip_id} has {trip.available_seats} seat(s), {seats} requested')
        return ServiceResult.fail(InsufficientCapacityError(
            f'Only {trip.available_seats} seats available',
            available_seats=trip.available_seats,
        ))

    def release(self, trip_id, seats=1):
        """Give seats back to a trip, never above total_seats"""
        with self.store.atomic():
            changed = self.trips.increment_seats(trip_id, seats)
        if not changed:
            logger.warning(f'[LEDGER] Release on unknown trip {trip_id}')
        else:
            logger.info(f'[LEDGER] Released {seats} seat(s) on trip {trip_id}')

    # Vehicles

    def reserve_vehicle(self, listing_id, date_range, renter_id, renter_name='', total_price=0):
        """
        Hold a listing for a date range.

        The hold is a pending VehicleBooking row written in the same
        transaction as the overlap check, so a concurrent request for an
        overlapping range sees it.

        Returns:
            ServiceResult with a ReservationToken carrying the hold's booking_id,
            or OverlapError, NotFoundError
        """
        with self.store.atomic():
            listing = self.listings.get_for_update(listing_id)
            if listing is None:
                return ServiceResult.fail(NotFoundError(f'Vehicle listing {listing_id} not found'))

            clash = self.vehicle_bookings.overlapping(listing_id, date_range.from_date, date_range.to_date).first()
            if clash is not None:
                logger.warning(
                    f'[LEDGER] Listing {listing_id} already booked {clash.from_date} → {clash.to_date} '
                    f'(booking {clash.id})'
                )
                return ServiceResult.fail(OverlapError(
                    conflicting_from=str(clash.from_date),
                    conflicting_to=str(clash.to_date),
                ))

            hold = self.vehicle_bookings.create(
                listing_id=listing_id,
                renter_id=renter_id,
                renter_name=renter_name,
                from_date=date_range.from_date,
                to_date=date_range.to_date,
                from_time=date_range.from_time or time.min,
                to_time=date_range.to_time or END_OF_DAY,
                total_price=total_price,
                status=BookingStatus.PENDING,
            )
            self.listings.set_available(listing, False)

        token = ReservationToken(kind=ReservationToken.VEHICLE, resource_id=listing_id, booking_id=hold.id)
        logger.info(f'[LEDGER] Held listing {listing_id} {date_range.from_date} → {date_range.to_date} (booking {hold.id})')
        return ServiceResult.ok(token)

    def release_vehicle(self, listing_id, booking_id):
        """
        Recompute is_available after booking_id stopped holding the listing.

        Returns:
            The listing's new is_available flag
        """
        with self.store.atomic():
            listing = self.listings.get_for_update(listing_id)
            if listing is None:
                logger.warning(f'[LEDGER] Release on unknown listing {listing_id}')
                return False
            still_held = self.vehicle_bookings.has_active(listing_id, exclude_id=booking_id)
            self.listings.set_available(listing, not still_held)

        logger.info(f'[LEDGER] Listing {listing_id} released by booking {booking_id}, available={not still_held}')
        return not still_held

    def void_vehicle_hold(self, token):
        """Cancel a pending hold and free the listing; used for compensation"""
        with self.store.atomic():
            hold = self.vehicle_bookings.get_for_update(token.booking_id)
            if hold is not None and hold.status == BookingStatus.PENDING:
                self.vehicle_bookings.set_status(hold, BookingStatus.CANCELLED)
            self.release_vehicle(token.resource_id, token.booking_id)
        logger.info(f'[LEDGER] Voided hold {token.booking_id} on listing {token.resource_id}')

    # Reconciliation

    def reconcile_trip(self, trip_id, seated, dry_run=False):
        """
        Reset available_seats to total_seats minus the seated bookings.

        Args:
            trip_id: Trip ID
            seated: Callable returning the number of bookings holding a seat,
                evaluated while the trip row is locked
            dry_run: Report the drift without writing it

        Returns:
            (previous, expected) available seat counts, or None for an unknown trip
        """
        with self.store.atomic():
            trip = self.trips.get_for_update(trip_id)
            if trip is None:
                return None
            expected = max(0, trip.total_seats - seated(trip_id))
            if expected != trip.available_seats and not dry_run:
                self.trips.set_available_seats(trip_id, expected)

        if expected != trip.available_seats:
            logger.warning(f'[RECONCILE] Trip {trip_id} available_seats {trip.available_seats} -> {expected}')
        return trip.available_seats, expected

    def reconcile_listing(self, listing_id, dry_run=False):
        """Recompute is_available from the listing's pending and confirmed bookings"""
        with self.store.atomic():
            listing = self.listings.get_for_update(listing_id)
            if listing is None:
                return None
            previous = listing.is_available
            expected = not self.vehicle_bookings.has_active(listing_id)
            if expected != previous and not dry_run:
                self.listings.set_available(listing, expected)

        if expected != previous:
            logger.warning(f'[RECONCILE] Listing {listing_id} is_available {previous} -> {expected}')
        return previous, expected

    def find_overlaps(self, listing_id):
        """
        Pairs of active bookings on a listing whose date ranges meet.

        Any pair found here was written around the ledger and needs a
        manual decision.
        """
        bookings = list(self.vehicle_bookings.active_for_listing(listing_id))
        clashes = []
        for index, booking in enumerate(bookings):
            period = DateRange(booking.from_date, booking.to_date)
            for later in bookings[index + 1:]:
                if later.from_date > booking.to_date:
                    break
                if period.overlaps(DateRange(later.from_date, later.to_date)):
                    clashes.append((booking, later))

        for booking, later in clashes:
            logger.warning(f'[RECONCILE] Listing {listing_id} bookings {booking.id} and {later.id} overlap')
        return clashes
