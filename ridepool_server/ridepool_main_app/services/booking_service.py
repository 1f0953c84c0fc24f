"""Booking service - business logic for booking operations"""

import logging

from ..utils.constants import BookingStatus, BOOKING_TRANSITIONS, BusinessRules, can_transition
from ..utils.retry import retry_with_backoff
from .availability_ledger import AvailabilityLedger, DateRange
from .errors import (
    ServiceError, ValidationError, NotFoundError, TripFullError, InsufficientCapacityError,
    NotOwnerError, AlreadyCancelledError, InvalidTransitionError, StoreError,
)
from .pricing_service import quote
from .repositories import (
    TripRepository, TripBookingRepository, VehicleListingRepository, VehicleBookingRepository,
    UserProfileRepository,
)
from .results import ServiceResult
from .store import default_store

logger = logging.getLogger(__name__)


def _check_transition(booking, target):
    if booking.status == BookingStatus.CANCELLED and target == BookingStatus.CANCELLED:
        raise AlreadyCancelledError()
    if not can_transition(BOOKING_TRANSITIONS, booking.status, target):
        raise InvalidTransitionError(
            f'Cannot move booking from "{booking.status}" to "{target}"',
            status=booking.status,
        )


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


class BookingService:
    """Service for booking operations"""

    def __init__(self, store=None, ledger=None, trips=None, trip_bookings=None, listings=None,
                 vehicle_bookings=None, profiles=None, sleep=None):
        self.store = store or default_store
        self.trips = trips or TripRepository(self.store)
        self.trip_bookings = trip_bookings or TripBookingRepository(self.store)
        self.listings = listings or VehicleListingRepository(self.store)
        self.vehicle_bookings = vehicle_bookings or VehicleBookingRepository(self.store)
        self.profiles = profiles or UserProfileRepository(self.store)
        self.ledger = ledger or AvailabilityLedger(
            trips=self.trips, listings=self.listings, vehicle_bookings=self.vehicle_bookings, store=self.store,
        )
        self._sleep = sleep

    def book_trip(self, trip_id, passenger_id, pickup_location, pickup_time, phone_number):
        """
        Book one seat on a carpool trip.

        Args:
            trip_id: Trip ID
            passenger_id: UserProfile ID of the authenticated passenger
            pickup_location: Where the driver picks the passenger up
            pickup_time: Pickup datetime
            phone_number: Passenger contact number

        Returns:
            ServiceResult with the confirmed TripBooking, or ValidationError,
            NotFoundError, TripFullError, TripNotBookableError

        Raises:
            StoreError: If the booking could not be written; the seat has
                been handed back to the trip
        """
        required = {
            'trip_id': trip_id,
            'passenger_id': passenger_id,
            'pickup_location': pickup_location,
            'pickup_time': pickup_time,
            'phone_number': phone_number,
        }
        missing = [name for name, value in required.items() if _is_blank(value)]
        if missing:
            return ServiceResult.fail(ValidationError(
                f'Please fill in all fields: {", ".join(missing)}', fields=missing,
            ))

        passenger = self.profiles.get(passenger_id)
        if passenger is None:
            return ServiceResult.fail(NotFoundError('Profile not found'))
        trip = self.trips.get(trip_id)
        if trip is None:
            return ServiceResult.fail(NotFoundError(f'Trip {trip_id} not found'))
        if trip.driver_id == passenger.id:
            return ServiceResult.fail(ValidationError('Drivers cannot book their own trip'))

        reservation = self.ledger.reserve(trip_id)
        if not reservation.success:
            error = reservation.error
            if isinstance(error, InsufficientCapacityError):
                error = TripFullError(**error.details)
            logger.warning(f'[BOOKING] Trip {trip_id} rejected for passenger {passenger_id}: {error.code}')
            return ServiceResult.fail(error)
        token = reservation.value

        try:
            with self.store.atomic():
                booking = self.trip_bookings.create(
                    trip_id=trip_id,
                    passenger_id=passenger_id,
                    pickup_location=str(pickup_location).strip(),
                    pickup_time=pickup_time,
                    phone_number=str(phone_number).strip(),
                    status=BookingStatus.CONFIRMED,
                )
        except Exception as exc:
            logger.error(f'[BOOKING] Persisting booking on trip {trip_id} failed: {exc}')
            self._compensate(
                lambda: self.ledger.release(token.resource_id, token.seats),
                f'release of {token.seats} seat(s) on trip {token.resource_id}',
            )
            if isinstance(exc, StoreError):
                raise
            if isinstance(exc, ServiceError):
                return ServiceResult.fail(exc)
            raise StoreError('Booking could not be saved') from exc

        logger.info(f'[BOOKING] Booking {booking.id} confirmed on trip {trip_id} for passenger {passenger_id}')
        return ServiceResult.ok(booking)

    def book_vehicle(self, listing_id, renter_id, from_date, to_date, from_time, to_time):
        """
        Rent a vehicle listing for a date/time range.

        Returns:
            ServiceResult with the confirmed VehicleBooking, or ValidationError,
            DurationExceededError, NotFoundError, OverlapError

        Raises:
            StoreError: If the booking could not be confirmed; the hold has
                been voided
        """
        required = {
            'listing_id': listing_id,
            'renter_id': renter_id,
            'from_date': from_date,
            'to_date': to_date,
            'from_time': from_time,
            'to_time': to_time,
        }
        missing = [name for name, value in required.items() if _is_blank(value)]
        if missing:
            return ServiceResult.fail(ValidationError(
                f'Please fill in all fields: {", ".join(missing)}', fields=missing,
            ))
        date_range = DateRange(from_date, to_date, from_time, to_time)
        try:
            date_range.validate()
        except ValidationError as exc:
            return ServiceResult.fail(exc)

        renter = self.profiles.get(renter_id)
        if renter is None:
            return ServiceResult.fail(NotFoundError('Profile not found'))
        listing = self.listings.get(listing_id)
        if listing is None:
            return ServiceResult.fail(NotFoundError(f'Vehicle listing {listing_id} not found'))
        if listing.owner_id == renter.id:
            return ServiceResult.fail(ValidationError('Owners cannot rent their own vehicle'))

        try:
            total_price = quote(listing, from_date, to_date, from_time, to_time)
        except ValidationError as exc:
            return ServiceResult.fail(exc)

        reservation = self.ledger.reserve_vehicle(
            listing_id, date_range, renter_id=renter.id, renter_name=renter.display_name, total_price=total_price,
        )
        if not reservation.success:
            logger.warning(f'[BOOKING] Listing {listing_id} rejected for renter {renter_id}: {reservation.error.code}')
            return ServiceResult.fail(reservation.error)
        token = reservation.value

        try:
            with self.store.atomic():
                booking = self.vehicle_bookings.get_for_update(token.booking_id)
                _check_transition(booking, BookingStatus.CONFIRMED)
                self.vehicle_bookings.set_status(booking, BookingStatus.CONFIRMED)
        except Exception as exc:
            logger.error(f'[BOOKING] Confirming hold {token.booking_id} on listing {listing_id} failed: {exc}')
            self._compensate(
                lambda: self.ledger.void_vehicle_hold(token),
                f'void of hold {token.booking_id} on listing {listing_id}',
            )
            if isinstance(exc, StoreError):
                raise
            if isinstance(exc, ServiceError):
                return ServiceResult.fail(exc)
            raise StoreError('Booking could not be saved') from exc

        logger.info(f'[BOOKING] Rental {booking.id} confirmed on listing {listing_id} for renter {renter_id}')
        return ServiceResult.ok(booking)

    def cancel_trip_booking(self, booking_id, requester_id):
        """
        Cancel a trip booking and give its seat back atomically.

        Returns:
            ServiceResult with the cancelled booking, or NotFoundError,
            NotOwnerError, AlreadyCancelledError, InvalidTransitionError
        """
        try:
            with self.store.atomic():
                # Trip row before booking row, the order TripService takes them in
                unlocked = self.trip_bookings.get(booking_id)
                if unlocked is None:
                    raise NotFoundError(f'Booking {booking_id} not found')
                self.trips.get_for_update(unlocked.trip_id)
                booking = self.trip_bookings.get_for_update(booking_id)
                if booking is None:
                    raise NotFoundError(f'Booking {booking_id} not found')
                if booking.passenger_id != requester_id:
                    raise NotOwnerError('Only the passenger can cancel this booking')
                _check_transition(booking, BookingStatus.CANCELLED)

                self.trip_bookings.set_status(booking, BookingStatus.CANCELLED)
                self.ledger.release(booking.trip_id)
        except StoreError:
            raise
        except ServiceError as exc:
            return ServiceResult.fail(exc)

        logger.info(f'[BOOKING] Booking {booking_id} cancelled by passenger {requester_id}')
        return ServiceResult.ok(booking)

    def cancel_vehicle_booking(self, booking_id, requester_id):
        """
        Cancel a vehicle booking and recompute the listing's availability.

        Returns:
            ServiceResult with the cancelled booking, or NotFoundError,
            NotOwnerError, AlreadyCancelledError, InvalidTransitionError
        """
        try:
            with self.store.atomic():
                booking = self.vehicle_bookings.get_for_update(booking_id)
                if booking is None:
                    raise NotFoundError(f'Booking {booking_id} not found')
                if booking.renter_id != requester_id:
                    raise NotOwnerError('Only the renter can cancel this booking')
                _check_transition(booking, BookingStatus.CANCELLED)

                self.vehicle_bookings.set_status(booking, BookingStatus.CANCELLED)
                self.ledger.release_vehicle(booking.listing_id, booking.id)
        except StoreError:
            raise
        except ServiceError as exc:
            return ServiceResult.fail(exc)

        logger.info(f'[BOOKING] Rental {booking_id} cancelled by renter {requester_id}')
        return ServiceResult.ok(booking)

    def complete_vehicle_booking(self, booking_id, requester_id):
        """Listing owner marks a confirmed rental as returned"""
        try:
            with self.store.atomic():
                booking = self.vehicle_bookings.get_for_update(booking_id)
                if booking is None:
                    raise NotFoundError(f'Booking {booking_id} not found')
                listing = self.listings.get(booking.listing_id)
                if listing.owner_id != requester_id:
                    raise NotOwnerError('Only the vehicle owner can complete this rental')
                _check_transition(booking, BookingStatus.COMPLETED)

                self.vehicle_bookings.set_status(booking, BookingStatus.COMPLETED)
                self.ledger.release_vehicle(booking.listing_id, booking.id)
        except StoreError:
            raise
        except ServiceError as exc:
            return ServiceResult.fail(exc)

        logger.info(f'[BOOKING] Rental {booking_id} completed by owner {requester_id}')
        return ServiceResult.ok(booking)

    def bookings_for_passenger(self, passenger_id):
        return self.trip_bookings.for_passenger(passenger_id)

    def vehicle_bookings_for_renter(self, renter_id):
        return self.vehicle_bookings.for_renter(renter_id)

    def _compensate(self, action, label):
        """Retry a compensating action; log for manual reconciliation if it never lands"""
        kwargs = {'sleep': self._sleep} if self._sleep else {}
        try:
            retry_with_backoff(
                action,
                attempts=BusinessRules.COMPENSATION_MAX_ATTEMPTS,
                base_delay=BusinessRules.COMPENSATION_BASE_DELAY_SECONDS,
                retry_on=(StoreError,),
                label=label,
                **kwargs,
            )
        except StoreError as exc:
            logger.critical(f'[RECONCILE] Compensation failed, manual reconciliation needed: {label}: {exc}')
        else:
            logger.info(f'[BOOKING] Compensated: {label}')
