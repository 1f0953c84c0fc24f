"""Trip service - business logic for trip operations"""

import logging
from decimal import Decimal, InvalidOperation

from ..utils.constants import TripStatus, BookingStatus, TRIP_TRANSITIONS, can_transition
from .errors import ServiceError, ValidationError, NotFoundError, NotOwnerError, InvalidTransitionError, StoreError
from .repositories import TripRepository, TripBookingRepository, UserProfileRepository
from .results import ServiceResult
from .store import default_store

logger = logging.getLogger(__name__)


class TripService:
    """Service for trip operations"""

    def __init__(self, store=None, trips=None, trip_bookings=None, profiles=None):
        self.store = store or default_store
        self.trips = trips or TripRepository(self.store)
        self.trip_bookings = trip_bookings or TripBookingRepository(self.store)
        self.profiles = profiles or UserProfileRepository(self.store)

    def create_trip(self, driver_id, from_destination, to_destination, start_time, reach_time,
                    total_seats, price_per_seat, car_model='', car_color='', car_number_plate='', stops=()):
        """Publish a carpool trip with every seat available"""
        try:
            fields = self._validate_trip(
                from_destination, to_destination, start_time, reach_time, total_seats, price_per_seat, stops,
            )
        except ValidationError as exc:
            return ServiceResult.fail(exc)

        if not self.profiles.exists(driver_id):
            return ServiceResult.fail(NotFoundError('Profile not found. Please complete your profile first.'))

        with self.store.atomic():
            trip = self.trips.create(
                driver_id=driver_id,
                available_seats=fields['total_seats'],
                car_model=car_model or '',
                car_color=car_color or '',
                car_number_plate=car_number_plate or '',
                status=TripStatus.ACTIVE,
                **fields,
            )

        logger.info(f'[TRIP] Trip {trip.id} created by driver {driver_id} with {trip.total_seats} seats')
        return ServiceResult.ok(trip)

    def complete_trip(self, trip_id, requester_id):
        """Mark trip as completed; its confirmed bookings complete with it"""
        return self._finish(trip_id, requester_id, TripStatus.COMPLETED)

    def cancel_trip(self, trip_id, requester_id):
        """Cancel trip; its confirmed bookings are cancelled and every seat returns"""
        return self._finish(trip_id, requester_id, TripStatus.CANCELLED)

    def search_trips(self, from_query=None, to_query=None):
        return self.trips.search(from_query, to_query)

    def _finish(self, trip_id, requester_id, target):
        try:
            with self.store.atomic():
                trip = self.trips.get_for_update(trip_id)
                if trip is None:
                    raise NotFoundError(f'Trip {trip_id} not found')
                if trip.driver_id != requester_id:
                    raise NotOwnerError('Only the driver can change this trip')
                if not can_transition(TRIP_TRANSITIONS, trip.status, target):
                    raise InvalidTransitionError(
                        f'Cannot move trip from "{trip.status}" to "{target}"', status=trip.status,
                    )

                booking_status = BookingStatus.COMPLETED if target == TripStatus.COMPLETED else BookingStatus.CANCELLED
                affected = self.trip_bookings.transition_for_trip(trip.id, BookingStatus.CONFIRMED, booking_status)
                if target == TripStatus.CANCELLED:
                    self.trips.set_available_seats(trip.id, trip.total_seats)
                    trip.available_seats = trip.total_seats
                self.trips.set_status(trip, target)
        except StoreError:
            raise
        except ServiceError as exc:
            return ServiceResult.fail(exc)

        logger.info(f'[TRIP] Trip {trip_id} {target} by driver {requester_id}; {affected} booking(s) {booking_status}')
        return ServiceResult.ok(trip)

    def _validate_trip(self, from_destination, to_destination, start_time, reach_time,
                       total_seats, price_per_seat, stops):
        missing = [
            name for name, value in (
                ('from_destination', from_destination),
                ('to_destination', to_destination),
                ('start_time', start_time),
                ('reach_time', reach_time),
            ) if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(f'Please fill in all fields: {", ".join(missing)}', fields=missing)
        if start_time >= reach_time:
            raise ValidationError('Arrival must be after departure', field='reach_time')
        if isinstance(total_seats, bool) or not isinstance(total_seats, int) or total_seats < 1:
            raise ValidationError('A trip needs at least one seat', field='total_seats')
        try:
            price = Decimal(str(price_per_seat))
        except InvalidOperation:
            raise ValidationError('Price must be a number', field='price_per_seat')
        if not price.is_finite() or price < 0:
            raise ValidationError('Price cannot be negative', field='price_per_seat')

        cleaned_stops = []
        for stop in stops:
            location = (stop.get('stop_location') or '').strip()
            stop_time = stop.get('stop_time')
            if not location or stop_time is None:
                raise ValidationError('Every stop needs a location and a time', field='stops')
            if not start_time <= stop_time <= reach_time:
                raise ValidationError(f'Stop "{location}" is outside the trip schedule', field='stops')
            cleaned_stops.append({'stop_location': location, 'stop_time': stop_time})

        return {
            'from_destination': from_destination.strip(),
            'to_destination': to_destination.strip(),
            'start_time': start_time,
            'reach_time': reach_time,
            'total_seats': total_seats,
            'price_per_seat': price,
            'stops': sorted(cleaned_stops, key=lambda s: s['stop_time']),
        }
