"""Repositories - one per entity, all bound to an EntityStore"""
from django.db.models import Avg, Count, F
from django.db.models.functions import Least
from django.utils import timezone

from ..models import Trip, TripStop, TripBooking, VehicleListing, VehicleBooking, UserProfile, UserRating
from ..utils.constants import TripStatus, BookingStatus, ACTIVE_BOOKING_STATUSES
from .store import default_store


class Repository:
    model = None

    def __init__(self, store=None):
        self.store = store or default_store

    def _qs(self):
        return self.model.objects.using(self.store.using)

    def get(self, pk):
        return self._qs().filter(pk=pk).first()

    def get_for_update(self, pk):
        """Fetch and row-lock; must be called inside store.atomic()"""
        return self._qs().select_for_update().filter(pk=pk).first()

    def exists(self, pk):
        return self._qs().filter(pk=pk).exists()


class UserProfileRepository(Repository):
    model = UserProfile

    def save_rating(self, profile, rating, total_ratings, user_type):
        profile.rating = rating
        profile.total_ratings = total_ratings
        profile.user_type = user_type
        profile.save(using=self.store.using, update_fields=['rating', 'total_ratings', 'user_type', 'updated_at'])
        return profile


class TripRepository(Repository):
    model = Trip

    def create(self, stops=(), **fields):
        trip = self._qs().create(**fields)
        TripStop.objects.using(self.store.using).bulk_create([
            TripStop(trip=trip, stop_location=stop['stop_location'], stop_order=order, stop_time=stop['stop_time'])
            for order, stop in enumerate(stops, start=1)
        ])
        return trip

    def decrement_seats(self, trip_id, seats):
        """Conditional decrement; returns the number of rows changed (0 or 1)"""
        return self._qs().filter(
            pk=trip_id,
            status=TripStatus.ACTIVE,
            available_seats__gte=seats,
        ).update(available_seats=F('available_seats') - seats, updated_at=timezone.now())

    def increment_seats(self, trip_id, seats):
        """Increment clamped at total_seats; returns the number of rows changed"""
        return self._qs().filter(pk=trip_id).update(
            available_seats=Least(F('available_seats') + seats, F('total_seats')),
            updated_at=timezone.now(),
        )

    def set_available_seats(self, trip_id, available_seats):
        return self._qs().filter(pk=trip_id).update(available_seats=available_seats, updated_at=timezone.now())

    def set_status(self, trip, status):
        trip.status = status
        trip.save(using=self.store.using, update_fields=['status', 'updated_at'])
        return trip

    def search(self, from_query=None, to_query=None):
        trips = self._qs().filter(status=TripStatus.ACTIVE, available_seats__gt=0).select_related('driver')
        if from_query:
            trips = trips.filter(from_destination__icontains=from_query)
        if to_query:
            trips = trips.filter(to_destination__icontains=to_query)
        return trips.order_by('start_time')

    def active(self):
        return self._qs().filter(status=TripStatus.ACTIVE)


class TripBookingRepository(Repository):
    model = TripBooking

    def create(self, **fields):
        return self._qs().create(**fields)

    def set_status(self, booking, status):
        booking.status = status
        update_fields = ['status']
        if status == BookingStatus.CANCELLED:
            booking.cancelled_at = timezone.now()
            update_fields.append('cancelled_at')
        booking.save(using=self.store.using, update_fields=update_fields)
        return booking

    def count_seated(self, trip_id):
        """Bookings that hold a seat: confirmed, or completed with the trip"""
        return self._qs().filter(
            trip_id=trip_id, status__in=[BookingStatus.CONFIRMED, BookingStatus.COMPLETED],
        ).count()

    def transition_for_trip(self, trip_id, from_status, to_status):
        updates = {'status': to_status}
        if to_status == BookingStatus.CANCELLED:
            updates['cancelled_at'] = timezone.now()
        return self._qs().filter(trip_id=trip_id, status=from_status).update(**updates)

    def for_passenger(self, passenger_id):
        return self._qs().filter(passenger_id=passenger_id).select_related('trip').order_by('-created_at')


class VehicleListingRepository(Repository):
    model = VehicleListing

    def create(self, **fields):
        return self._qs().create(**fields)

    def set_available(self, listing, is_available):
        if listing.is_available != is_available:
            listing.is_available = is_available
            listing.save(using=self.store.using, update_fields=['is_available', 'updated_at'])
        return listing

    def search(self, vehicle_type=None, city=None, rental_type=None):
        listings = self._qs().filter(is_available=True).select_related('owner')
        if vehicle_type:
            listings = listings.filter(vehicle_type=vehicle_type)
        if city:
            listings = listings.filter(city__icontains=city)
        if rental_type:
            listings = listings.filter(rental_type=rental_type)
        return listings.order_by('-created_at')

    def all_ids(self):
        return list(self._qs().values_list('pk', flat=True))


class VehicleBookingRepository(Repository):
    model = VehicleBooking

    def create(self, **fields):
        return self._qs().create(**fields)

    def overlapping(self, listing_id, from_date, to_date, exclude_id=None):
        """Non-cancelled bookings whose inclusive date range meets [from_date, to_date]"""
        bookings = self._qs().filter(
            listing_id=listing_id,
            from_date__lte=to_date,
            to_date__gte=from_date,
        ).exclude(status__in=[BookingStatus.CANCELLED, BookingStatus.REJECTED])
        if exclude_id is not None:
            bookings = bookings.exclude(pk=exclude_id)
        return bookings

    def has_active(self, listing_id, exclude_id=None):
        bookings = self._qs().filter(listing_id=listing_id, status__in=ACTIVE_BOOKING_STATUSES)
        if exclude_id is not None:
            bookings = bookings.exclude(pk=exclude_id)
        return bookings.exists()

    def active_for_listing(self, listing_id):
        return self._qs().filter(listing_id=listing_id, status__in=ACTIVE_BOOKING_STATUSES).order_by('from_date', 'id')

    def set_status(self, booking, status):
        booking.status = status
        update_fields = ['status']
        if status == BookingStatus.CANCELLED:
            booking.cancelled_at = timezone.now()
            update_fields.append('cancelled_at')
        booking.save(using=self.store.using, update_fields=update_fields)
        return booking

    def stale_holds(self, older_than):
        return self._qs().filter(status=BookingStatus.PENDING, created_at__lt=older_than)

    def for_renter(self, renter_id):
        return self._qs().filter(renter_id=renter_id).select_related('listing').order_by('-created_at')


class UserRatingRepository(Repository):
    model = UserRating

    def pair_exists(self, rater_id, ratee_id):
        return self._qs().filter(rater_id=rater_id, ratee_id=ratee_id).exists()

    def create(self, **fields):
        return self._qs().create(**fields)

    def delete(self, rating):
        rating.delete(using=self.store.using)

    def for_ratee(self, ratee_id):
        return self._qs().filter(ratee_id=ratee_id).select_related('rater')

    def summary(self, ratee_id):
        """Average score and count of the ratings a profile has received"""
        return self._qs().filter(ratee_id=ratee_id).aggregate(avg=Avg('rating'), count=Count('id'))
