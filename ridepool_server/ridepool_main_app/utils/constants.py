"""Centralized constants and business rules"""
from django.db import models


class UserType(models.TextChoices):
    NEW = 'new', 'New'
    EXPERIENCED = 'experienced', 'Experienced'


class TripStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


class BookingStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    CANCELLED = 'cancelled', 'Cancelled'
    COMPLETED = 'completed', 'Completed'
    # Never persisted: a rejected request leaves no booking row.
    REJECTED = 'rejected', 'Rejected'


class RentalType(models.TextChoices):
    SHORT_TERM = 'short_term', 'Short term (hourly)'
    LONG_TERM = 'long_term', 'Long term (daily)'


class VehicleType(models.TextChoices):
    CAR = 'car', 'Car'
    BIKE = 'bike', 'Bike'


TRIP_TRANSITIONS = {
    TripStatus.ACTIVE: frozenset({TripStatus.COMPLETED, TripStatus.CANCELLED}),
    TripStatus.COMPLETED: frozenset(),
    TripStatus.CANCELLED: frozenset(),
}

BOOKING_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.REJECTED: frozenset(),
}

# Bookings that hold capacity on a listing
ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


def can_transition(table, current, target):
    return target in table[current]


class BusinessRules:
    """Business rules and limits"""
    DEFAULT_PROFILE_RATING = 0.0
    MIN_RATING_SCORE = 1
    MAX_RATING_SCORE = 5
    EXPERIENCED_USER_MIN_RATINGS = 5
    COMPENSATION_MAX_ATTEMPTS = 5
    COMPENSATION_BASE_DELAY_SECONDS = 0.05
    PENDING_HOLD_EXPIRY_MINUTES = 15
    MONEY_QUANTUM = '0.01'
