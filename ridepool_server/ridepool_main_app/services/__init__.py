"""Services package - business logic layer"""

from .errors import (
    ServiceError, ValidationError, DurationExceededError, SelfRatingError, NotFoundError,
    CapacityError, InsufficientCapacityError, TripFullError, OverlapError,
    OwnershipError, NotOwnerError, ConflictError, DuplicateRatingError, AlreadyCancelledError,
    InvalidTransitionError, TripNotBookableError, StoreError,
)
from .results import ServiceResult
from .store import EntityStore, default_store
from .availability_ledger import AvailabilityLedger, DateRange, ReservationToken
from .booking_service import BookingService
from .pricing_service import compute_price, rental_duration, quote
from .rating_service import RatingService
from .trip_service import TripService
from .listing_service import ListingService

__all__ = [
    'ServiceError',
    'ValidationError',
    'DurationExceededError',
    'SelfRatingError',
    'NotFoundError',
    'CapacityError',
    'InsufficientCapacityError',
    'TripFullError',
    'OverlapError',
    'OwnershipError',
    'NotOwnerError',
    'ConflictError',
    'DuplicateRatingError',
    'AlreadyCancelledError',
    'InvalidTransitionError',
    'TripNotBookableError',
    'StoreError',
    'ServiceResult',
    'EntityStore',
    'default_store',
    'AvailabilityLedger',
    'DateRange',
    'ReservationToken',
    'BookingService',
    'compute_price',
    'rental_duration',
    'quote',
    'RatingService',
    'TripService',
    'ListingService',
]
