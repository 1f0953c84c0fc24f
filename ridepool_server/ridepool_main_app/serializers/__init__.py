"""Serializers package - imports from domain-specific modules"""

# User serializers
from .user_serializers import (
    ProfileSummarySerializer,
    UserProfileSerializer,
)

# Trip serializers
from .trip_serializers import (
    TripSerializer,
    TripStopSerializer,
    TripStopInputSerializer,
    TripCreateSerializer,
    TripBookingRequestSerializer,
)

# Vehicle serializers
from .vehicle_serializers import (
    VehicleListingSerializer,
    VehicleListingCreateSerializer,
    RentalPeriodSerializer,
)

# Booking serializers
from .booking_serializers import (
    TripBookingSerializer,
    VehicleBookingSerializer,
)

# Review serializers
from .review_serializers import (
    UserRatingSerializer,
    RatingRequestSerializer,
)

__all__ = [
    'ProfileSummarySerializer',
    'UserProfileSerializer',
    'TripSerializer',
    'TripStopSerializer',
    'TripStopInputSerializer',
    'TripCreateSerializer',
    'TripBookingRequestSerializer',
    'VehicleListingSerializer',
    'VehicleListingCreateSerializer',
    'RentalPeriodSerializer',
    'TripBookingSerializer',
    'VehicleBookingSerializer',
    'UserRatingSerializer',
    'RatingRequestSerializer',
]
