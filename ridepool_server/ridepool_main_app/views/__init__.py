"""Views package - HTTP request handlers"""

# Import from domain-specific view files
from .trip_views import TripViewSet
from .vehicle_views import VehicleListingViewSet
from .booking_views import TripBookingViewSet, VehicleBookingViewSet
from .user_views import UserProfileViewSet
from .review_views import UserRatingViewSet

__all__ = [
    'TripViewSet', 'VehicleListingViewSet', 'TripBookingViewSet', 'VehicleBookingViewSet',
    'UserProfileViewSet', 'UserRatingViewSet',
]
