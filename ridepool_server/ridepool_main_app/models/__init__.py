"""Models package - domain-based organization"""

# User models
from .user import UserProfile

# Trip models
from .trip import Trip, TripStop

# Vehicle models
from .vehicle import VehicleListing

# Booking models
from .booking import TripBooking, VehicleBooking

# Review models
from .review import UserRating

__all__ = [
    'UserProfile', 'Trip', 'TripStop', 'VehicleListing', 'TripBooking', 'VehicleBooking', 'UserRating',
]
