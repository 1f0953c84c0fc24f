"""Utils package - helper functions and utilities"""

from .constants import *
from .retry import retry_with_backoff

__all__ = [
    'UserType',
    'TripStatus',
    'BookingStatus',
    'RentalType',
    'VehicleType',
    'BusinessRules',
    'retry_with_backoff',
]
