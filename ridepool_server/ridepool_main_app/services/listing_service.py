"""Listing service - vehicle rental listings"""

import logging
from decimal import Decimal, InvalidOperation

from ..utils.constants import RentalType, VehicleType
from .errors import ValidationError, NotFoundError
from .repositories import VehicleListingRepository, UserProfileRepository
from .results import ServiceResult
from .store import default_store

logger = logging.getLogger(__name__)


class ListingService:

    def __init__(self, store=None, listings=None, profiles=None):
        self.store = store or default_store
        self.listings = listings or VehicleListingRepository(self.store)
        self.profiles = profiles or UserProfileRepository(self.store)

    def create_listing(self, owner_id, vehicle_type, vehicle_model, vehicle_color, vehicle_number_plate,
                       city, rental_type, rate, max_rental_period, latitude=None, longitude=None, photos=None):
        text_fields = {
            'vehicle_model': vehicle_model,
            'vehicle_color': vehicle_color,
            'vehicle_number_plate': vehicle_number_plate,
            'city': city,
        }
        missing = [name for name, value in text_fields.items() if not (value or '').strip()]
        if missing:
            return ServiceResult.fail(ValidationError(f'Please fill in all fields: {", ".join(missing)}', fields=missing))
        if vehicle_type not in VehicleType.values:
            return ServiceResult.fail(ValidationError(f'Unknown vehicle type "{vehicle_type}"', field='vehicle_type'))
        if rental_type not in RentalType.values:
            return ServiceResult.fail(ValidationError(f'Unknown rental type "{rental_type}"', field='rental_type'))
        try:
            rate = Decimal(str(rate))
        except InvalidOperation:
            return ServiceResult.fail(ValidationError('Rate must be a number', field='rate'))
        if not rate.is_finite() or rate < 0:
            return ServiceResult.fail(ValidationError('Rate cannot be negative', field='rate'))
        if isinstance(max_rental_period, bool) or not isinstance(max_rental_period, int) or max_rental_period < 1:
            return ServiceResult.fail(ValidationError('Maximum rental period must be at least 1', field='max_rental_period'))

        if not self.profiles.exists(owner_id):
            return ServiceResult.fail(NotFoundError('Profile not found. Please complete your profile first.'))

        with self.store.atomic():
            listing = self.listings.create(
                owner_id=owner_id,
                vehicle_type=vehicle_type,
                vehicle_model=vehicle_model.strip(),
                vehicle_color=vehicle_color.strip(),
                vehicle_number_plate=vehicle_number_plate.strip().upper(),
                city=city.strip(),
                rental_type=rental_type,
                rate=rate,
                max_rental_period=max_rental_period,
                latitude=latitude,
                longitude=longitude,
                photos=list(photos or []),
                is_available=True,
            )

        logger.info(f'[LISTING] {vehicle_type} listing {listing.id} created by owner {owner_id}')
        return ServiceResult.ok(listing)

    def search_listings(self, vehicle_type=None, city=None, rental_type=None):
        return self.listings.search(vehicle_type, city, rental_type)
