"""Vehicle rental listing models"""
from django.db import models

from ..utils.constants import RentalType, VehicleType


class VehicleListing(models.Model):
    owner = models.ForeignKey('UserProfile', on_delete=models.PROTECT, related_name='vehicle_listings')
    vehicle_type = models.CharField(max_length=10, choices=VehicleType.choices)
    vehicle_model = models.CharField(max_length=60)
    vehicle_color = models.CharField(max_length=30)
    vehicle_number_plate = models.CharField(max_length=20)
    city = models.CharField(max_length=60, db_index=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    photos = models.JSONField(default=list, blank=True)
    rental_type = models.CharField(max_length=20, choices=RentalType.choices)
    rate = models.DecimalField(max_digits=10, decimal_places=2)
    # Hours for short-term listings, days for long-term listings
    max_rental_period = models.PositiveIntegerField()
    # Maintained by the availability ledger only
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['vehicle_type', 'is_available'], name='listing_type_available_idx'),
        ]

    def __str__(self):
        return f"{self.vehicle_model} ({self.vehicle_number_plate}) - {self.city}"
