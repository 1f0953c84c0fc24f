"""Booking-related models"""
from django.db import models

from ..utils.constants import BookingStatus


class TripBooking(models.Model):
    trip = models.ForeignKey('Trip', on_delete=models.PROTECT, related_name='bookings')
    passenger = models.ForeignKey('UserProfile', on_delete=models.CASCADE, related_name='trip_bookings')
    pickup_location = models.CharField(max_length=120)
    pickup_time = models.DateTimeField()
    phone_number = models.CharField(max_length=20)
    status = models.CharField(max_length=20, choices=BookingStatus.choices, default=BookingStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['trip', 'status'], name='tripbooking_trip_status_idx'),
            models.Index(fields=['passenger', '-created_at'], name='tripbooking_passenger_idx'),
        ]

    def __str__(self):
        return f"Booking {self.id} on trip {self.trip_id} by {self.passenger_id} ({self.status})"


class VehicleBooking(models.Model):
    listing = models.ForeignKey('VehicleListing', on_delete=models.PROTECT, related_name='bookings')
    renter = models.ForeignKey('UserProfile', on_delete=models.CASCADE, related_name='vehicle_bookings')
    renter_name = models.CharField(max_length=100)
    from_date = models.DateField()
    to_date = models.DateField()
    from_time = models.TimeField()
    to_time = models.TimeField()
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=BookingStatus.choices, default=BookingStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['listing', 'status'], name='vbooking_listing_status_idx'),
            models.Index(fields=['renter', '-created_at'], name='vbooking_renter_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(from_date__lte=models.F('to_date')),
                name='vehiclebooking_dates_ordered',
            ),
        ]

    def __str__(self):
        return f"Rental {self.id} of listing {self.listing_id} {self.from_date} → {self.to_date} ({self.status})"
