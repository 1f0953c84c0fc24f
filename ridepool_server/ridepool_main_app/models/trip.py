"""Trip-related models"""
from django.db import models

from ..utils.constants import TripStatus


class Trip(models.Model):
    driver = models.ForeignKey('UserProfile', on_delete=models.PROTECT, related_name='trips')
    from_destination = models.CharField(max_length=120)
    to_destination = models.CharField(max_length=120)
    start_time = models.DateTimeField(db_index=True)
    reach_time = models.DateTimeField()
    total_seats = models.PositiveSmallIntegerField()
    # Maintained by the availability ledger only
    available_seats = models.PositiveSmallIntegerField()
    price_per_seat = models.DecimalField(max_digits=10, decimal_places=2)
    car_model = models.CharField(max_length=60, blank=True, default='')
    car_color = models.CharField(max_length=30, blank=True, default='')
    car_number_plate = models.CharField(max_length=20, blank=True, default='')
    status = models.CharField(max_length=20, choices=TripStatus.choices, default=TripStatus.ACTIVE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['start_time']
        indexes = [
            models.Index(fields=['status', 'start_time'], name='trip_status_start_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_seats__gte=0) & models.Q(available_seats__lte=models.F('total_seats')),
                name='trip_available_seats_within_capacity',
            ),
        ]

    def __str__(self):
        return f"{self.from_destination} → {self.to_destination} ({self.start_time:%Y-%m-%d %H:%M})"

    @property
    def booked_seats(self):
        return self.total_seats - self.available_seats


class TripStop(models.Model):
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name='stops')
    stop_location = models.CharField(max_length=120)
    stop_order = models.PositiveSmallIntegerField()
    stop_time = models.DateTimeField()

    class Meta:
        ordering = ['stop_order']
        unique_together = ['trip', 'stop_order']

    def __str__(self):
        return f"{self.trip} - Stop {self.stop_order}: {self.stop_location}"
