"""Booking-related serializers"""
from rest_framework import serializers
from ..models import TripBooking, VehicleBooking


class TripBookingSerializer(serializers.ModelSerializer):
    from_destination = serializers.CharField(source='trip.from_destination', read_only=True)
    to_destination = serializers.CharField(source='trip.to_destination', read_only=True)
    start_time = serializers.DateTimeField(source='trip.start_time', read_only=True)
    price_per_seat = serializers.DecimalField(source='trip.price_per_seat', max_digits=10, decimal_places=2,
                                              read_only=True)

    class Meta:
        model = TripBooking
        fields = ['id', 'trip', 'passenger', 'from_destination', 'to_destination', 'start_time', 'price_per_seat',
                  'pickup_location', 'pickup_time', 'phone_number', 'status', 'created_at', 'cancelled_at']
        read_only_fields = fields


class VehicleBookingSerializer(serializers.ModelSerializer):
    vehicle_model = serializers.CharField(source='listing.vehicle_model', read_only=True)
    rental_type = serializers.CharField(source='listing.rental_type', read_only=True)

    class Meta:
        model = VehicleBooking
        fields = ['id', 'listing', 'vehicle_model', 'rental_type', 'renter', 'renter_name',
                  'from_date', 'to_date', 'from_time', 'to_time', 'total_price', 'status',
                  'created_at', 'cancelled_at']
        read_only_fields = fields
