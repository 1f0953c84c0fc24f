"""Trip-related serializers"""
from rest_framework import serializers
from ..models import Trip, TripStop
from .user_serializers import ProfileSummarySerializer


class TripStopSerializer(serializers.ModelSerializer):
    class Meta:
        model = TripStop
        fields = ['id', 'stop_location', 'stop_order', 'stop_time']


class TripSerializer(serializers.ModelSerializer):
    driver = ProfileSummarySerializer(read_only=True)
    stops = TripStopSerializer(many=True, read_only=True)
    booked_seats = serializers.IntegerField(read_only=True)

    class Meta:
        model = Trip
        fields = ['id', 'driver', 'from_destination', 'to_destination', 'start_time', 'reach_time',
                  'total_seats', 'available_seats', 'booked_seats', 'price_per_seat',
                  'car_model', 'car_color', 'car_number_plate', 'status', 'stops', 'created_at']
        read_only_fields = fields


class TripStopInputSerializer(serializers.Serializer):
    stop_location = serializers.CharField(max_length=120)
    stop_time = serializers.DateTimeField()


class TripCreateSerializer(serializers.Serializer):
    """Input for publishing a trip; business checks happen in TripService"""
    from_destination = serializers.CharField(max_length=120, allow_blank=True)
    to_destination = serializers.CharField(max_length=120, allow_blank=True)
    start_time = serializers.DateTimeField()
    reach_time = serializers.DateTimeField()
    total_seats = serializers.IntegerField()
    price_per_seat = serializers.DecimalField(max_digits=10, decimal_places=2)
    car_model = serializers.CharField(max_length=60, required=False, allow_blank=True, default='')
    car_color = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    car_number_plate = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    stops = TripStopInputSerializer(many=True, required=False, default=list)


class TripBookingRequestSerializer(serializers.Serializer):
    pickup_location = serializers.CharField(max_length=120, allow_blank=True)
    pickup_time = serializers.DateTimeField(required=False)
    phone_number = serializers.CharField(max_length=20, allow_blank=True)
