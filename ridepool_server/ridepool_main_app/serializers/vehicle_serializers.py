"""Vehicle listing serializers"""
from rest_framework import serializers
from ..models import VehicleListing
from .user_serializers import ProfileSummarySerializer


class VehicleListingSerializer(serializers.ModelSerializer):
    owner = ProfileSummarySerializer(read_only=True)

    class Meta:
        model = VehicleListing
        fields = ['id', 'owner', 'vehicle_type', 'vehicle_model', 'vehicle_color', 'vehicle_number_plate',
                  'city', 'latitude', 'longitude', 'photos', 'rental_type', 'rate', 'max_rental_period',
                  'is_available', 'created_at']
        read_only_fields = fields


class VehicleListingCreateSerializer(serializers.Serializer):
    vehicle_type = serializers.CharField(max_length=10)
    vehicle_model = serializers.CharField(max_length=60, allow_blank=True)
    vehicle_color = serializers.CharField(max_length=30, allow_blank=True)
    vehicle_number_plate = serializers.CharField(max_length=20, allow_blank=True)
    city = serializers.CharField(max_length=60, allow_blank=True)
    rental_type = serializers.CharField(max_length=20)
    rate = serializers.DecimalField(max_digits=10, decimal_places=2)
    max_rental_period = serializers.IntegerField()
    latitude = serializers.FloatField(required=False, allow_null=True, default=None)
    longitude = serializers.FloatField(required=False, allow_null=True, default=None)
    photos = serializers.ListField(child=serializers.URLField(), required=False, default=list)


class RentalPeriodSerializer(serializers.Serializer):
    """Dates and times of a rental, shared by quote and book"""
    from_date = serializers.DateField()
    to_date = serializers.DateField()
    from_time = serializers.TimeField()
    to_time = serializers.TimeField()
