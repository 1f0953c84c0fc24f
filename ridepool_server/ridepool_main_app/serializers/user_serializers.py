"""User profile serializers"""
from rest_framework import serializers
from ..models import UserProfile


class ProfileSummarySerializer(serializers.ModelSerializer):
    """Compact profile embedded in trips, listings and ratings"""
    rating = serializers.SerializerMethodField()

    class Meta:
        model = UserProfile
        fields = ['id', 'display_name', 'rating', 'total_ratings', 'user_type']

    def get_rating(self, obj):
        return round(obj.rating, 2)


class UserProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    rating = serializers.SerializerMethodField()

    class Meta:
        model = UserProfile
        fields = ['id', 'username', 'display_name', 'age', 'rating', 'total_ratings', 'user_type',
                  'created_at', 'updated_at']
        # Owned by the rating aggregator
        read_only_fields = ['total_ratings', 'user_type', 'created_at', 'updated_at']

    def get_rating(self, obj):
        return round(obj.rating, 2)

    def validate_display_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Display name cannot be blank')
        return value

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        # rating and total_ratings are never written from here
        instance.save(update_fields=[*validated_data, 'updated_at'])
        return instance
