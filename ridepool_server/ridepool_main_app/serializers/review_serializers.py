"""Rating serializers"""
from rest_framework import serializers
from ..models import UserRating
from .user_serializers import ProfileSummarySerializer


class UserRatingSerializer(serializers.ModelSerializer):
    rater = ProfileSummarySerializer(read_only=True)

    class Meta:
        model = UserRating
        fields = ['id', 'rater', 'ratee', 'rating', 'review', 'created_at']
        read_only_fields = fields


class RatingRequestSerializer(serializers.Serializer):
    # Range is enforced by RatingService so the error body stays uniform
    rating = serializers.IntegerField()
    review = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
