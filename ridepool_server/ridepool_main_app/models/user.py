"""User-related models"""
from django.conf import settings
from django.db import models

from ..utils.constants import UserType, BusinessRules


class UserProfile(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profile')
    display_name = models.CharField(max_length=100)
    age = models.PositiveSmallIntegerField(null=True, blank=True)
    # Maintained by the rating aggregator only
    rating = models.FloatField(default=BusinessRules.DEFAULT_PROFILE_RATING)
    total_ratings = models.PositiveIntegerField(default=0)
    user_type = models.CharField(max_length=20, choices=UserType.choices, default=UserType.NEW)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=0) & models.Q(rating__lte=5),
                name='userprofile_rating_range',
            ),
        ]

    def __str__(self):
        return f"{self.display_name} ({self.rating:.1f}, {self.total_ratings} ratings)"
