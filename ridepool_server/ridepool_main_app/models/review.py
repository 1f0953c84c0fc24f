"""Review-related models"""
from django.db import models


class UserRating(models.Model):
    rater = models.ForeignKey('UserProfile', on_delete=models.CASCADE, related_name='ratings_given')
    ratee = models.ForeignKey('UserProfile', on_delete=models.CASCADE, related_name='ratings_received')
    rating = models.PositiveSmallIntegerField()
    review = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['rater', 'ratee'], name='unique_rater_ratee'),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name='userrating_valid_range',
            ),
            models.CheckConstraint(
                condition=~models.Q(rater=models.F('ratee')),
                name='userrating_not_self',
            ),
        ]
        indexes = [models.Index(fields=['ratee', 'created_at'], name='userrating_ratee_created_idx')]

    def __str__(self):
        return f"{self.rating}/5 for {self.ratee_id} by {self.rater_id}"
