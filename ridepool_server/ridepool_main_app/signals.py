from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
import logging

from .models import UserProfile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_profile_for_new_user(sender, instance, created, **kwargs):
    """Every account gets a profile so it can book, list and rate"""
    if not created:
        return

    display_name = instance.get_full_name() or instance.get_username()
    profile, _ = UserProfile.objects.get_or_create(user=instance, defaults={'display_name': display_name})
    logger.info(f'[SIGNAL] Profile {profile.id} created for user {instance.pk}')
