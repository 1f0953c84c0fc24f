from django.apps import AppConfig


class RidepoolMainAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'ridepool_main_app'

    def ready(self):
        import ridepool_main_app.signals  # Register signals
