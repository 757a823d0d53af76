from django.apps import AppConfig


class MediafilesConfig(AppConfig):
    """Configuration for the Mediafiles application."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.mediafiles'
    verbose_name = 'Media Files'
