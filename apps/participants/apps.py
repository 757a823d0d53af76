from django.apps import AppConfig


class ParticipantsConfig(AppConfig):
    """Configuration for the Participants application."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.participants'
    verbose_name = 'Participants'
