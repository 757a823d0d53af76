"""Settings package. Use ``DJANGO_SETTINGS_MODULE=settings.main``."""
