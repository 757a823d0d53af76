"""
Events Services Package

- EventService: event creation, update, deletion and read models
"""

from apps.events.services.event_service import EventCreationResult
from apps.events.services.event_service import EventService

__all__ = [
    'EventCreationResult',
    'EventService',
]
