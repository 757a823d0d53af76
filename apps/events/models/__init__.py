"""
Events models package
"""

from apps.events.models.event import Event
from apps.events.models.event import EventManager
from apps.events.models.event import EventQuerySet

__all__ = [
    'Event',
    'EventManager',
    'EventQuerySet',
]
