from apps.events.views.event_views import BaseEventAPIView
from apps.events.views.event_views import EventDetailAPIView
from apps.events.views.event_views import EventListCreateAPIView
from apps.events.views.event_views import EventTicketListAPIView

__all__ = [
    'BaseEventAPIView',
    'EventDetailAPIView',
    'EventListCreateAPIView',
    'EventTicketListAPIView',
]
