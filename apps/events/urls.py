from django.urls import path

from apps.events.views import EventDetailAPIView
from apps.events.views import EventListCreateAPIView
from apps.events.views import EventTicketListAPIView

app_name = 'events'


urlpatterns = [
    path('', EventListCreateAPIView.as_view(), name='event-list'),  # GET, POST, DELETE ?id=
    path('<int:event_id>/', EventDetailAPIView.as_view(), name='event-detail'),  # GET, PUT, DELETE
    path('<int:event_id>/tickets/', EventTicketListAPIView.as_view(), name='event-tickets'),  # GET
]
