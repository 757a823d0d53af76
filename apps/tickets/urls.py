from django.urls import path

from apps.tickets.views import TicketDetailAPIView
from apps.tickets.views import TicketRegistrationAPIView

app_name = 'tickets'

urlpatterns = [
    path('register/', TicketRegistrationAPIView.as_view(), name='ticket-register'),  # POST
    path('<str:token>/', TicketDetailAPIView.as_view(), name='ticket-detail'),  # GET
]
