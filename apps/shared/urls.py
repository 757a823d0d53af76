# apps/shared/urls.py
from django.urls import path

from .views import HealthCheckAPIView

app_name = 'shared'

urlpatterns = [
    path('', HealthCheckAPIView.as_view(), name='health'),
]
