from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.storage.factory import get_storage_service


@extend_schema(tags=['Health'])
class HealthCheckAPIView(BaseAPIView):
    """Database reachability; an unreachable database yields 503 from the availability check"""

    def get(self, request):
        return Response(
            {
                'status': 'ok',
                'database': 'ok',
                'storage': get_storage_service().provider_name,
            },
            status=status.HTTP_200_OK,
        )
