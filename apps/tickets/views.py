from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_redemption_service
from apps.tickets.serializers import RegisteredParticipantSerializer
from apps.tickets.serializers import TicketRegistrationSerializer
from apps.tickets.serializers import TicketSerializer


class BaseTicketAPIView(BaseAPIView):
    _redemption_service = None

    def get_service(self):
        if self._redemption_service is None:
            self._redemption_service = get_redemption_service()
        return self._redemption_service


@extend_schema(tags=['Tickets'])
class TicketDetailAPIView(BaseTicketAPIView):
    """Look up a ticket by token (case-insensitive)"""

    @extend_schema(responses=TicketSerializer)
    def get(self, request, token):
        ticket = self.get_service().get_ticket(token)
        return Response(TicketSerializer(ticket).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Tickets'])
class TicketRegistrationAPIView(BaseTicketAPIView):
    """Register a participant by redeeming a ticket token"""

    @extend_schema(request=TicketRegistrationSerializer, responses=RegisteredParticipantSerializer)
    def post(self, request):
        serializer = TicketRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = dict(serializer.validated_data)
        token = profile.pop('token')
        participant = self.get_service().redeem(token, profile)

        return Response(
            {
                'message': 'Registration successful',
                'participant': RegisteredParticipantSerializer(participant).data,
            },
            status=status.HTTP_201_CREATED,
        )
