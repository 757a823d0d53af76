import logging

from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser
from rest_framework.parsers import JSONParser
from rest_framework.parsers import MultiPartParser
from rest_framework.response import Response

from apps.events.serializers import EventDeleteQuerySerializer
from apps.events.serializers import EventParticipantSerializer
from apps.events.serializers import EventSerializer
from apps.events.serializers import EventWriteSerializer
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_event_service
from apps.shared.exceptions import ValidationError
from apps.tickets.serializers import TicketSerializer

logger = logging.getLogger(__name__)


class BaseEventAPIView(BaseAPIView):
    """Base view for event operations"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    _event_service = None

    def get_service(self):
        if self._event_service is None:
            self._event_service = get_event_service()
        return self._event_service

    def get_write_data(self, request):
        serializer = EventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        validated_data = dict(serializer.validated_data)
        design_file = validated_data.pop('ticket_design', None)
        return validated_data, design_file


@extend_schema(tags=['Events'])
class EventListCreateAPIView(BaseEventAPIView):
    """List events, create an event with its tickets, legacy delete by query id"""

    @extend_schema(
        parameters=[OpenApiParameter('search', str, required=False)],
        responses=EventSerializer(many=True),
    )
    def get(self, request):
        events = self.get_service().get_events_list(search=request.query_params.get('search', '').strip())
        return Response(EventSerializer(events, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(request=EventWriteSerializer)
    def post(self, request):
        validated_data, design_file = self.get_write_data(request)

        result = self.get_service().create_event(validated_data, design_file=design_file)
        report = result.report

        response_data = {
            'message': 'Event created successfully',
            'eventId': result.event.pk,
            'ticketsRequested': report.requested,
            'ticketsGenerated': report.succeeded,
            'ticketsFailed': report.failed,
            'ticketDesign': result.event.design_asset_path,
        }
        if report.failed:
            response_data['failures'] = report.to_dict()['failures']

        return Response(response_data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[OpenApiParameter('id', int, required=True)])
    def delete(self, request):
        query_serializer = EventDeleteQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        event_id = query_serializer.validated_data.get('id')
        if event_id is None:
            raise ValidationError(
                'Event ID is required',
                field_errors={'id': ['This query parameter is required.']},
                error_code='missing_field',
            )

        self.get_service().delete_event(event_id)
        return Response({'message': 'Event deleted successfully'}, status=status.HTTP_200_OK)


@extend_schema(tags=['Events'])
class EventDetailAPIView(BaseEventAPIView):
    """Retrieve, replace or delete a single event"""

    def get(self, request, event_id):
        detail = self.get_service().get_event_detail(event_id)
        return Response(
            {
                'event': EventSerializer(detail['event']).data,
                'participants': EventParticipantSerializer(detail['participants'], many=True).data,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(request=EventWriteSerializer)
    def put(self, request, event_id):
        validated_data, design_file = self.get_write_data(request)

        event = self.get_service().update_event(event_id, validated_data, design_file=design_file)

        return Response(
            {
                'message': 'Event updated successfully',
                'eventId': event.pk,
                'ticketDesign': event.design_asset_path,
            },
            status=status.HTTP_200_OK,
        )

    def delete(self, request, event_id):
        self.get_service().delete_event(event_id)
        return Response({'message': 'Event deleted successfully'}, status=status.HTTP_200_OK)


@extend_schema(tags=['Events'])
class EventTicketListAPIView(BaseEventAPIView):
    """Tickets minted for an event"""

    @extend_schema(responses=TicketSerializer(many=True))
    def get(self, request, event_id):
        tickets = self.get_service().get_event_tickets(event_id)
        return Response(TicketSerializer(tickets, many=True).data, status=status.HTTP_200_OK)
