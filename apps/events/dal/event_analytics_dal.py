"""
Event Analytics Data Access Layer - ticket statistics and the participant join.
"""

from typing import Any

from django.db.models import Count
from django.db.models import Q

from apps.participants.dal import ParticipantDAL
from apps.participants.models import Participant
from apps.shared.decorators.database import handle_db_errors
from apps.tickets.models import Ticket


class EventAnalyticsDAL:
    """Data Access Layer for event analytics and statistics only"""

    def __init__(self, participant_dal: ParticipantDAL = None):
        self.participant_dal = participant_dal or ParticipantDAL()

    @handle_db_errors(operation_type='read', model_name='Ticket')
    def get_ticket_statistics(self, event_id: int) -> dict[str, Any]:
        stats = Ticket.objects.for_event(event_id).aggregate(
            total_tickets=Count('id'),
            verified_tickets=Count('id', filter=Q(is_verified=True)),
        )
        stats['available_tickets'] = stats['total_tickets'] - stats['verified_tickets']
        return stats

    @handle_db_errors(operation_type='read', model_name='Participant')
    def get_event_participants(self, event_id: int) -> list[Participant]:
        return list(self.participant_dal.get_event_participants_queryset(event_id))
