from typing import Any

from django.db.models import QuerySet

from apps.participants.models import Participant
from apps.shared.decorators.database import handle_db_errors

PROFILE_FIELDS = ('name', 'email', 'phone', 'address')


class ParticipantDAL:
    """Data Access Layer for Participant model operations"""

    @handle_db_errors(operation_type='create', model_name='Participant', conflict_field='ticket')
    def create_participant(self, ticket, profile: dict[str, Any]) -> Participant:
        data = {key: profile[key] for key in PROFILE_FIELDS if key in profile}
        return Participant.objects.create(ticket=ticket, **data)

    def get_event_participants_queryset(self, event_id: int) -> QuerySet[Participant]:
        """Participants joined through their ticket, newest registrations first"""
        return Participant.objects.for_event(event_id).with_ticket().order_by('-registered_at', '-id')
