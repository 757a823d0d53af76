from django.db import transaction
from django.db.models import QuerySet

from apps.shared.decorators.database import handle_db_errors
from apps.tickets.models import Ticket


class TicketDAL:
    """Data Access Layer for Ticket model operations"""

    @handle_db_errors(operation_type='create', model_name='Ticket', conflict_field='token')
    def create_ticket(self, event_id: int, token: str, artifact_path: str) -> Ticket:
        """Insert one ticket inside its own savepoint"""
        with transaction.atomic():
            return Ticket.objects.create(
                event_id=event_id,
                token=token,
                artifact_path=artifact_path,
                is_verified=False,
            )

    @handle_db_errors(operation_type='read', model_name='Ticket')
    def token_exists(self, token: str) -> bool:
        return Ticket.objects.filter(token=token).exists()

    @handle_db_errors(operation_type='read', model_name='Ticket')
    def get_ticket_by_token(self, token: str) -> Ticket:
        return Ticket.objects.select_related('event').get(token=token)

    @handle_db_errors(operation_type='read', model_name='Ticket')
    def get_ticket_for_update(self, token: str) -> Ticket:
        """Fetch and row-lock a ticket; must run inside a transaction"""
        return Ticket.objects.select_for_update().get(token=token)

    @handle_db_errors(operation_type='update', model_name='Ticket')
    def mark_verified(self, ticket: Ticket) -> Ticket:
        ticket.is_verified = True
        ticket.save(update_fields=['is_verified'])
        return ticket

    def get_event_tickets_queryset(self, event_id: int) -> QuerySet[Ticket]:
        return Ticket.objects.for_event(event_id).order_by('id')

    @handle_db_errors(operation_type='read', model_name='Ticket')
    def get_event_artifact_paths(self, event_id: int) -> list[str]:
        return list(Ticket.objects.for_event(event_id).values_list('artifact_path', flat=True))
