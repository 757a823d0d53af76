from typing import Any

from django.db.models import QuerySet

from apps.events.models.event import Event
from apps.shared.decorators.database import handle_db_errors


class EventDAL:
    """Data Access Layer for Event model operations only"""

    @handle_db_errors(operation_type='create', model_name='Event', conflict_field='slug')
    def create_event(self, event_data: dict[str, Any]) -> Event:
        return Event.objects.create(**event_data)

    @handle_db_errors(operation_type='read', model_name='Event')
    def get_event_by_id(self, event_id: int) -> Event:
        return Event.objects.get(pk=event_id)

    @handle_db_errors(operation_type='read', model_name='Event')
    def get_event_with_statistics(self, event_id: int) -> Event:
        return Event.objects.with_ticket_statistics().get(pk=event_id)

    @handle_db_errors(operation_type='read', model_name='Event')
    def slug_exists(self, slug: str, exclude_event_id: int | None = None) -> bool:
        queryset = Event.objects.filter(slug=slug)
        if exclude_event_id is not None:
            queryset = queryset.exclude(pk=exclude_event_id)
        return queryset.exists()

    def get_events_with_statistics(self, search: str = '') -> QuerySet[Event]:
        return Event.objects.search(search).with_ticket_statistics_ordered()

    @handle_db_errors(operation_type='update', model_name='Event', conflict_field='slug')
    def update_event(self, event: Event, validated_data: dict[str, Any]) -> Event:
        for field, value in validated_data.items():
            setattr(event, field, value)
        event.save()
        return event

    @handle_db_errors(operation_type='delete', model_name='Event')
    def delete_event(self, event: Event) -> bool:
        """Delete event; tickets, participants and certificates cascade"""
        event.delete()
        return True
