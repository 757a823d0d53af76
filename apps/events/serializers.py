"""
Event serializers.

Write serializers only parse formats; completeness, slug availability and
quota rules are enforced by EventService so that every client gets the same
errors.
"""

from rest_framework import serializers

from apps.events.models.event import Event
from apps.participants.models import Participant


class EventWriteSerializer(serializers.Serializer):
    """Multipart/JSON payload for creating or replacing an event"""

    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    slug = serializers.SlugField(max_length=255, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Event.Category.choices, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    start_time = serializers.DateTimeField(required=False, allow_null=True)
    end_time = serializers.DateTimeField(required=False, allow_null=True)
    quota = serializers.IntegerField(required=False, allow_null=True)
    ticket_design = serializers.FileField(required=False, allow_null=True, write_only=True)


class EventSerializer(serializers.ModelSerializer):
    """Event with ticket aggregates (populated by EventQuerySet.with_ticket_statistics())"""

    ticket_design = serializers.CharField(source='design_asset_path', read_only=True)
    total_tickets = serializers.IntegerField(read_only=True)
    verified_tickets = serializers.IntegerField(read_only=True)
    available_tickets = serializers.IntegerField(read_only=True)

    class Meta:
        model = Event
        fields = [
            'id',
            'slug',
            'name',
            'category',
            'location',
            'description',
            'start_time',
            'end_time',
            'quota',
            'ticket_design',
            'design_asset_size',
            'design_asset_type',
            'total_tickets',
            'verified_tickets',
            'available_tickets',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class EventParticipantSerializer(serializers.ModelSerializer):
    """Participant joined through the ticket it redeemed"""

    token = serializers.CharField(source='ticket.token', read_only=True)
    is_verified = serializers.BooleanField(source='ticket.is_verified', read_only=True)

    class Meta:
        model = Participant
        fields = ['id', 'name', 'email', 'phone', 'address', 'registered_at', 'token', 'is_verified']
        read_only_fields = fields


class EventDeleteQuerySerializer(serializers.Serializer):
    id = serializers.IntegerField(required=False, min_value=1)
