from rest_framework import serializers

from apps.participants.models import Participant
from apps.tickets.models import Ticket


class TicketSerializer(serializers.ModelSerializer):
    qr_code = serializers.CharField(source='artifact_path', read_only=True)

    class Meta:
        model = Ticket
        fields = ['id', 'event', 'token', 'qr_code', 'is_verified', 'created_at']
        read_only_fields = fields


class TicketRegistrationSerializer(serializers.Serializer):
    """Participant profile submitted together with the ticket token"""

    token = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)


class RegisteredParticipantSerializer(serializers.ModelSerializer):
    token = serializers.CharField(source='ticket.token', read_only=True)
    event_id = serializers.IntegerField(source='ticket.event_id', read_only=True)

    class Meta:
        model = Participant
        fields = ['id', 'name', 'email', 'phone', 'address', 'registered_at', 'token', 'event_id']
        read_only_fields = fields
