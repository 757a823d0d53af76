from django.contrib import admin

from .models import Certificate
from .models import Participant


class CertificateInline(admin.TabularInline):
    model = Certificate
    extra = 0
    readonly_fields = ['issued_at']


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    inlines = [CertificateInline]
    list_display = ['name', 'email', 'phone', 'ticket_token', 'event_display', 'registered_at']
    search_fields = ['name', 'email', 'ticket__token']
    list_filter = ['registered_at']
    readonly_fields = ['registered_at']
    list_select_related = ['ticket__event']

    @admin.display(description='Token', ordering='ticket__token')
    def ticket_token(self, obj):
        return obj.ticket.token

    @admin.display(description='Event', ordering='ticket__event__name')
    def event_display(self, obj):
        return obj.ticket.event.name


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display = ['participant', 'certificate_path', 'issued_at']
    search_fields = ['participant__name', 'participant__email']
    readonly_fields = ['issued_at']
