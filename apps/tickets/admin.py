from django.contrib import admin
from django.utils.html import format_html

from .models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ['token', 'event', 'is_verified', 'qr_preview', 'created_at']
    list_filter = ['is_verified', 'event']
    search_fields = ['token', 'event__name', 'event__slug']
    readonly_fields = ['token', 'event', 'artifact_path', 'qr_preview', 'created_at']
    list_select_related = ['event']

    @admin.display(description='QR Code')
    def qr_preview(self, obj):
        return format_html('<img src="{}" width="60" height="60" />', obj.artifact_path)

    def has_add_permission(self, request):
        return False
