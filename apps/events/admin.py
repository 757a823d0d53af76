from django.contrib import admin
from django.utils.html import format_html

from apps.tickets.models import Ticket

from .models import Event


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    fields = ['token', 'artifact_path', 'is_verified', 'created_at']
    readonly_fields = ['token', 'artifact_path', 'created_at']
    show_change_link = True
    can_delete = False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    inlines = [TicketInline]

    list_display = [
        'name',
        'slug',
        'category',
        'start_time',
        'location',
        'quota',
        'ticket_stats_display',
        'created_at',
    ]

    list_filter = ['category', 'start_time', 'created_at']

    search_fields = ['name', 'slug', 'location', 'description']

    prepopulated_fields = {'slug': ('name',)}

    readonly_fields = [
        'created_at',
        'updated_at',
        'ticket_stats_display',
        'design_preview',
    ]

    fieldsets = (
        ('Basic Information', {'fields': ('name', 'slug', 'category', 'description')}),
        ('Date and Place', {'fields': ('start_time', 'end_time', 'location')}),
        ('Tickets', {'fields': ('quota', 'ticket_stats_display')}),
        (
            'Ticket Design',
            {
                'fields': ('design_asset_path', 'design_asset_size', 'design_asset_type', 'design_preview'),
                'classes': ('collapse',),
            },
        ),
        (
            'System Fields',
            {
                'fields': ('created_at', 'updated_at'),
                'classes': ('collapse',),
            },
        ),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).with_ticket_statistics()

    @admin.display(description='Tickets (verified / total)', ordering='total_tickets')
    def ticket_stats_display(self, obj):
        total = getattr(obj, 'total_tickets', None)
        if total is None:
            return '-'
        if total < obj.quota:
            color = 'red'
        elif obj.verified_tickets:
            color = 'green'
        else:
            color = 'gray'
        return format_html(
            '<span style="color: {};">{} / {}</span>',
            color,
            obj.verified_tickets,
            total,
        )

    @admin.display(description='Preview')
    def design_preview(self, obj):
        if not obj.design_asset_path:
            return format_html('<span style="color: gray;">No design</span>')
        return format_html('<img src="{}" style="max-height: 120px;" />', obj.design_asset_path)
