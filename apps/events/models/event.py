from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.shared.base.models import BaseModel


class EventQuerySet(models.QuerySet):
    """QuerySet for events with ticket aggregate annotations"""

    def search(self, search_term):
        if not search_term:
            return self
        return self.filter(
            models.Q(name__icontains=search_term)
            | models.Q(slug__icontains=search_term)
            | models.Q(location__icontains=search_term)
        )

    def with_ticket_statistics(self):
        """Annotate total, verified and available ticket counts"""
        return self.annotate(
            total_tickets=models.Count('tickets', distinct=True),
            verified_tickets=models.Count(
                'tickets', filter=models.Q(tickets__is_verified=True), distinct=True
            ),
        ).annotate(
            available_tickets=models.F('total_tickets') - models.F('verified_tickets'),
        )

    def with_ticket_statistics_ordered(self):
        return self.with_ticket_statistics().order_by('-created_at', '-id')


class EventManager(models.Manager):
    """Custom manager for events"""

    def get_queryset(self):
        return EventQuerySet(self.model, using=self._db)

    def search(self, search_term):
        return self.get_queryset().search(search_term)

    def with_ticket_statistics(self):
        return self.get_queryset().with_ticket_statistics()

    def with_ticket_statistics_ordered(self):
        return self.get_queryset().with_ticket_statistics_ordered()


class Event(BaseModel):
    """
    Plain Event model - only defines data structure.
    Business logic lives in EventService, aggregates in EventQuerySet.
    """

    class Category(models.TextChoices):
        SEMINAR = 'seminar', _('Seminar')
        WORKSHOP = 'workshop', _('Workshop')

    slug = models.SlugField(_('Slug'), max_length=255, unique=True)
    name = models.CharField(_('Event Name'), max_length=255)
    category = models.CharField(_('Category'), max_length=20, choices=Category.choices)
    location = models.CharField(_('Location'), max_length=255)
    description = models.TextField(_('Description'), blank=True, default='')
    start_time = models.DateTimeField(_('Start Time'))
    end_time = models.DateTimeField(_('End Time'))
    quota = models.PositiveIntegerField(_('Ticket Quota'))

    design_asset_path = models.CharField(_('Ticket Design'), max_length=500, null=True, blank=True)
    design_asset_size = models.PositiveBigIntegerField(_('Ticket Design Size'), null=True, blank=True)
    design_asset_type = models.CharField(_('Ticket Design Type'), max_length=100, null=True, blank=True)

    objects = EventManager()

    class Meta:
        db_table = 'events'
        verbose_name = _('Event')
        verbose_name_plural = _('Events')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_time__lte=models.F('end_time')),
                name='event_start_before_end',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.slug})'

    def clean(self):
        super().clean()
        if self.start_time and self.end_time and self.start_time > self.end_time:
            raise ValidationError({'end_time': _('End time must not be before start time')})
