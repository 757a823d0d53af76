from django.db import models
from django.utils.translation import gettext_lazy as _


class TicketQuerySet(models.QuerySet):
    def for_event(self, event_id):
        return self.filter(event_id=event_id)


class Ticket(models.Model):
    """
    Single-use entry ticket bound to an event by a globally unique token.

    Created in bulk when an event is provisioned; flipped to verified exactly
    once when a participant redeems the token; removed only by cascade when
    its event is deleted.
    """

    TOKEN_LENGTH = 12

    event = models.ForeignKey(
        'events.Event',
        on_delete=models.CASCADE,
        related_name='tickets',
        verbose_name=_('Event'),
    )
    token = models.CharField(_('Token'), max_length=TOKEN_LENGTH, unique=True)
    artifact_path = models.CharField(_('QR Code Path'), max_length=255)
    is_verified = models.BooleanField(_('Verified'), default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TicketQuerySet.as_manager()

    class Meta:
        db_table = 'tickets'
        verbose_name = _('Ticket')
        verbose_name_plural = _('Tickets')
        ordering = ['id']
        indexes = [
            models.Index(fields=['event', 'is_verified'], name='tickets_event_verified_idx'),
        ]

    def __str__(self):
        return f'{self.token} (event {self.event_id})'
