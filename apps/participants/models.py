from django.db import models
from django.utils.translation import gettext_lazy as _


class ParticipantQuerySet(models.QuerySet):
    def for_event(self, event_id):
        return self.filter(ticket__event_id=event_id)

    def with_ticket(self):
        return self.select_related('ticket')


class Participant(models.Model):
    """Registrant bound to exactly one ticket by redeeming its token"""

    ticket = models.OneToOneField(
        'tickets.Ticket',
        on_delete=models.CASCADE,
        related_name='participant',
        verbose_name=_('Ticket'),
    )
    name = models.CharField(_('Name'), max_length=255)
    email = models.EmailField(_('Email'), max_length=255)
    phone = models.CharField(_('Phone'), max_length=50, blank=True)
    address = models.TextField(_('Address'), blank=True)
    registered_at = models.DateTimeField(_('Registered At'), auto_now_add=True, db_index=True)

    objects = ParticipantQuerySet.as_manager()

    class Meta:
        db_table = 'participants'
        verbose_name = _('Participant')
        verbose_name_plural = _('Participants')
        ordering = ['-registered_at']

    def __str__(self):
        return f'{self.name} <{self.email}>'


class Certificate(models.Model):
    """Attendance certificate issued to a participant"""

    participant = models.ForeignKey(
        Participant,
        on_delete=models.CASCADE,
        related_name='certificates',
        verbose_name=_('Participant'),
    )
    certificate_path = models.CharField(_('Certificate Path'), max_length=255)
    issued_at = models.DateTimeField(_('Issued At'), auto_now_add=True)

    class Meta:
        db_table = 'certificates'
        verbose_name = _('Certificate')
        verbose_name_plural = _('Certificates')

    def __str__(self):
        return f'Certificate #{self.pk} for {self.participant_id}'
