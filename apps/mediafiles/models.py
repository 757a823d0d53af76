from django.db import models
from django.utils.translation import gettext_lazy as _


class FileAssetRecord(models.Model):
    """
    Provenance log entry for a stored binary asset.

    Written once when an asset is stored and never mutated. Advisory only:
    nothing else depends on these rows existing.
    """

    class Purpose(models.TextChoices):
        TICKET_DESIGN = 'ticket_design', _('Ticket design')
        OTHER = 'other', _('Other')

    stored_name = models.CharField(_('Stored Filename'), max_length=255)
    original_name = models.CharField(_('Original Filename'), max_length=255)
    stored_path = models.CharField(_('Stored Path'), max_length=500)
    size = models.PositiveBigIntegerField(_('Size (bytes)'))
    media_type = models.CharField(_('Media Type'), max_length=100)
    purpose = models.CharField(_('Purpose'), max_length=32, choices=Purpose.choices, default=Purpose.OTHER)
    related_id = models.BigIntegerField(_('Related Entity ID'), null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'file_uploads'
        verbose_name = _('File Upload')
        verbose_name_plural = _('File Uploads')
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.original_name} -> {self.stored_path}'
