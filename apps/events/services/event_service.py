import logging
from dataclasses import dataclass
from typing import Any

from django.conf import settings
from django.db import transaction

from apps.events.dal.event_analytics_dal import EventAnalyticsDAL
from apps.events.dal.event_dal import EventDAL
from apps.events.exceptions import EventNotFoundError
from apps.events.exceptions import EventValidationError
from apps.events.exceptions import SlugConflictError
from apps.events.models.event import Event
from apps.mediafiles.services.mediafile_service import MediafileService
from apps.mediafiles.services.mediafile_service import StoredAsset
from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import MissingFieldError
from apps.shared.exceptions import ResourceNotFoundError
from apps.tickets.dal import TicketDAL
from apps.tickets.services.provisioning_service import ProvisioningReport
from apps.tickets.services.provisioning_service import TicketProvisioningService

logger = logging.getLogger(__name__)

REQUIRED_EVENT_FIELDS = ('name', 'slug', 'category', 'location', 'start_time', 'end_time', 'quota')
EVENT_FIELDS = REQUIRED_EVENT_FIELDS + ('description',)


@dataclass(frozen=True)
class EventCreationResult:
    event: Event
    report: ProvisioningReport

    @property
    def tickets_generated(self) -> int:
        return self.report.succeeded


class EventService:
    """Service for event business logic operations"""

    def __init__(
        self,
        dal: EventDAL = None,
        analytics_dal: EventAnalyticsDAL = None,
        ticket_dal: TicketDAL = None,
        mediafile_service: MediafileService = None,
        provisioning_service: TicketProvisioningService = None,
        cleanup_orphaned_assets: bool = None,
    ):
        self.dal = dal or EventDAL()
        self.analytics_dal = analytics_dal or EventAnalyticsDAL()
        self.ticket_dal = ticket_dal or TicketDAL()
        self.mediafile_service = mediafile_service or MediafileService()
        self.provisioning_service = provisioning_service or TicketProvisioningService(dal=self.ticket_dal)
        if cleanup_orphaned_assets is None:
            cleanup_orphaned_assets = settings.CLEANUP_ORPHANED_ASSETS
        self.cleanup_orphaned_assets = cleanup_orphaned_assets

    def create_event(
        self,
        validated_data: dict[str, Any],
        design_file=None,
        base_registration_url: str = None,
    ) -> EventCreationResult:
        """
        Validate and persist an event, then mint its ticket quota.

        Validation and slug checks run before anything is written. A design
        asset that cannot be stored aborts creation. The provenance record of
        the asset is best-effort. Ticket provisioning runs exactly once, after
        the event row is committed, and may yield fewer tickets than requested.

        Raises:
            MissingFieldError: If required fields are absent
            EventValidationError: If quota or timestamps are invalid
            SlugConflictError: If the slug is taken
            AssetPersistenceError: If the design asset cannot be written
        """
        event_data = self._validate_event_data(validated_data)

        if not self.validate_slug_available(event_data['slug']):
            raise SlugConflictError(event_data['slug'])

        self.provisioning_service.prepare_artifact_directory()

        asset = self.mediafile_service.store_design_asset(design_file) if design_file else None
        if asset:
            event_data.update(self._design_fields(asset))

        event = self._persist_new_event(event_data, asset)
        logger.info(f'Event {event.pk} created with slug {event.slug}', extra={'event_id': event.pk})

        if asset:
            self.mediafile_service.record_upload(asset, related_id=event.pk)

        report = self.provisioning_service.provision_tickets(event.pk, event.quota, base_registration_url)
        return EventCreationResult(event=event, report=report)

    def update_event(self, event_id: int, validated_data: dict[str, Any], design_file=None) -> Event:
        """
        Replace the event's fields; a new design asset replaces the reference.

        Changing the quota neither mints nor removes tickets. The previous design
        file is removed only when orphaned-asset cleanup is enabled.
        """
        event = self.get_event(event_id)
        event_data = self._validate_event_data(validated_data)

        if not self.validate_slug_available(event_data['slug'], exclude_event_id=event.pk):
            raise SlugConflictError(event_data['slug'])

        previous_design_path = event.design_asset_path
        asset = self.mediafile_service.store_design_asset(design_file) if design_file else None
        if asset:
            event_data.update(self._design_fields(asset))

        try:
            with transaction.atomic():
                event = self.dal.update_event(event, event_data)
        except ConflictError as e:
            self._discard_asset(asset)
            raise SlugConflictError(event_data['slug']) from e
        except Exception:
            self._discard_asset(asset)
            raise

        logger.info(f'Event {event.pk} updated', extra={'event_id': event.pk})

        if asset:
            self.mediafile_service.record_upload(asset, related_id=event.pk)
            if self.cleanup_orphaned_assets and previous_design_path and previous_design_path != asset.stored_path:
                self.mediafile_service.delete_asset(previous_design_path)

        return event

    def delete_event(self, event_id: int) -> bool:
        """
        Delete the event together with its tickets, participants and certificates.

        The design file is removed best-effort first. Ticket QR files are only
        removed when orphaned-asset cleanup is enabled.
        """
        event = self.get_event(event_id)

        artifact_paths = self.ticket_dal.get_event_artifact_paths(event.pk) if self.cleanup_orphaned_assets else []

        if event.design_asset_path:
            self.mediafile_service.delete_asset(event.design_asset_path)

        result = self.dal.delete_event(event)
        logger.info(f'Event {event_id} deleted', extra={'event_id': event_id})

        for artifact_path in artifact_paths:
            self.mediafile_service.delete_asset(artifact_path)

        return result

    def get_event(self, event_id: int) -> Event:
        try:
            return self.dal.get_event_by_id(event_id)
        except ResourceNotFoundError as e:
            raise EventNotFoundError(event_id) from e

    def get_events_list(self, search: str = '') -> list[Event]:
        return list(self.dal.get_events_with_statistics(search))

    def get_event_detail(self, event_id: int) -> dict[str, Any]:
        """Event with ticket aggregates plus participants joined through their ticket"""
        try:
            event = self.dal.get_event_with_statistics(event_id)
        except ResourceNotFoundError as e:
            raise EventNotFoundError(event_id) from e

        return {
            'event': event,
            'participants': self.analytics_dal.get_event_participants(event.pk),
        }

    def get_event_tickets(self, event_id: int):
        event = self.get_event(event_id)
        return self.ticket_dal.get_event_tickets_queryset(event.pk)

    def get_event_statistics(self, event_id: int) -> dict[str, Any]:
        event = self.get_event(event_id)
        return self.analytics_dal.get_ticket_statistics(event.pk)

    def validate_slug_available(self, slug: str, exclude_event_id: int | None = None) -> bool:
        return not self.dal.slug_exists(slug, exclude_event_id)

    def _persist_new_event(self, event_data: dict[str, Any], asset: StoredAsset | None) -> Event:
        try:
            with transaction.atomic():
                return self.dal.create_event(event_data)
        except ConflictError as e:
            # slug taken between the pre-check and the insert
            self._discard_asset(asset)
            raise SlugConflictError(event_data['slug']) from e
        except Exception:
            self._discard_asset(asset)
            raise

    def _discard_asset(self, asset: StoredAsset | None) -> None:
        if asset:
            self.mediafile_service.delete_asset(asset.stored_path)

    def _validate_event_data(self, validated_data: dict[str, Any]) -> dict[str, Any]:
        missing = [field for field in REQUIRED_EVENT_FIELDS if self._is_blank(validated_data.get(field))]
        if missing:
            raise MissingFieldError(missing)

        event_data = {field: validated_data[field] for field in EVENT_FIELDS if field in validated_data}
        event_data['description'] = event_data.get('description') or ''
        for field in ('name', 'slug', 'location', 'description'):
            event_data[field] = event_data[field].strip()

        quota = event_data['quota']
        if isinstance(quota, bool) or not isinstance(quota, int) or quota <= 0:
            raise EventValidationError(
                'Quota must be a positive integer',
                field_errors={'quota': ['Quota must be a positive integer.']},
                error_code='invalid_quota',
            )
        if quota > settings.MAX_TICKET_QUOTA:
            raise EventValidationError(
                f'Quota must not exceed {settings.MAX_TICKET_QUOTA}',
                field_errors={'quota': [f'Ensure quota is at most {settings.MAX_TICKET_QUOTA}.']},
                error_code='quota_too_large',
            )

        if event_data['start_time'] > event_data['end_time']:
            raise EventValidationError(
                'End time must not be before start time',
                field_errors={'end_time': ['End time must not be before start time.']},
                error_code='invalid_time_range',
            )

        if event_data['category'] not in Event.Category.values:
            raise EventValidationError(
                f"Category must be one of: {', '.join(Event.Category.values)}",
                field_errors={'category': ['Invalid category.']},
                error_code='invalid_category',
            )

        return event_data

    @staticmethod
    def _is_blank(value) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    @staticmethod
    def _design_fields(asset: StoredAsset) -> dict[str, Any]:
        return {
            'design_asset_path': asset.stored_path,
            'design_asset_size': asset.size,
            'design_asset_type': asset.media_type,
        }
