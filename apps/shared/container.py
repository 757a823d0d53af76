from collections.abc import Callable

from apps.events.dal.event_analytics_dal import EventAnalyticsDAL
from apps.events.dal.event_dal import EventDAL
from apps.events.services.event_service import EventService
from apps.mediafiles.dal import FileAssetRecordDAL
from apps.mediafiles.services.mediafile_service import MediafileService
from apps.participants.dal import ParticipantDAL
from apps.shared.storage.factory import get_storage_service
from apps.tickets.dal import TicketDAL
from apps.tickets.services.provisioning_service import TicketProvisioningService
from apps.tickets.services.redemption_service import TicketRedemptionService
from apps.tickets.utils.qr_utils import QRCodeGenerator


class Container:
    """
    Simple DI Container for managing service dependencies.

    Services are built per call from overridable factories, so tests can swap
    the storage backend or the QR encoder without patching modules.
    """

    def __init__(self):
        self._dal_factories = {}
        self._service_factories = {}
        self._setup_default_factories()

    def _setup_default_factories(self):
        self._dal_factories = {
            'event_dal': EventDAL,
            'analytics_dal': EventAnalyticsDAL,
            'ticket_dal': TicketDAL,
            'participant_dal': ParticipantDAL,
            'file_record_dal': FileAssetRecordDAL,
        }

        self._service_factories = {
            'storage': get_storage_service,
            'qr_encoder': QRCodeGenerator,
        }

    def mediafile_service(self, storage=None):
        return MediafileService(
            storage=storage or self._service_factories['storage'](),
            dal=self._dal_factories['file_record_dal'](),
        )

    def provisioning_service(self, storage=None, ticket_dal=None):
        return TicketProvisioningService(
            dal=ticket_dal or self._dal_factories['ticket_dal'](),
            storage=storage or self._service_factories['storage'](),
            encoder=self._service_factories['qr_encoder'](),
        )

    def event_service(self):
        """Create EventService with all dependencies injected"""
        storage = self._service_factories['storage']()
        ticket_dal = self._dal_factories['ticket_dal']()
        return EventService(
            dal=self._dal_factories['event_dal'](),
            analytics_dal=self._dal_factories['analytics_dal'](),
            ticket_dal=ticket_dal,
            mediafile_service=self.mediafile_service(storage=storage),
            provisioning_service=self.provisioning_service(storage=storage, ticket_dal=ticket_dal),
        )

    def redemption_service(self):
        return TicketRedemptionService(
            dal=self._dal_factories['ticket_dal'](),
            participant_dal=self._dal_factories['participant_dal'](),
        )

    # Override methods for testing
    def override_storage(self, factory: Callable):
        self._service_factories['storage'] = factory

    def override_qr_encoder(self, factory: Callable):
        self._service_factories['qr_encoder'] = factory

    def reset_to_defaults(self):
        """Reset all factories to defaults - useful for test cleanup"""
        self._setup_default_factories()


# Global container instance
_container = Container()


def get_container() -> Container:
    return _container


def get_event_service() -> EventService:
    return get_container().event_service()


def get_redemption_service() -> TicketRedemptionService:
    return get_container().redemption_service()
