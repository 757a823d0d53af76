"""
Tickets Services Package

- TicketProvisioningService: mints the ticket quota of an event
- TicketRedemptionService: consumes a token on participant registration
"""

from apps.tickets.services.provisioning_service import ProvisioningReport
from apps.tickets.services.provisioning_service import TicketOutcome
from apps.tickets.services.provisioning_service import TicketProvisioningService
from apps.tickets.services.redemption_service import TicketRedemptionService

__all__ = [
    'ProvisioningReport',
    'TicketOutcome',
    'TicketProvisioningService',
    'TicketRedemptionService',
]
