import logging
from typing import Any

from django.db import transaction

from apps.participants.dal import ParticipantDAL
from apps.participants.models import Participant
from apps.shared.exceptions import MissingFieldError
from apps.shared.exceptions import ResourceNotFoundError
from apps.tickets.dal import TicketDAL
from apps.tickets.exceptions import InvalidTokenError
from apps.tickets.exceptions import TicketAlreadyUsedError
from apps.tickets.exceptions import TicketNotFoundError
from apps.tickets.models import Ticket
from apps.tickets.utils.tokens import is_valid_token
from apps.tickets.utils.tokens import normalize_token

logger = logging.getLogger(__name__)

REQUIRED_PROFILE_FIELDS = ('name', 'email')


class TicketRedemptionService:
    """Binds a participant to a ticket by consuming its token exactly once"""

    def __init__(self, dal: TicketDAL = None, participant_dal: ParticipantDAL = None):
        self.dal = dal or TicketDAL()
        self.participant_dal = participant_dal or ParticipantDAL()

    def get_ticket(self, raw_token: str) -> Ticket:
        token = self._clean_token(raw_token)
        try:
            return self.dal.get_ticket_by_token(token)
        except ResourceNotFoundError as e:
            raise TicketNotFoundError(token) from e

    @transaction.atomic
    def redeem(self, raw_token: str, profile: dict[str, Any]) -> Participant:
        """
        Register ``profile`` against the ticket and mark the ticket verified.

        Raises:
            MissingFieldError: If name or email is absent
            TicketNotFoundError: If no ticket has the token
            TicketAlreadyUsedError: If the ticket was already redeemed
        """
        missing = [key for key in REQUIRED_PROFILE_FIELDS if not profile.get(key)]
        if missing:
            raise MissingFieldError(missing)

        token = self._clean_token(raw_token)
        try:
            ticket = self.dal.get_ticket_for_update(token)
        except ResourceNotFoundError as e:
            raise TicketNotFoundError(token) from e

        if ticket.is_verified:
            raise TicketAlreadyUsedError(token)

        participant = self.participant_dal.create_participant(ticket, profile)
        self.dal.mark_verified(ticket)

        logger.info(
            f'Ticket {token} redeemed by participant {participant.pk}',
            extra={'event_id': ticket.event_id, 'ticket_id': ticket.pk},
        )
        return participant

    def _clean_token(self, raw_token: str) -> str:
        token = normalize_token(raw_token)
        if not is_valid_token(token):
            raise InvalidTokenError(token)
        return token
