"""
Domain-specific business exceptions for the Tickets app.

HTTP mapping happens in the global exception handler.
"""

from dataclasses import dataclass

from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import ValidationError


class TicketNotFoundError(ResourceNotFoundError):
    """Raised when no ticket carries the given token."""

    def __init__(self, token: str = None, **kwargs):
        message = 'Ticket not found'
        if token:
            message = f"Ticket '{token}' not found"
        kwargs.setdefault('context', {'token': token})
        super().__init__(message, error_code='ticket_not_found', **kwargs)


class TicketAlreadyUsedError(ConflictError):
    """Raised when a token that has already been redeemed is presented again."""

    def __init__(self, token: str, **kwargs):
        kwargs.setdefault('context', {'token': token})
        super().__init__(f"Ticket '{token}' has already been used", error_code='ticket_already_used', **kwargs)


class InvalidTokenError(ValidationError):
    """Raised when a presented token is not in the ticket token format."""

    def __init__(self, token: str, **kwargs):
        super().__init__(
            'Invalid ticket token format',
            field_errors={'token': ['Invalid ticket token format.']},
            error_code='invalid_ticket_token',
            context={'token': token},
            **kwargs,
        )


class TokenMintingExhausted(ConflictError):
    """Raised when every fresh draw for a ticket collided with an existing token."""

    def __init__(self, attempts: int, **kwargs):
        super().__init__(
            f'Could not mint a unique token after {attempts} attempts',
            error_code='token_conflict',
            context={'attempts': attempts},
            **kwargs,
        )


class QRCodeEncodingError(Exception):
    """Raised by the QR encoder when a payload cannot be rendered."""


@dataclass(frozen=True)
class TicketGenerationFailure:
    """
    Tagged failure of one ticket within a provisioning batch.

    Recorded in the batch outcomes and never raised to callers.
    ``stage`` is one of ``mint``, ``encode``, ``store``, ``persist`` or ``timeout``.
    """

    stage: str
    reason: str
    error_type: str = ''

    @classmethod
    def from_exception(cls, stage: str, error: Exception) -> 'TicketGenerationFailure':
        return cls(stage=stage, reason=str(error), error_type=type(error).__name__)
