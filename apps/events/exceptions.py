"""
Domain-specific business exceptions for Events app.

- These are BUSINESS exceptions, not HTTP exceptions
- HTTP mapping happens in the global exception handler
- Inherits from core business exception hierarchy
"""

from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import ValidationError


class EventNotFoundError(ResourceNotFoundError):
    """Raised when requested event does not exist."""

    def __init__(self, event_identifier=None, **kwargs):
        message = 'Event not found'
        if event_identifier is not None:
            message = f"Event '{event_identifier}' not found"
            kwargs.setdefault('context', {'event_id': event_identifier})
        super().__init__(message, error_code='event_not_found', **kwargs)


class SlugConflictError(ConflictError):
    """Raised when the requested slug belongs to another event."""

    def __init__(self, slug: str, **kwargs):
        kwargs.setdefault('context', {'slug': slug})
        super().__init__(
            'Slug already exists. Please use a different slug.',
            error_code='slug_conflict',
            **kwargs,
        )


class EventValidationError(ValidationError):
    """Raised when event data fails business validation."""

    def __init__(self, message: str = 'Event validation failed', **kwargs):
        kwargs.setdefault('error_code', 'event_validation_error')
        super().__init__(message, **kwargs)
