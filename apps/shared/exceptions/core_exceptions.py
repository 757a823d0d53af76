"""
Core Business Exception Hierarchy

- Clean separation between business and HTTP layers
- Exception Translation from DAL → Service → View layers
- Type-safe error handling with semantic meaning

These exceptions represent BUSINESS failures, not HTTP responses.
HTTP mapping happens in the API exception handler.
"""

import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base class for all business logic errors in the application.

    This is NOT an HTTP exception - it's a pure business domain error.
    HTTP status codes are mapped by the API exception handler.
    """

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def get_context(self) -> dict:
        """Get additional error context for logging/debugging"""
        return self.context


class ResourceNotFoundError(AppError):
    """
    Raised when a requested resource doesn't exist.

    Examples:
    - Event not found by id
    - Ticket not found by token

    HTTP Mapping: 404 NOT FOUND
    """

    pass


class ValidationError(AppError):
    """
    Raised when input data fails business validation.

    Examples:
    - Required event field missing
    - Quota is not a positive integer
    - Event ends before it starts

    HTTP Mapping: 400 BAD REQUEST
    """

    def __init__(self, message: str, field_errors: dict = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_errors = field_errors or {}


class MissingFieldError(ValidationError):
    """Raised when required fields are absent; ``missing_fields`` lists them."""

    def __init__(self, missing_fields: list[str], **kwargs):
        self.missing_fields = list(missing_fields)
        message = f"Missing required fields: {', '.join(self.missing_fields)}"
        field_errors = {field: ['This field is required.'] for field in self.missing_fields}
        kwargs.setdefault('error_code', 'missing_field')
        super().__init__(message, field_errors=field_errors, **kwargs)


class ConflictError(AppError):
    """
    Raised when a unique, human-facing identifier collides with an existing one.

    Examples:
    - Event slug already taken
    - Ticket token already present in the store
    - Ticket already redeemed

    HTTP Mapping: 400 BAD REQUEST (distinct error_code) or 409 CONFLICT
    """

    pass


class ServiceUnavailableError(AppError):
    """
    Raised when external service dependencies fail.

    HTTP Mapping: 503 SERVICE UNAVAILABLE
    """

    pass


class StorageConnectivityError(ServiceUnavailableError):
    """
    Raised when the relational store cannot be reached.

    Fatal for the whole request and never retried within it.

    HTTP Mapping: 503 SERVICE UNAVAILABLE
    """

    def __init__(self, message: str = 'Database connection failed', **kwargs):
        kwargs.setdefault('error_code', 'database_unavailable')
        super().__init__(message, **kwargs)


class AssetPersistenceError(AppError):
    """
    Raised when an uploaded asset cannot be written to the file store.

    HTTP Mapping: 500 INTERNAL SERVER ERROR
    """

    def __init__(self, message: str = 'Failed to store asset', **kwargs):
        kwargs.setdefault('error_code', 'asset_persistence_failed')
        super().__init__(message, **kwargs)


class ConfigurationError(AppError):
    """
    Raised when application configuration is invalid.

    HTTP Mapping: 500 INTERNAL SERVER ERROR
    """

    pass
