"""
Shared exceptions for the event ticketing application.

Import business exceptions from here; HTTP translation lives in api_handler.py.
"""

from apps.shared.exceptions.core_exceptions import AppError
from apps.shared.exceptions.core_exceptions import AssetPersistenceError
from apps.shared.exceptions.core_exceptions import ConfigurationError
from apps.shared.exceptions.core_exceptions import ConflictError
from apps.shared.exceptions.core_exceptions import MissingFieldError
from apps.shared.exceptions.core_exceptions import ResourceNotFoundError
from apps.shared.exceptions.core_exceptions import ServiceUnavailableError
from apps.shared.exceptions.core_exceptions import StorageConnectivityError
from apps.shared.exceptions.core_exceptions import ValidationError

__all__ = [
    'AppError',
    'AssetPersistenceError',
    'ConfigurationError',
    'ConflictError',
    'MissingFieldError',
    'ResourceNotFoundError',
    'ServiceUnavailableError',
    'StorageConnectivityError',
    'ValidationError',
]
