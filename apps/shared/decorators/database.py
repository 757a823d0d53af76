import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.db import IntegrityError
from django.db import OperationalError
from django.db import connections

from apps.shared.exceptions import AppError
from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import StorageConnectivityError
from apps.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_MARKERS = ('unique', 'duplicate')


class DatabaseErrorHandler:
    """
    Centralized database error handling with configurable mappings.
    Preserves error context while providing consistent exception translation.
    """

    def __init__(self, operation_type: str = 'database_operation', conflict_field: str | None = None):
        self.operation_type = operation_type
        self.conflict_field = conflict_field
        self.error_mappings = {
            IntegrityError: self._handle_integrity_error,
            DjangoValidationError: self._handle_validation_error,
            OperationalError: self._handle_database_error,
            DatabaseError: self._handle_database_error,
            ObjectDoesNotExist: self._handle_not_found_error,
        }

    def _handle_integrity_error(self, error: IntegrityError, context: dict[str, Any]) -> AppError:
        """Unique violations become conflicts, other constraint failures validation errors"""
        logger.warning(
            f'Integrity constraint violation in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
        )
        if any(marker in str(error).lower() for marker in UNIQUE_VIOLATION_MARKERS):
            field = self.conflict_field or 'value'
            return ConflictError(
                message=f'{context.get("model_name", "Resource")} {field} already exists',
                error_code=f'{field}_conflict',
                context={'original_error': str(error), 'field': field, **context},
            )

        return ValidationError(
            message=f'Data integrity violation: {error!s}',
            error_code=f'{self.operation_type}_integrity_error',
            context={
                'original_error': str(error),
                'constraint_violation': True,
                **context,
            },
        )

    def _handle_validation_error(self, error: DjangoValidationError, context: dict[str, Any]) -> ValidationError:
        """Handle Django validation errors while preserving field context"""
        logger.warning(
            f'Validation error in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
        )

        field_errors = {}
        if hasattr(error, 'error_dict'):
            field_errors = {field: [str(e.message) for e in errors] for field, errors in error.error_dict.items()}
        elif hasattr(error, 'error_list'):
            field_errors = {'non_field_errors': [str(e.message) for e in error.error_list]}

        return ValidationError(
            message=f'Validation failed: {error!s}',
            field_errors=field_errors,
            error_code=f'{self.operation_type}_validation_error',
            context={'django_validation': True, **context},
        )

    def _handle_database_error(self, error: DatabaseError, context: dict[str, Any]) -> StorageConnectivityError:
        """Handle general database connectivity/infrastructure errors"""
        logger.critical(
            f'Database infrastructure error in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
            exc_info=True,
        )
        return StorageConnectivityError(
            message='Database service is temporarily unavailable',
            error_code=f'{self.operation_type}_database_error',
            context={'original_error': str(error), 'infrastructure_failure': True, **context},
        )

    def _handle_not_found_error(self, error: ObjectDoesNotExist, context: dict[str, Any]) -> ResourceNotFoundError:
        model_name = context.get('model_name', 'Resource')
        identifier = context.get('identifier', 'unknown')

        logger.debug(
            f'Resource not found in {self.operation_type}: {model_name} {identifier}',
            extra={'operation': self.operation_type, 'context': context},
        )

        return ResourceNotFoundError(
            message=f'{model_name} not found',
            error_code=f'{model_name.lower()}_not_found',
            context={'identifier': identifier, 'model': model_name},
        )

    def handle_exception(self, error: Exception, context: dict[str, Any]) -> Exception:
        """
        Handle exception based on type mapping.
        Returns appropriate business exception; business errors pass through untouched.
        """
        if isinstance(error, AppError):
            return error

        for error_type, handler in self.error_mappings.items():
            if isinstance(error, error_type):
                return handler(error, context)

        logger.error(
            f'Unexpected error in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
            exc_info=True,
        )
        return error


def handle_db_errors(
    operation_type: str = None,
    model_name: str = None,
    conflict_field: str = None,
    preserve_context: bool = True,
):
    """
    Decorator for centralized database error handling in DAL methods.

    Args:
        operation_type: Type of operation (create, read, update, delete)
        model_name: Model name for error context
        conflict_field: Field named in ConflictError when a unique constraint fails
        preserve_context: Whether to record call arguments in the error context

    Usage:
        @handle_db_errors(operation_type='create', model_name='Event', conflict_field='slug')
        def create_event(self, event_data: dict) -> Event:
            return Event.objects.create(**event_data)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> Any:
            detected_operation = operation_type
            if not detected_operation:
                method_name = func.__name__.lower()
                if method_name.startswith('create'):
                    detected_operation = 'create'
                elif method_name.startswith(('get', 'find', 'fetch', 'list')):
                    detected_operation = 'read'
                elif method_name.startswith('update'):
                    detected_operation = 'update'
                elif method_name.startswith('delete'):
                    detected_operation = 'delete'
                else:
                    detected_operation = method_name

            error_handler = DatabaseErrorHandler(detected_operation, conflict_field=conflict_field)

            context = {
                'method': func.__name__,
                'class': self.__class__.__name__,
                'operation': detected_operation,
            }
            if model_name:
                context['model_name'] = model_name

            if preserve_context and args:
                context['args_count'] = len(args)
                if isinstance(args[0], (int, str)):
                    context['identifier'] = args[0]

            try:
                return func(self, *args, **kwargs)
            except Exception as e:
                business_exception = error_handler.handle_exception(e, context)
                if business_exception is e:
                    raise
                raise business_exception from e

        return wrapper

    return decorator


def ensure_database_available(using: str = 'default') -> None:
    """
    Check the relational store before a request creates any state.

    Raises:
        StorageConnectivityError: If a connection cannot be established.
    """
    try:
        connections[using].ensure_connection()
    except DatabaseError as e:
        logger.error(f'Database connection failed: {e}', extra={'database': using})
        raise StorageConnectivityError(context={'database': using}) from e
