"""
DRF Exception Handler

- Translates business exceptions → HTTP responses
- Provides consistent error format across all APIs
- Handles both our business exceptions and DRF exceptions

Architecture Flow:
DAL (Django exceptions) → Business exceptions → API Handler → HTTP responses

No try/except in views.
"""

import logging
import traceback
from datetime import datetime
from datetime import timezone

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import PermissionDenied as DRFPermissionDenied
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.shared.exceptions import AppError
from apps.shared.exceptions import AssetPersistenceError
from apps.shared.exceptions import ConflictError
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import ServiceUnavailableError
from apps.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Exception handler with business → HTTP translation.

    Called for every exception raised in DRF views.

    Args:
        exc: The exception instance
        context: View context (request, view, args, kwargs)

    Returns:
        Response with error details and appropriate HTTP status
    """
    request = context.get('request')
    view = context.get('view')

    request_info = _extract_request_info(request, view)

    # DRF's own exceptions (serializer ValidationError, NotFound, ...) first
    response = exception_handler(exc, context)
    if response is not None:
        _log_drf_exception(exc, request_info)
        return _format_drf_response(response, exc)

    if isinstance(exc, ResourceNotFoundError):
        return _handle_resource_not_found(exc, request_info)

    elif isinstance(exc, ConflictError):
        return _handle_conflict(exc, request_info)

    elif isinstance(exc, ValidationError):
        return _handle_validation_error(exc, request_info)

    elif isinstance(exc, ServiceUnavailableError):
        return _handle_service_unavailable(exc, request_info)

    elif isinstance(exc, AssetPersistenceError):
        return _handle_asset_persistence_error(exc, request_info)

    elif isinstance(exc, AppError):
        return _handle_generic_app_error(exc, request_info)

    elif isinstance(exc, (DjangoPermissionDenied, DRFPermissionDenied)):
        return _handle_django_permission_denied(exc, request_info)

    elif isinstance(exc, Http404):
        return _handle_django_404(exc, request_info)

    return _handle_unhandled_exception(exc, request_info)


# =============================================================================
# Business Exception Handlers
# =============================================================================


def _handle_resource_not_found(exc: ResourceNotFoundError, request_info: dict) -> Response:
    """Handle resource not found errors → 404"""
    _log_business_exception(exc, request_info, level='info')

    return Response(
        {
            'error': 'Resource Not Found',
            'error_code': exc.error_code,
            'message': str(exc),
            'details': exc.get_context(),
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_404_NOT_FOUND,
    )


def _handle_conflict(exc: ConflictError, request_info: dict) -> Response:
    """Handle identifier collisions → 400 with a distinct error code"""
    _log_business_exception(exc, request_info, level='info')

    return Response(
        {
            'error': 'Conflict',
            'error_code': exc.error_code,
            'message': str(exc),
            'details': exc.get_context(),
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _handle_validation_error(exc: ValidationError, request_info: dict) -> Response:
    """Handle validation errors → 400"""
    _log_business_exception(exc, request_info, level='info')

    response_data = {
        'error': 'Validation Error',
        'error_code': exc.error_code,
        'message': str(exc),
        'timestamp': _get_timestamp(),
    }

    if exc.field_errors:
        response_data['field_errors'] = exc.field_errors

    return Response(response_data, status=status.HTTP_400_BAD_REQUEST)


def _handle_service_unavailable(exc: ServiceUnavailableError, request_info: dict) -> Response:
    """Handle service unavailable errors → 503"""
    _log_business_exception(exc, request_info, level='error')

    return Response(
        {
            'error': 'Service Unavailable',
            'error_code': exc.error_code,
            'message': str(exc),
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def _handle_asset_persistence_error(exc: AssetPersistenceError, request_info: dict) -> Response:
    """Handle file store write failures → 500"""
    _log_business_exception(exc, request_info, level='error')

    return Response(
        {
            'error': 'Asset Persistence Error',
            'error_code': exc.error_code,
            'message': str(exc),
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _handle_generic_app_error(exc: AppError, request_info: dict) -> Response:
    """Handle generic app errors → 400"""
    _log_business_exception(exc, request_info, level='error')

    return Response(
        {
            'error': 'Application Error',
            'error_code': exc.error_code,
            'message': str(exc),
            'details': exc.get_context(),
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


# =============================================================================
# Django exceptions that leak through
# =============================================================================


def _handle_django_permission_denied(exc, request_info: dict) -> Response:
    logger.warning(f'Django PermissionDenied caught in API handler: {request_info}')

    return Response(
        {
            'error': 'Permission Denied',
            'error_code': 'django_permission_denied',
            'message': 'Access denied',
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_403_FORBIDDEN,
    )


def _handle_django_404(exc, request_info: dict) -> Response:
    logger.info(f'Django Http404 caught in API handler: {request_info}')

    return Response(
        {
            'error': 'Not Found',
            'error_code': 'resource_not_found',
            'message': 'The requested resource was not found',
            'timestamp': _get_timestamp(),
        },
        status=status.HTTP_404_NOT_FOUND,
    )


def _handle_unhandled_exception(exc, request_info: dict) -> Response:
    """Handle unexpected exceptions → 500"""
    logger.error(
        f'UNHANDLED EXCEPTION in API: {type(exc).__name__}: {exc!s}\n'
        f'Request: {request_info}\n'
        f'Traceback: {traceback.format_exc()}'
    )

    return Response(
        {
            'error': 'Internal Server Error',
            'error_code': 'internal_server_error',
            'message': 'Internal server error',
            'timestamp': _get_timestamp(),
            'details': _get_debug_details(exc) if _is_debug_mode() else {},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# =============================================================================
# Utility Functions
# =============================================================================


def _format_drf_response(response: Response, exc: Exception) -> Response:
    """Format DRF responses to match our consistent error format"""
    if isinstance(response.data, dict):
        response.data['timestamp'] = _get_timestamp()
        response.data['error_code'] = getattr(exc, 'default_code', type(exc).__name__)

    return response


def _extract_request_info(request, view) -> dict:
    """Extract useful request info for logging"""
    if not request:
        return {'method': 'unknown', 'path': 'unknown'}

    return {
        'method': getattr(request, 'method', 'unknown'),
        'path': getattr(request, 'path', 'unknown'),
        'view': f'{view.__class__.__module__}.{view.__class__.__name__}' if view else 'unknown',
    }


def _log_business_exception(exc: AppError, request_info: dict, level: str = 'warning'):
    log_msg = f'Business exception in API: {type(exc).__name__}: {exc!s} | Request: {request_info}'
    getattr(logger, level, logger.warning)(log_msg)


def _log_drf_exception(exc: Exception, request_info: dict):
    logger.info(f'DRF exception in API: {type(exc).__name__}: {exc!s} | Request: {request_info}')


def _get_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _is_debug_mode() -> bool:
    return getattr(settings, 'DEBUG', False)


def _get_debug_details(exc: Exception) -> dict:
    return {
        'exception_type': type(exc).__name__,
        'exception_message': str(exc),
        'traceback': traceback.format_exc().split('\n'),
    }
