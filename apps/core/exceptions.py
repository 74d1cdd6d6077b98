"""
Custom exception handlers and API exceptions for DRF.
"""
import logging
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import exceptions, status
from django_ratelimit.exceptions import Ratelimited
from django.http import Http404, JsonResponse

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 60


class SteakzAPIException(exceptions.APIException):
    """Base API exception carrying a stable, machine readable code."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed.'
    default_code = 'BAD_REQUEST'


class AuthenticationRequired(SteakzAPIException):
    """No or invalid credential. Never explains why."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication required.'
    default_code = 'UNAUTHENTICATED'


class RoleForbidden(SteakzAPIException):
    """Role is not in the route's allow-list."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Your role is not permitted to perform this action.'
    default_code = 'FORBIDDEN_ROLE'


class CategoryForbidden(SteakzAPIException):
    """Role is restricted away from this resource category."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Your role cannot access this resource category.'
    default_code = 'FORBIDDEN_CATEGORY'


class BranchForbidden(SteakzAPIException):
    """Resource belongs to a branch the actor may not reach."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Branch access denied.'
    default_code = 'FORBIDDEN_BRANCH'


class BranchRequired(SteakzAPIException):
    """No effective branch could be resolved for the operation."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Branch context required.'
    default_code = 'BRANCH_REQUIRED'


class ResourceNotFound(SteakzAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'NOT_FOUND'


class InsufficientInventory(SteakzAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Insufficient inventory.'
    default_code = 'INSUFFICIENT_INVENTORY'


def _error_body(code, message, request_id=None, details=None):
    body = {
        'error': {
            'code': code,
            'message': message,
        }
    }
    if details:
        body['error']['details'] = details
    if request_id:
        body['request_id'] = request_id
    return body


def _client_ip(request):
    if request is None:
        return 'unknown'
    return request.META.get('REMOTE_ADDR', 'unknown')


def ratelimit_view(request, exception):
    """
    Custom view for django-ratelimit to return 429 instead of 403.

    Used when a rate limit is exceeded outside a DRF view.
    """
    from apps.core.logging import SecurityLogger

    SecurityLogger.log_rate_limit_exceeded(
        endpoint=request.path,
        ip_address=_client_ip(request),
    )

    response = JsonResponse(
        _error_body(
            'RATE_LIMIT_EXCEEDED',
            'Rate limit exceeded. Please try again later.',
            getattr(request, 'request_id', None),
        ),
        status=429
    )
    response['Retry-After'] = str(RETRY_AFTER_SECONDS)
    return response


def custom_exception_handler(exc, context):
    """
    Custom exception handler that logs errors and returns consistent format.
    """
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    if isinstance(exc, Ratelimited):
        from apps.core.logging import SecurityLogger

        SecurityLogger.log_rate_limit_exceeded(
            endpoint=request.path if request else 'unknown',
            ip_address=_client_ip(request),
        )
        response = Response(
            _error_body('RATE_LIMIT_EXCEEDED', 'Rate limit exceeded. Please try again later.', request_id),
            status=status.HTTP_429_TOO_MANY_REQUESTS
        )
        response['Retry-After'] = str(RETRY_AFTER_SECONDS)
        return response

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is None:
        logger.error(
            f"Unhandled API exception: {exc.__class__.__name__}",
            extra={
                'request_id': request_id,
                'path': request.path if request else None,
                'method': request.method if request else None,
            },
            exc_info=exc
        )
        return Response(
            _error_body('INTERNAL_ERROR', 'An unexpected error occurred', request_id),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    log = logger.warning if response.status_code < 500 else logger.error
    log(
        f"API exception: {exc.__class__.__name__}",
        extra={
            'request_id': request_id,
            'status_code': response.status_code,
            'path': request.path if request else None,
            'method': request.method if request else None,
        }
    )

    if isinstance(exc, exceptions.ValidationError):
        response.data = _error_body('VALIDATION_ERROR', 'Invalid input.', request_id, details=exc.detail)
    elif isinstance(exc, Http404):
        response.data = _error_body('NOT_FOUND', 'Resource not found.', request_id)
    elif isinstance(exc, exceptions.APIException):
        code = exc.get_codes()
        if not isinstance(code, str):
            code = exc.default_code
        response.data = _error_body(code.upper(), str(exc.detail), request_id)

    return response
