# tracker/exceptions.py
"""
Error taxonomy and the DRF exception handler that renders every failure in
the API envelope: {"success": false, "message": ..., "error": ..., "errors": [...]}.
"""
import logging

from django.conf import settings
from django.db import IntegrityError
from django.utils import timezone
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidOperation(exceptions.APIException):
    """The request is well-formed but breaks a domain rule."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid operation.'
    default_code = 'invalid_operation'


class InvalidCredentials(exceptions.AuthenticationFailed):
    default_detail = 'Invalid email or password.'
    default_code = 'invalid_credentials'


class AccessDenied(exceptions.PermissionDenied):
    default_detail = 'Access denied: insufficient permissions.'
    default_code = 'access_denied'


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


def validation_issues(detail, prefix=''):
    """Flatten DRF's nested error detail into a list of {field, message}."""
    issues = []
    if isinstance(detail, dict):
        for field, value in detail.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            if field == 'non_field_errors':
                name = prefix or 'non_field_errors'
            issues.extend(validation_issues(value, name))
    elif isinstance(detail, list):
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                issues.extend(validation_issues(value, f"{prefix}[{index}]"))
            else:
                issues.append({'field': prefix or None, 'message': str(value)})
    else:
        issues.append({'field': prefix or None, 'message': str(detail)})
    return issues


def _message(exc):
    detail = exc.detail
    if isinstance(detail, (dict, list)):
        issues = validation_issues(detail)
        if len(issues) == 1 and not isinstance(exc, exceptions.ValidationError):
            return issues[0]['message']
        return 'Validation failed'
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error translated to conflict: {str(exc)} at {timezone.now()}")
        exc = Conflict('Resource conflicts with existing data.')

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'} at {timezone.now()}")
        body = {
            'success': False,
            'message': 'Internal server error',
            'error': str(exc) if settings.DEBUG else 'internal_error',
        }
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {
        'success': False,
        'message': _message(exc),
        'error': exc.get_codes() if isinstance(exc.get_codes(), str) else getattr(exc, 'default_code', 'error'),
    }
    if isinstance(exc, exceptions.ValidationError):
        body['errors'] = validation_issues(exc.detail)
    if isinstance(exc, exceptions.Throttled):
        body['retry_after'] = exc.wait
    response.data = body
    return response
