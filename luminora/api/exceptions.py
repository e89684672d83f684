import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response


logger = logging.getLogger('api.exceptions')


class ValidationError(exceptions.ValidationError):
    kind = 'validation_error'


class NotFound(exceptions.NotFound):
    kind = 'not_found'
    default_detail = 'Giveaway not found.'


class Forbidden(exceptions.PermissionDenied):
    kind = 'forbidden'


class Conflict(exceptions.APIException):
    kind = 'conflict'
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class PayloadTooLarge(exceptions.APIException):
    kind = 'payload_too_large'
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = 'Request too large.'
    default_code = 'payload_too_large'


class RateLimited(exceptions.Throttled):
    kind = 'rate_limited'
    default_detail = 'Too many requests. Please slow down.'


class Blocked(exceptions.APIException):
    kind = 'blocked'
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Access denied.'
    default_code = 'blocked'


class InternalError(exceptions.APIException):
    kind = 'internal_error'
    default_detail = 'Internal server error.'
    default_code = 'internal_error'


# DRF and Django exceptions raised outside our own taxonomy.
KINDS = (
    (exceptions.ValidationError, 'validation_error'),
    (exceptions.ParseError, 'validation_error'),
    (exceptions.UnsupportedMediaType, 'validation_error'),
    (exceptions.NotFound, 'not_found'),
    (exceptions.MethodNotAllowed, 'method_not_allowed'),
    (exceptions.Throttled, 'rate_limited'),
    (exceptions.PermissionDenied, 'forbidden'),
    (exceptions.NotAuthenticated, 'forbidden'),
    (exceptions.AuthenticationFailed, 'forbidden'),
)


def error_kind(exc):
    kind = getattr(exc, 'kind', None)
    if kind:
        return kind
    for cls, name in KINDS:
        if isinstance(exc, cls):
            return name
    return 'internal_error'


def error_message(detail):
    """
    Flatten a DRF error detail into a single human readable sentence.
    """
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = error_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f'{field}: {message}'
        return ''
    if isinstance(detail, (list, tuple)):
        return error_message(detail[0]) if detail else ''
    return str(detail)


def error_response(kind, message, status_code, headers=None):
    return Response({'error': message, 'kind': kind}, status=status_code, headers=headers)


def exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = Forbidden()
    elif isinstance(exc, exceptions.Throttled) and not isinstance(exc, RateLimited):
        exc = RateLimited(wait=exc.wait)

    if not isinstance(exc, exceptions.APIException):
        view = context.get('view')
        logger.error('Unhandled error in %s', type(view).__name__, exc_info=exc)
        exc = InternalError()

    headers = {}
    if getattr(exc, 'auth_header', None):
        headers['WWW-Authenticate'] = exc.auth_header
    if getattr(exc, 'wait', None):
        headers['Retry-After'] = '%d' % exc.wait

    return error_response(error_kind(exc), error_message(exc.detail), exc.status_code, headers)
