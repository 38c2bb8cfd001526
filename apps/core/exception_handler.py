"""
DRF exception handler rendering every failure as the response envelope.

- ServiceError subclasses keep their own status and message.
- DRF/Django exceptions (validation, auth, 404, 405...) keep DRF's status;
  their detail is flattened into a single message.
- Anything else is logged with its traceback and surfaced as a generic 500.
"""

import logging

from rest_framework.views import exception_handler

from .exceptions import ServiceError
from .responses import build_envelope, error_response

logger = logging.getLogger(__name__)

NON_FIELD_KEYS = ('detail', 'non_field_errors')


def flatten_detail(detail) -> str:
    """Turn DRF error detail (str, list or nested dict) into one readable message."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = flatten_detail(value)
            parts.append(message if field in NON_FIELD_KEYS else f'{field}: {message}')
        return '; '.join(parts)
    if isinstance(detail, (list, tuple)):
        return ' '.join(flatten_detail(item) for item in detail)
    return str(detail)


def envelope_exception_handler(exc, context):
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else 'unknown view'

    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.error('%s failed in %s: %s', type(exc).__name__, view_name, exc.message)
        return error_response(exc.message, exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        response.data = build_envelope(
            status_code=response.status_code,
            success=False,
            error_message=flatten_detail(response.data),
        )
        return response

    logger.error('Unhandled error in %s', view_name, exc_info=exc)
    return error_response('Internal server error', 500)
