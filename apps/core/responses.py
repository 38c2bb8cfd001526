"""Uniform response envelope used by every API endpoint."""

from typing import Any, Optional

from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response


def build_envelope(
    *,
    status_code: int,
    success: bool,
    data: Any = None,
    success_message: Optional[str] = None,
    error_message: Optional[str] = None,
) -> dict:
    return {
        'data': data,
        'status': status_code,
        'success': success,
        'successMessage': success_message,
        'errorMessage': error_message,
        'timestamp': timezone.now().isoformat(),
    }


def success_response(data: Any = None, message: str = '', status_code: int = status.HTTP_200_OK) -> Response:
    """Wrap ``data`` in a success envelope."""
    return Response(
        build_envelope(
            status_code=status_code,
            success=True,
            data=data,
            success_message=message or None,
        ),
        status=status_code,
    )


def error_response(message: str, status_code: int, data: Any = None) -> Response:
    """Wrap an error message in a failure envelope."""
    return Response(
        build_envelope(
            status_code=status_code,
            success=False,
            data=data,
            error_message=message,
        ),
        status=status_code,
    )
