from django.http import JsonResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from apps.core.responses import build_envelope, success_response


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse(
        build_envelope(status_code=404, success=False, error_message='Not found'),
        status=404,
    )


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse(
        build_envelope(status_code=500, success=False, error_message='Internal server error'),
        status=500,
    )


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """Liveness probe."""
    return success_response({'status': 'ok'}, message='Service is healthy')
