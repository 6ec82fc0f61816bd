import logging

from django.db import DatabaseError
from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def health_check(request):
    """Liveness probe for the hosting platform."""
    return JsonResponse({'status': 'ok'})


def api_exception_handler(exc, context):
    """
    Render API errors with a stable ``{error, code, status}`` body.

    Field validation errors from serializers keep DRF's per-field shape.
    Database faults are logged and reported as a generic 503 so driver
    messages never reach the caller.
    """
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, DatabaseError):
            view = context.get('view')
            logger.error(
                'Database error in %s: %s',
                view.__class__.__name__ if view else 'unknown view',
                exc,
                exc_info=exc,
            )
            return Response({
                'error': 'Service temporarily unavailable',
                'code': 'persistence_unavailable',
                'status': status.HTTP_503_SERVICE_UNAVAILABLE,
            }, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return None

    if isinstance(exc, APIException) and not isinstance(exc, ValidationError):
        code = exc.get_codes()
        response.data = {
            'error': str(exc.detail),
            'code': code if isinstance(code, str) else exc.default_code,
            'status': response.status_code,
        }

    return response


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'code': 'not_found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'code': 'server_error',
        'status': 500
    }, status=500)
