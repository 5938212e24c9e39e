"""
Health Check Views

Liveness and database connectivity endpoints for load balancers and
monitoring. Both are public.
"""

import logging

from django.db import connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Service for performing health checks on system components."""

    @staticmethod
    def check_database():
        """
        Check database connectivity.

        Returns:
            dict: Health status with details
        """
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            return {
                'status': 'healthy',
                'database': 'connected',
                'vendor': connection.vendor,
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                'status': 'unhealthy',
                'database': 'disconnected',
                'error': str(e),
            }


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """Basic liveness probe"""
    return Response({
        'status': 'healthy',
        'service': 'skilllink',
        'timestamp': timezone.now().isoformat(),
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def database_status(request):
    """Database connectivity probe - 503 when the database is unreachable"""
    result = HealthCheckService.check_database()
    code = status.HTTP_200_OK if result['status'] == 'healthy' else status.HTTP_503_SERVICE_UNAVAILABLE
    return Response(result, status=code)
