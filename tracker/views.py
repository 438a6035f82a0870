# tracker/views.py
import logging
import os
import time

from django.conf import settings
from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


def check_database_health():
    started = time.monotonic()
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Database health check failed: {str(e)} at {timezone.now()}")
        return {'status': 'unhealthy', 'message': str(e)}
    return {'status': 'healthy', 'latency_ms': round((time.monotonic() - started) * 1000, 2)}


class HealthView(APIView):
    """
    Liveness probe. Answers 503 when the database cannot be reached.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = []
    detailed = False

    def get(self, request):
        database = check_database_health()
        healthy = database['status'] == 'healthy'
        health = {
            'status': 'healthy' if healthy else 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'uptime': round(time.monotonic() - STARTED_AT, 3),
            'database': database,
            'version': settings.APP_VERSION,
        }
        if self.detailed:
            health.update({
                'environment': os.environ.get('DJANGO_SETTINGS_MODULE', ''),
                'pid': os.getpid(),
                'cache': settings.CACHES['default']['BACKEND'],
            })
        return Response(
            {'success': healthy, 'data': health},
            status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
