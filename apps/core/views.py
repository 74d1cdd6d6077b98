"""
Health endpoint for load balancers and uptime checks.
"""
import logging

from django.core.cache import cache
from django.db import connection
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

HEALTHY = 'healthy'
UNHEALTHY = 'unhealthy'
CACHE_PROBE_KEY = 'steakz:health'


def probe_database():
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")


def probe_cache():
    cache.set(CACHE_PROBE_KEY, 'ok', timeout=10)
    if cache.get(CACHE_PROBE_KEY) != 'ok':
        raise RuntimeError("Unable to read test key")


PROBES = (
    ('database', 'Database', probe_database),
    ('cache', 'Cache', probe_cache),
)


class HealthCheckView(APIView):
    """
    GET /v1/health/

    Runs every probe and answers 200 when all pass, 503 otherwise. Public and
    outside the branch guard.
    """
    authentication_classes = []
    permission_classes = []

    @extend_schema(
        tags=['Health'],
        summary="Health check",
        description="Probe the database and the cache",
        responses={200: OpenApiTypes.OBJECT, 503: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        payload = {'status': HEALTHY}
        errors = []

        for key, label, probe in PROBES:
            try:
                probe()
            except Exception as exc:
                payload[key] = UNHEALTHY
                errors.append(f"{label}: {exc}")
                logger.error(f"{label} health check failed", exc_info=True)
            else:
                payload[key] = HEALTHY

        if errors:
            payload['status'] = UNHEALTHY
            payload['errors'] = errors
            return Response(payload, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(payload, status=status.HTTP_200_OK)
