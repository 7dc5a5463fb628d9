import time

from django.conf import settings
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .services import ThemeService
from .storage import KeyValueStore

HEALTH_PROBE_KEY = "health"


class HealthCheckView(APIView):
    """
    Lightweight health endpoint for uptime checks.
    - Writes and removes a probe key in the state store
    - Returns env and simple latency
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        store = KeyValueStore()
        storage_ok = store.save(HEALTH_PROBE_KEY, {"checked_at": start})
        if storage_ok:
            storage_ok = store.load(HEALTH_PROBE_KEY) is not None
            store.delete(HEALTH_PROBE_KEY)

        duration_ms = int((time.time() - start) * 1000)

        return Response(
            {
                "status": "ok" if storage_ok else "degraded",
                "storage": storage_ok,
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": duration_ms,
            }
        )


class ThemeView(APIView):
    """
    GET  /api/core/theme/  -> current theme
    POST /api/core/theme/  -> switch between light and dark
    """

    def get(self, request):
        return Response({"theme": ThemeService().get()})

    def post(self, request):
        return Response({"theme": ThemeService().toggle()})
