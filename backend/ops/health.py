"""
Health check endpoints for operations monitoring.

Checks:
- Database connectivity (all configured databases)
- Sequence counters sitting at or above their family floors

Endpoints:
- /_health/live    - liveness probe (is the process running?)
- /_health/ready   - readiness probe (can we serve traffic?)
- /_health/full    - full health report (for debugging/dashboards)
"""
import logging
import time
from typing import Dict, Any

from django.conf import settings
from django.db import connections
from django.db.utils import DatabaseError
from django.http import JsonResponse
from django.views import View

logger = logging.getLogger(__name__)


class HealthCheck:
    """Health check implementation."""

    @staticmethod
    def check_database(alias: str = "default") -> Dict[str, Any]:
        """Check database connectivity."""
        start = time.time()
        try:
            conn = connections[alias]
            conn.ensure_connection()
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            return {
                "status": "healthy",
                "alias": alias,
                "duration_ms": round((time.time() - start) * 1000, 2),
            }
        except DatabaseError as e:
            logger.warning("Database health check failed", extra={"alias": alias, "error": str(e)})
            return {
                "status": "unhealthy",
                "alias": alias,
                "error": str(e),
                "duration_ms": round((time.time() - start) * 1000, 2),
            }

    @staticmethod
    def check_all_databases() -> Dict[str, Any]:
        """Check all configured databases."""
        results = {alias: HealthCheck.check_database(alias) for alias in settings.DATABASES}
        all_healthy = all(r["status"] == "healthy" for r in results.values())
        return {
            "status": "healthy" if all_healthy else "degraded",
            "databases": results,
        }

    @staticmethod
    def check_sequences() -> Dict[str, Any]:
        """Report each counter's next number and flag any below its floor."""
        from ledger.models import Sequence
        from ledger.sequences import ALL_SEQUENCES

        try:
            stored = dict(Sequence.objects.values_list("name", "last_value"))
        except DatabaseError as e:
            return {"status": "error", "error": str(e)}

        counters = {}
        below_floor = []
        for spec in ALL_SEQUENCES:
            last_value = stored.get(spec.name)
            next_value = spec.floor if last_value is None else max(last_value + 1, spec.floor)
            counters[spec.name] = spec.format(next_value)
            if last_value is not None and last_value + 1 < spec.floor:
                below_floor.append(spec.name)

        return {
            "status": "degraded" if below_floor else "healthy",
            "next": counters,
            "below_floor": below_floor,
        }

    @staticmethod
    def get_full_health() -> Dict[str, Any]:
        """Get comprehensive health report."""
        checks = {
            "databases": HealthCheck.check_all_databases(),
            "sequences": HealthCheck.check_sequences(),
        }

        statuses = [c.get("status", "unknown") for c in checks.values()]
        if all(s == "healthy" for s in statuses):
            overall = "healthy"
        elif any(s == "unhealthy" for s in statuses):
            overall = "unhealthy"
        else:
            overall = "degraded"

        return {
            "status": overall,
            "checks": checks,
            "version": getattr(settings, "VERSION", "unknown"),
            "environment": "production" if not settings.DEBUG else "development",
        }


class LivenessView(View):
    """
    Liveness probe.

    Returns 200 if the process is running. Does not touch the database.
    """

    def get(self, request):
        return JsonResponse({"status": "alive"})


class ReadinessView(View):
    """Readiness probe: 200 when the default database answers."""

    def get(self, request):
        db_check = HealthCheck.check_database("default")

        if db_check["status"] == "healthy":
            return JsonResponse({"status": "ready", "database": db_check})
        return JsonResponse({"status": "not_ready", "database": db_check}, status=503)


class FullHealthView(View):
    """
    Full health check for debugging and dashboards.

    Should be protected in production (internal network only).
    """

    def get(self, request):
        health = HealthCheck.get_full_health()
        status_code = 200 if health["status"] == "healthy" else 503
        return JsonResponse(health, status=status_code)
