"""
Prometheus metrics endpoint.

Metrics exposed:
- brokerage_trades_finalized_total: Trades finalized, by outcome
- brokerage_ledger_rows_posted_total: Ledger rows written, by source
- brokerage_eft_numbers_issued_total: EFT/JE numbers allocated, by counter
- brokerage_trades: Trades on file, by state (collected on scrape)
- brokerage_request_duration_seconds: HTTP request duration histogram
"""
import logging
import re
import time

from django.db.models import Count
from django.http import HttpResponse
from django.views import View
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)


trades_finalized = Counter(
    "brokerage_trades_finalized_total",
    "Trades finalized",
    ["outcome"],
)

ledger_rows_posted = Counter(
    "brokerage_ledger_rows_posted_total",
    "Ledger rows written by the command layer",
    ["source"],
)

eft_numbers_issued = Counter(
    "brokerage_eft_numbers_issued_total",
    "Sequence numbers allocated",
    ["sequence"],
)

_trades = Gauge(
    "brokerage_trades",
    "Trades on file",
    ["state"],
)

_request_duration = Histogram(
    "brokerage_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

_active_requests = Gauge(
    "brokerage_active_requests",
    "Number of requests currently being processed",
)


def collect_metrics():
    """Refresh gauges that are read from the database."""
    from trades.models import Trade

    try:
        counts = (
            Trade.objects
            .values("is_finalized", "fallen_thru")
            .annotate(count=Count("id"))
        )
        totals = {"open": 0, "finalized": 0, "fallen_thru": 0}
        for row in counts:
            if row["fallen_thru"]:
                totals["fallen_thru"] += row["count"]
            elif row["is_finalized"]:
                totals["finalized"] += row["count"]
            else:
                totals["open"] += row["count"]
        for state, value in totals.items():
            _trades.labels(state=state).set(value)
    except Exception as e:
        logger.error("Error collecting metrics: %s", e)


class MetricsView(View):
    """
    Prometheus metrics endpoint.

    Exposes metrics in Prometheus format at /_metrics/.
    Should be protected in production (internal network only).
    """

    def get(self, request):
        collect_metrics()
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)


def _normalize_endpoint(path: str) -> str:
    # Strip IDs to keep label cardinality bounded.
    path = re.sub(r"/\d+/", "/{id}/", path)
    return path[:50]


def track_request_metrics(get_response):
    """
    Middleware to track request duration metrics.

    Add to MIDDLEWARE after AuthenticationMiddleware:
        "ops.metrics.track_request_metrics",
    """

    def middleware(request):
        start = time.time()
        _active_requests.inc()
        status = 500
        try:
            response = get_response(request)
            status = response.status_code
            return response
        finally:
            _active_requests.dec()
            _request_duration.labels(
                method=request.method,
                endpoint=_normalize_endpoint(request.path),
                status=f"{status // 100}xx",
            ).observe(time.time() - start)

    return middleware
