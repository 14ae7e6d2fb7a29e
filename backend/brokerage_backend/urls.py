from django.contrib import admin
from django.urls import include, path

from ops.urls import metrics_patterns

urlpatterns = [
    # Operations endpoints (no auth required)
    path("_health/", include("ops.urls")),
    path("_metrics/", include(metrics_patterns)),

    # Admin and API
    path("admin/", admin.site.urls),
    path("api/auth/", include("accounts.urls")),
    path("api/", include("parties.urls")),
    path("api/trades/", include("trades.urls")),
    path("api/", include("ledger.urls")),
    path("api/", include("efts.urls")),
    path("api-auth/", include("rest_framework.urls")),
]
