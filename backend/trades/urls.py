# trades/urls.py
"""
URL configuration for trades, mounted at /api/trades/.

Endpoints:
- / - Trade list and create
- /<pk>/ - Trade detail, update, delete
- /next-number/ - Next free trade number
- /<pk>/with-efts/ - Trade with its EFT records
- /commission/calculate/ - Commission breakdown preview
- /<trade_number>/finalize/preview/ - Rows finalize would post
- /<trade_number>/finalize/ - Finalize the trade
"""

from django.urls import path

from .views import (
    CommissionCalculateView,
    FinalizePreviewView,
    FinalizeTradeView,
    NextTradeNumberView,
    TradeDetailView,
    TradeListCreateView,
    TradeWithEftsView,
)

app_name = "trades"

urlpatterns = [
    path("", TradeListCreateView.as_view(), name="trade-list-create"),
    path("next-number/", NextTradeNumberView.as_view(), name="trade-next-number"),
    path("commission/calculate/", CommissionCalculateView.as_view(), name="commission-calculate"),
    path("<int:pk>/", TradeDetailView.as_view(), name="trade-detail"),
    path("<int:pk>/with-efts/", TradeWithEftsView.as_view(), name="trade-with-efts"),
    path("<int:trade_number>/finalize/preview/", FinalizePreviewView.as_view(), name="trade-finalize-preview"),
    path("<int:trade_number>/finalize/", FinalizeTradeView.as_view(), name="trade-finalize"),
]
