# efts/urls.py
"""
URL configuration for EFT records.

Endpoints:
- /real-estate-trust-eft/ - Trust account EFTs (1000+)
- /commission-trust-eft/ - Commission trust EFTs (2000+)
- /general-account-eft/ - Operating account expenses (3000+)
- /eft/ - Plain EFTs and trust transfers (4000+)

Each family has reset-counter/ and migrate/ for staff.
"""

from django.urls import path

from .models import CommissionTrustEFT, GeneralAccountEFT, RealEstateTrustEFT
from .views import (
    CheckExistingView,
    CheckInvoiceView,
    CommissionTrustEFTByAgentView,
    CommissionTrustEFTByTradeView,
    CommissionTrustEFTCreateView,
    CommissionTrustEFTListView,
    EFTRecordListCreateView,
    EFTTransferView,
    GeneralAccountEFTByCategoryView,
    GeneralAccountEFTByVendorView,
    GeneralAccountEFTCreateView,
    GeneralAccountEFTDetailView,
    GeneralAccountEFTListView,
    MigrateCounterView,
    NextEFTNumberView,
    RealEstateTrustEFTByTradeView,
    RealEstateTrustEFTCreateView,
    RealEstateTrustEFTListView,
    ResetCounterView,
    TrustDepositCreateView,
)

app_name = "efts"


def counter_patterns(prefix, family):
    return [
        path(f"{prefix}/reset-counter/", ResetCounterView.as_view(family=family),
             name=f"{family}-reset-counter"),
        path(f"{prefix}/migrate/", MigrateCounterView.as_view(family=family),
             name=f"{family}-migrate"),
    ]


RE = RealEstateTrustEFT.Type
CT = CommissionTrustEFT.Type
GA = GeneralAccountEFT.Type

urlpatterns = [
    # Real estate trust
    path("real-estate-trust-eft/", RealEstateTrustEFTListView.as_view(), name="ret-list"),
    path("real-estate-trust-eft/commission-transfer/",
         RealEstateTrustEFTCreateView.as_view(eft_type=RE.COMMISSION_TRANSFER), name="ret-commission-transfer"),
    path("real-estate-trust-eft/balance-deposit/",
         RealEstateTrustEFTCreateView.as_view(eft_type=RE.BALANCE_OF_DEPOSIT), name="ret-balance-deposit"),
    path("real-estate-trust-eft/refund-deposit/",
         RealEstateTrustEFTCreateView.as_view(eft_type=RE.REFUND_OF_DEPOSIT), name="ret-refund-deposit"),
    path("real-estate-trust-eft/trust-deposit/", TrustDepositCreateView.as_view(), name="ret-trust-deposit"),
    path("real-estate-trust-eft/trade/<int:trade_id>/", RealEstateTrustEFTByTradeView.as_view(), name="ret-by-trade"),
    path("real-estate-trust-eft/check-existing/<int:trade_id>/<str:eft_type>/",
         CheckExistingView.as_view(model=RealEstateTrustEFT), name="ret-check-existing"),
    *counter_patterns("real-estate-trust-eft", "real-estate-trust"),

    # Commission trust
    path("commission-trust-eft/", CommissionTrustEFTListView.as_view(), name="ct-list"),
    path("commission-trust-eft/agent-commission/",
         CommissionTrustEFTCreateView.as_view(eft_type=CT.AGENT_COMMISSION), name="ct-agent-commission"),
    path("commission-trust-eft/refund-deposit/",
         CommissionTrustEFTCreateView.as_view(eft_type=CT.REFUND_OF_DEPOSIT), name="ct-refund-deposit"),
    path("commission-trust-eft/outside-broker/",
         CommissionTrustEFTCreateView.as_view(eft_type=CT.OUTSIDE_BROKER), name="ct-outside-broker"),
    path("commission-trust-eft/our-brokerage/",
         CommissionTrustEFTCreateView.as_view(eft_type=CT.OUR_BROKERAGE), name="ct-our-brokerage"),
    path("commission-trust-eft/trade/<int:trade_id>/", CommissionTrustEFTByTradeView.as_view(), name="ct-by-trade"),
    path("commission-trust-eft/agent/<int:agent_id>/", CommissionTrustEFTByAgentView.as_view(), name="ct-by-agent"),
    path("commission-trust-eft/check-existing/<int:trade_id>/<str:eft_type>/",
         CheckExistingView.as_view(model=CommissionTrustEFT), name="ct-check-existing"),
    *counter_patterns("commission-trust-eft", "commission-trust"),

    # General account
    path("general-account-eft/", GeneralAccountEFTListView.as_view(), name="ga-list"),
    path("general-account-eft/ap-expense/",
         GeneralAccountEFTCreateView.as_view(eft_type=GA.AP_EXPENSE), name="ga-ap-expense"),
    path("general-account-eft/general-expense/",
         GeneralAccountEFTCreateView.as_view(eft_type=GA.GENERAL_EXPENSE), name="ga-general-expense"),
    path("general-account-eft/vendor/<int:vendor_id>/", GeneralAccountEFTByVendorView.as_view(), name="ga-by-vendor"),
    path("general-account-eft/category/<str:category>/",
         GeneralAccountEFTByCategoryView.as_view(), name="ga-by-category"),
    path("general-account-eft/check-invoice/<str:invoice_number>/", CheckInvoiceView.as_view(), name="ga-check-invoice"),
    path("general-account-eft/<int:pk>/", GeneralAccountEFTDetailView.as_view(), name="ga-detail"),
    *counter_patterns("general-account-eft", "general-account"),

    # Plain EFTs
    path("eft/", EFTRecordListCreateView.as_view(), name="eft-list-create"),
    path("eft/next-number/", NextEFTNumberView.as_view(), name="eft-next-number"),
    path("eft/transfer/", EFTTransferView.as_view(), name="eft-transfer"),
    *counter_patterns("eft", "eft"),
]
