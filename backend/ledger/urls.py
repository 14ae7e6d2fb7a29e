# ledger/urls.py
"""
URL configuration for the general ledger, mounted at /api/.

Endpoints:
- /ledger/ - Ledger rows (list, manual create, clear all)
- /ledger/<pk>/ - Ledger row detail
- /ledger/account/<account_number>/ - Reconciliation feed for one account
- /ledger/next-reference/ - Next JE reference
- /ledger/journal-entries/ - Manual journal entries
- /ledger/eft-transfer/ - Trust to commission trust transfer
- /ledger/trial-balance/ - Trial balance (json, xlsx, csv, txt)
- /ledger/chart/ - Chart of accounts
- /reconciliation/<account_number>/ - Reconciliation settings
"""

from django.urls import path

from .views import (
    AccountFeedView,
    ChartView,
    ClearedTransactionView,
    EFTTransferView,
    JournalEntryView,
    LedgerDetailView,
    LedgerListCreateView,
    NextReferenceView,
    ReconciliationView,
    StatementAmountView,
    TrialBalanceView,
)

app_name = "ledger"

urlpatterns = [
    path("ledger/", LedgerListCreateView.as_view(), name="ledger-list-create"),
    path("ledger/account/<str:account_number>/", AccountFeedView.as_view(), name="ledger-account"),
    path("ledger/next-reference/", NextReferenceView.as_view(), name="ledger-next-reference"),
    path("ledger/journal-entries/", JournalEntryView.as_view(), name="ledger-journal-entries"),
    path("ledger/eft-transfer/", EFTTransferView.as_view(), name="ledger-eft-transfer"),
    path("ledger/trial-balance/", TrialBalanceView.as_view(), name="ledger-trial-balance"),
    path("ledger/chart/", ChartView.as_view(), name="ledger-chart"),
    path("ledger/<int:pk>/", LedgerDetailView.as_view(), name="ledger-detail"),

    path("reconciliation/<str:account_number>/", ReconciliationView.as_view(), name="reconciliation"),
    path("reconciliation/<str:account_number>/cleared-transactions/",
         ClearedTransactionView.as_view(), name="reconciliation-cleared"),
    path("reconciliation/<str:account_number>/statement-amount/",
         StatementAmountView.as_view(), name="reconciliation-statement-amount"),
]
