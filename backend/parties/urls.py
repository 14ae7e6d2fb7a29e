# parties/urls.py
"""
URL configuration for counterparty records.

Endpoints:
- /agents/ - Agent CRUD, next employee number, lookup by employee number
- /vendors/ - Vendor CRUD, next vendor number, lookup, vendor EFTs
- /lawyers/ - Lawyer CRUD
- /outside-brokers/ - Outside broker CRUD
"""

from django.urls import path

from .views import (
    AgentByEmployeeNoView,
    AgentDetailView,
    AgentListCreateView,
    LawyerDetailView,
    LawyerListCreateView,
    NextEmployeeNoView,
    NextVendorNoView,
    OutsideBrokerDetailView,
    OutsideBrokerListCreateView,
    VendorByNumberView,
    VendorDetailView,
    VendorListCreateView,
    VendorWithEftsView,
)

app_name = "parties"

urlpatterns = [
    # Agents
    path("agents/", AgentListCreateView.as_view(), name="agent-list-create"),
    path("agents/next-employee-no/", NextEmployeeNoView.as_view(), name="agent-next-number"),
    path("agents/employee/<int:employee_no>/", AgentByEmployeeNoView.as_view(), name="agent-by-number"),
    path("agents/<int:pk>/", AgentDetailView.as_view(), name="agent-detail"),

    # Vendors
    path("vendors/", VendorListCreateView.as_view(), name="vendor-list-create"),
    path("vendors/next-vendor-no/", NextVendorNoView.as_view(), name="vendor-next-number"),
    path("vendors/number/<int:vendor_number>/", VendorByNumberView.as_view(), name="vendor-by-number"),
    path("vendors/<int:pk>/", VendorDetailView.as_view(), name="vendor-detail"),
    path("vendors/<int:pk>/with-efts/", VendorWithEftsView.as_view(), name="vendor-with-efts"),

    # Lawyers
    path("lawyers/", LawyerListCreateView.as_view(), name="lawyer-list-create"),
    path("lawyers/<int:pk>/", LawyerDetailView.as_view(), name="lawyer-detail"),

    # Outside brokers
    path("outside-brokers/", OutsideBrokerListCreateView.as_view(), name="outside-broker-list-create"),
    path("outside-brokers/<int:pk>/", OutsideBrokerDetailView.as_view(), name="outside-broker-detail"),
]
