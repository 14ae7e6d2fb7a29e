# tests/conftest.py
"""
Pytest fixtures for brokerage back-office tests.

- manager: user holding every command permission (finalize, journal
  entries, clear ledger, counter maintenance)
- clerk: authenticated user with no extra permissions
- actor / clerk_actor: ActorContext for those users
- api_client / clerk_client: DRF APIClient already authenticated
- agent, vendor: counterparty records
- make_trade: builds trades through trades.commands.create_trade
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from rest_framework.test import APIClient

from accounts.authz import actor_for_user
from parties.models import Agent, Vendor
from trades.commands import create_trade


User = get_user_model()

MANAGER_PERMISSIONS = [
    ("trades", "finalize_trade"),
    ("ledger", "post_journal_entry"),
    ("ledger", "clear_ledger"),
    ("efts", "manage_counters"),
]


# =============================================================================
# Users & actors
# =============================================================================

@pytest.fixture
def manager(db):
    """Office manager with every command permission."""
    user = User.objects.create_user(
        username="manager",
        email="manager@test.com",
        password="testpass123",
    )
    for app_label, codename in MANAGER_PERMISSIONS:
        user.user_permissions.add(
            Permission.objects.get(content_type__app_label=app_label, codename=codename)
        )
    # Permission cache is filled on first use; reload to see the grants.
    return User.objects.get(pk=user.pk)


@pytest.fixture
def clerk(db):
    """Authenticated user without command permissions."""
    return User.objects.create_user(
        username="clerk",
        email="clerk@test.com",
        password="testpass123",
    )


@pytest.fixture
def actor(manager):
    return actor_for_user(manager)


@pytest.fixture
def clerk_actor(clerk):
    return actor_for_user(clerk)


@pytest.fixture
def api_client(manager):
    client = APIClient()
    client.force_authenticate(user=manager)
    return client


@pytest.fixture
def clerk_client(clerk):
    client = APIClient()
    client.force_authenticate(user=clerk)
    return client


# =============================================================================
# Parties
# =============================================================================

@pytest.fixture
def agent(db):
    """Agent on the 90/10 plan."""
    return Agent.objects.create(
        employee_no=101,
        first_name="Dana",
        last_name="Reyes",
        fee_plan="plan9010",
    )


@pytest.fixture
def second_agent(db):
    return Agent.objects.create(
        employee_no=102,
        first_name="Sam",
        last_name="Okafor",
        fee_plan="plan250",
    )


@pytest.fixture
def vendor(db):
    return Vendor.objects.create(
        vendor_number=1,
        company_name="Northside Signs",
        street_number="40",
        street_name="King St",
        postal_code="M5H 1A1",
        city="Toronto",
        province="ON",
        phone_number="416-555-0100",
    )


# =============================================================================
# Trades
# =============================================================================

def commission_rows(listing="5000", selling="5000"):
    """Commission income rows for a trade, with 13% tax on each end."""
    return {
        "commission_income_rows": [
            {
                "end": "Listing Side",
                "listing_amount": listing,
                "listing_tax": str(Decimal(listing) * Decimal("0.13")),
            },
            {
                "end": "Selling Side",
                "selling_amount": selling,
                "selling_tax": str(Decimal(selling) * Decimal("0.13")),
            },
        ],
    }


@pytest.fixture
def make_trade(actor, agent):
    """
    Build a trade through the command layer.

    Defaults: trade 250 at 12 Elm St, one agent (award 10000 at 50% on
    the 90/10 plan, net 5085.00), listing and selling 5000 each, the
    brokerage holding a 20000 deposit.
    """

    def _make(
        trade_number=250,
        we_hold="Yes",
        deposit="20000",
        listing="5000",
        selling="5000",
        agents=None,
        **sections,
    ):
        if agents is None:
            agents = [{"agent_id": agent.id, "award_amount": "10000", "percentage": "50"}]
        sections.setdefault("key_info", {"street_number": "12", "street_name": "Elm St"})
        sections.setdefault("trust_records", [
            {"we_hold": we_hold, "amount": deposit, "received_from": "Jane Buyer", "reference": "TR-77"},
        ])
        sections.setdefault("commission", commission_rows(listing, selling))
        sections.setdefault("outside_brokers", [
            {"type": "Listing Broker", "company": "Acme Realty", "end": "Listing End"},
        ])
        result = create_trade(actor, trade_number, agent_commissions=agents, **sections)
        assert result.success, result.error
        return result.data

    return _make


@pytest.fixture
def trade(make_trade):
    return make_trade()
