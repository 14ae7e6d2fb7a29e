# tests/test_ops.py
"""
Tests for operations endpoints, JWT authentication and the role seeding command.
"""

from io import StringIO

import pytest
from django.contrib.auth.models import Group
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import transaction
from rest_framework.test import APIClient

from accounts.authz import actor_for_user
from ledger.sequences import EFT, allocate


# =============================================================================
# Health & metrics
# =============================================================================

@pytest.mark.django_db
class TestHealth:

    def test_live(self, client):
        response = client.get("/_health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_ready(self, client):
        response = client.get("/_health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_full_reports_next_numbers(self, client):
        with transaction.atomic():
            allocate(EFT)

        response = client.get("/_health/full")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        sequences = data["checks"]["sequences"]
        assert sequences["next"]["eft"] == "4001"
        assert sequences["next"]["journal_entry"] == "JE1001"
        assert sequences["below_floor"] == []


@pytest.mark.django_db
class TestMetrics:

    def test_exposes_brokerage_metrics(self, client, trade):
        response = client.get("/_metrics/")

        assert response.status_code == 200
        body = response.content.decode()
        assert "brokerage_trades" in body
        assert 'brokerage_trades{state="open"} 1.0' in body
        assert "brokerage_request_duration_seconds" in body

    def test_finalize_increments_counter(self, client, actor, trade):
        from datetime import date
        from ops.metrics import trades_finalized
        from trades.commands import finalize_trade

        before = trades_finalized.labels(outcome="posted")._value.get()
        finalize_trade(actor, trade.trade_number, date(2024, 3, 1), date(2024, 3, 15))

        assert trades_finalized.labels(outcome="posted")._value.get() == before + 1


# =============================================================================
# Authentication
# =============================================================================

@pytest.mark.django_db
class TestJWT:

    def test_obtain_and_use_token(self, manager):
        anonymous = APIClient()
        response = anonymous.post("/api/auth/token/", {
            "username": "manager",
            "password": "testpass123",
        }, format="json")

        assert response.status_code == 200
        tokens = response.json()
        assert {"access", "refresh"} <= set(tokens)

        anonymous.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        assert anonymous.get("/api/trades/").status_code == 200

    def test_wrong_password(self, manager):
        response = APIClient().post("/api/auth/token/", {
            "username": "manager",
            "password": "nope",
        }, format="json")
        assert response.status_code == 401


# =============================================================================
# Role seeding
# =============================================================================

@pytest.mark.django_db
class TestSeedRoles:

    def test_creates_groups_once(self):
        out = StringIO()
        call_command("seed_roles", stdout=out)
        call_command("seed_roles", stdout=out)

        assert Group.objects.count() == 2
        manager_group = Group.objects.get(name="Brokerage Manager")
        assert manager_group.permissions.count() == 4
        assert "Created 0, updated 2" in out.getvalue()

    def test_adds_user_to_manager_group(self, clerk):
        call_command("seed_roles", user="clerk", stdout=StringIO())

        actor = actor_for_user(type(clerk).objects.get(pk=clerk.pk))
        assert actor.has("efts.manage_counters")

    def test_unknown_user(self):
        with pytest.raises(CommandError):
            call_command("seed_roles", user="ghost", stdout=StringIO())
