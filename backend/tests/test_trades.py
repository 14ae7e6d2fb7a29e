# tests/test_trades.py
"""
Tests for trade CRUD (trades/commands.py, trades/views.py).

Tests cover:
- Agent commission lines recomputed on create and update
- Trade number floor and uniqueness
- Deletion blocked by EFT records
- Commission calculator endpoint
"""

from decimal import Decimal

import pytest

from trades.commands import create_trade, delete_trade, next_trade_number, update_trade
from trades.models import AgentCommission, Trade


def D(value):
    return Decimal(str(value))


# =============================================================================
# Commands
# =============================================================================

@pytest.mark.django_db
class TestTradeCommands:

    def test_create_computes_agent_lines_from_fee_plan(self, actor, agent):
        result = create_trade(actor, 250, agent_commissions=[
            {"agent_id": agent.id, "award_amount": "10000", "percentage": "2.5"},
        ])

        assert result.success
        line = result.data.agent_commissions.get()
        assert line.fee_plan == "plan9010"
        assert line.agent_name == "Dana Reyes"
        assert line.amount == D("250.00")
        assert line.total_fees == D("28.25")
        assert line.net_commission == D("254.25")
        assert result.data.key_info["trade_number"] == 250

    def test_client_figures_are_ignored(self, actor, agent):
        result = create_trade(actor, 250, agent_commissions=[
            {
                "agent_id": agent.id,
                "award_amount": "10000",
                "percentage": "2.5",
                "net_commission": "99999",
                "fees_deducted": "1",
            },
        ])

        line = result.data.agent_commissions.get()
        assert line.fees_deducted == D("25.00")
        assert line.net_commission == D("254.25")

    def test_flexible_plan_takes_fee_from_line(self, actor, agent):
        result = create_trade(actor, 250, agent_commissions=[
            {
                "agent_id": agent.id,
                "award_amount": "10000",
                "percentage": "2.5",
                "fee_plan": "flexible",
                "fees_deducted": "100",
            },
        ])

        line = result.data.agent_commissions.get()
        assert line.fees_deducted == D("100.00")
        assert line.net_commission == D("169.50")

    def test_buyer_rebate_only_when_included(self, actor, agent):
        result = create_trade(actor, 250, agent_commissions=[
            {
                "agent_id": agent.id,
                "award_amount": "10000",
                "percentage": "2.5",
                "fee_plan": "noFee",
                "buyer_rebate_included": True,
                "buyer_rebate_amount": "50",
            },
            {
                "agent_name": "Guest Agent",
                "award_amount": "10000",
                "percentage": "2.5",
                "buyer_rebate_included": False,
                "buyer_rebate_amount": "50",
            },
        ])

        first, second = result.data.agent_commissions.order_by("position")
        assert first.amount == D("200.00")
        assert first.buyer_rebate_amount == D("50.00")
        assert second.amount == D("250.00")
        assert second.buyer_rebate_amount == D("0.00")
        assert second.agent is None

    def test_trade_number_floor(self, actor):
        result = create_trade(actor, 199)
        assert not result.success
        assert "200" in result.error

    def test_duplicate_number_rejected(self, actor, trade):
        result = create_trade(actor, trade.trade_number)
        assert not result.success
        assert result.error == "Trade number already exists."

    def test_update_replaces_agent_lines(self, actor, trade, second_agent):
        result = update_trade(actor, trade.pk, agent_commissions=[
            {"agent_id": second_agent.id, "award_amount": "10000", "percentage": "30"},
        ])

        assert result.success
        line = trade.agent_commissions.get()
        assert line.agent == second_agent
        assert line.fees_deducted == D("250.00")
        assert line.net_commission == D("3107.50")

    def test_update_keeps_agent_lines_when_not_given(self, actor, trade):
        update_trade(actor, trade.pk, conditions=[{"description": "Financing"}])

        trade.refresh_from_db()
        assert trade.conditions == [{"description": "Financing"}]
        assert trade.agent_commissions.count() == 1

    def test_renumber_checks_duplicates(self, actor, make_trade):
        first = make_trade(trade_number=250)
        make_trade(trade_number=251)

        result = update_trade(actor, first.pk, trade_number=251)
        assert not result.success

        result = update_trade(actor, first.pk, trade_number=260)
        assert result.success
        first.refresh_from_db()
        assert first.key_info["trade_number"] == 260

    def test_next_trade_number(self, make_trade):
        assert next_trade_number() == 200
        make_trade(trade_number=250)
        assert next_trade_number() == 251

    def test_delete_blocked_by_eft_records(self, actor, trade):
        from efts.commands import create_eft_record

        create_eft_record(actor, trade, amount="100")

        result = delete_trade(actor, trade.pk)
        assert not result.success
        assert Trade.objects.filter(pk=trade.pk).exists()

    def test_delete_removes_agent_lines(self, actor, trade):
        result = delete_trade(actor, trade.pk)

        assert result.success
        assert not AgentCommission.objects.exists()


# =============================================================================
# API
# =============================================================================

@pytest.mark.django_db
class TestTradeAPI:

    def test_requires_authentication(self, client):
        response = client.get("/api/trades/")
        assert response.status_code == 401

    def test_create_and_list(self, api_client, agent):
        response = api_client.post("/api/trades/", {
            "trade_number": 250,
            "key_info": {"street_number": "12", "street_name": "Elm St", "city": "Toronto"},
            "agent_commissions": [
                {"agent_id": agent.id, "award_amount": "10000", "percentage": "2.5"},
            ],
        }, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["address"] == "12 Elm St Toronto"
        assert data["agent_commissions"][0]["net_commission"] == "254.25"

        api_client.post("/api/trades/", {"trade_number": 300}, format="json")
        listing = api_client.get("/api/trades/").json()
        assert [t["trade_number"] for t in listing] == [300, 250]

    def test_create_duplicate_is_400(self, api_client, trade):
        response = api_client.post("/api/trades/", {"trade_number": trade.trade_number}, format="json")

        assert response.status_code == 400
        assert response.json()["detail"] == "Trade number already exists."

    def test_create_below_floor_is_400(self, api_client):
        response = api_client.post("/api/trades/", {"trade_number": 150}, format="json")
        assert response.status_code == 400

    def test_patch(self, api_client, trade):
        response = api_client.patch(
            f"/api/trades/{trade.pk}/",
            {"fallen_thru": True},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["fallen_thru"] is True
        assert len(response.json()["agent_commissions"]) == 1

    def test_delete(self, api_client, trade):
        response = api_client.delete(f"/api/trades/{trade.pk}/")

        assert response.status_code == 204
        assert api_client.get(f"/api/trades/{trade.pk}/").status_code == 404

    def test_next_number(self, api_client, trade):
        response = api_client.get("/api/trades/next-number/")
        assert response.json() == {"next_trade_number": 251}

    def test_with_efts(self, api_client, actor, trade):
        from efts.commands import create_real_estate_trust_eft

        create_real_estate_trust_eft(actor, trade, "TrustDeposit", "20000", recipient="Jane Buyer")

        data = api_client.get(f"/api/trades/{trade.pk}/with-efts/").json()
        assert [e["eft_number"] for e in data["real_estate_trust_efts"]] == [1000]
        assert data["commission_trust_efts"] == []
        assert data["eft_records"] == []

    def test_commission_calculate(self, api_client):
        response = api_client.post("/api/trades/commission/calculate/", {
            "award_amount": "10000",
            "percentage": "2.5",
            "fee_plan": "plan9010",
        }, format="json")

        assert response.status_code == 200
        data = response.json()
        assert D(data["tax"]) == D("32.50")
        assert D(data["net_commission"]) == D("254.25")

    def test_commission_calculate_rejects_unknown_plan(self, api_client):
        response = api_client.post("/api/trades/commission/calculate/", {
            "award_amount": "10000",
            "percentage": "2.5",
            "fee_plan": "plan9999",
        }, format="json")
        assert response.status_code == 400
