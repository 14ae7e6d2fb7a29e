# tests/test_efts.py
"""
Tests for EFT record families (efts/commands.py, efts/views.py).

Tests cover:
- Number allocation per family
- Ledger pairs posted per record type
- Refund validation
- General account expenses, vendor checks and updates
- Counter reset and renumbering (staff only)
"""

from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import PermissionDenied
from django.utils import timezone

from efts.commands import (
    create_commission_trust_eft,
    create_eft_transfer,
    create_real_estate_trust_eft,
    renumber_below_floor,
    reset_counter,
)
from efts.models import CommissionTrustEFT, GeneralAccountEFT, RealEstateTrustEFT
from ledger.commands import post_ledger_rows
from ledger.models import LedgerEntry
from ledger.rows import transfer_pair
from ledger.sequences import COMMISSION_TRUST_EFT, REAL_ESTATE_TRUST_EFT, peek


def D(value):
    return Decimal(str(value))


def pair_for(eft_number):
    """(debit account, credit account) posted under an EFT number."""
    rows = LedgerEntry.objects.filter(eft_number=str(eft_number))
    debit = [r.account_number for r in rows if r.debit]
    credit = [r.account_number for r in rows if r.credit]
    return debit, credit


# =============================================================================
# Real estate trust (1000+)
# =============================================================================

@pytest.mark.django_db
class TestRealEstateTrustEFT:

    def test_balance_of_deposit_posts_pair(self, api_client, trade):
        response = api_client.post("/api/real-estate-trust-eft/balance-deposit/", {
            "trade_id": trade.pk,
            "amount": "500.00",
            "recipient": "Jane Buyer",
            "cheque_date": "03/15/2024",
        }, format="json")

        assert response.status_code == 201
        assert response.json()["eft_number"] == 1000
        assert response.json()["eft"]["description"] == "Refund of Balance of Deposit"

        rows = LedgerEntry.objects.filter(eft_number="1000").order_by("id")
        assert [(r.account_number, r.debit, r.credit) for r in rows] == [
            ("21300", D("500.00"), D("0.00")),
            ("10002", D("0.00"), D("500.00")),
        ]
        assert all(r.description == "Trade #: 250, Paid to: Jane Buyer" for r in rows)
        assert all(r.cheque_date == date(2024, 3, 15) for r in rows)

    def test_commission_transfer_posts_nothing(self, actor, trade):
        result = create_real_estate_trust_eft(actor, trade, "CommissionTransfer", "11300")

        assert result.success
        assert result.data.description == "Transfer funds to Commission Trust"
        assert result.data.cheque_date == timezone.localdate()
        assert not LedgerEntry.objects.exists()

    def test_trust_deposit(self, api_client, trade):
        response = api_client.post("/api/real-estate-trust-eft/trust-deposit/", {
            "trade_id": trade.pk,
            "amount": "20000",
            "received_from": "Jane Buyer",
        }, format="json")

        assert response.status_code == 201
        eft = response.json()["eft"]
        assert eft["type"] == "TrustDeposit"
        assert eft["description"] == "Trust deposit from Jane Buyer"
        assert eft["cheque_date"] is None
        assert not LedgerEntry.objects.exists()

    @pytest.mark.parametrize("recipient", ["", "   ", "N/A"])
    def test_refund_requires_recipient(self, api_client, trade, recipient):
        response = api_client.post("/api/real-estate-trust-eft/refund-deposit/", {
            "trade_id": trade.pk,
            "amount": "500",
            "recipient": recipient,
        }, format="json")

        assert response.status_code == 400
        assert "recipient" in response.json()["detail"]
        assert peek(REAL_ESTATE_TRUST_EFT) == 1000

    def test_refund_requires_positive_amount(self, actor, trade):
        result = create_real_estate_trust_eft(actor, trade, "RefundOfDeposit", "0", recipient="Jane Buyer")
        assert not result.success
        assert "amount" in result.error

    def test_unknown_trade_is_404(self, api_client):
        response = api_client.post("/api/real-estate-trust-eft/balance-deposit/", {
            "trade_id": 999, "amount": "5",
        }, format="json")
        assert response.status_code == 404

    def test_list_by_trade_and_check_existing(self, api_client, actor, make_trade):
        trade = make_trade(trade_number=250)
        other = make_trade(trade_number=251)
        create_real_estate_trust_eft(actor, trade, "BalanceOfDeposit", "100", recipient="A")
        create_real_estate_trust_eft(actor, trade, "BalanceOfDeposit", "200", recipient="B")
        create_real_estate_trust_eft(actor, other, "BalanceOfDeposit", "300", recipient="C")

        listing = api_client.get("/api/real-estate-trust-eft/").json()
        assert [e["eft_number"] for e in listing] == [1002, 1001, 1000]

        by_trade = api_client.get(f"/api/real-estate-trust-eft/trade/{trade.pk}/").json()
        assert [e["eft_number"] for e in by_trade] == [1001, 1000]
        assert by_trade[0]["trade_number"] == 250

        check = api_client.get(
            f"/api/real-estate-trust-eft/check-existing/{trade.pk}/BalanceOfDeposit/"
        ).json()
        assert check["exists"] is True
        assert check["count"] == 2
        assert check["eft_number"] == 1001
        assert check["recipient"] == "B"

        missing = api_client.get(
            f"/api/real-estate-trust-eft/check-existing/{trade.pk}/RefundOfDeposit/"
        ).json()
        assert missing == {"exists": False, "count": 0}


# =============================================================================
# Commission trust (2000+)
# =============================================================================

@pytest.mark.django_db
class TestCommissionTrustEFT:

    @pytest.mark.parametrize("path,debit,credit", [
        ("agent-commission", "21500", "10004"),
        ("refund-deposit", "21300", "10002"),
        ("outside-broker", "21100", "10004"),
        ("our-brokerage", "10001", "10004"),
    ])
    def test_posting_pairs(self, api_client, trade, path, debit, credit):
        response = api_client.post(f"/api/commission-trust-eft/{path}/", {
            "trade_id": trade.pk,
            "amount": "1000",
            "recipient": "Payee",
        }, format="json")

        assert response.status_code == 201
        assert response.json()["eft_number"] == 2000
        assert pair_for(2000) == ([debit], [credit])

    def test_agent_commission_names_agent(self, api_client, trade, agent):
        response = api_client.post("/api/commission-trust-eft/agent-commission/", {
            "trade_id": trade.pk,
            "agent_id": agent.pk,
            "amount": "5085",
            "recipient": "Dana Reyes",
        }, format="json")

        eft = response.json()["eft"]
        assert eft["agent"] == agent.pk
        assert eft["agent_name"] == "Dana Reyes"
        assert eft["description"] == "Agent Commission Payment"

        by_agent = api_client.get(f"/api/commission-trust-eft/agent/{agent.pk}/").json()
        assert [e["eft_number"] for e in by_agent] == [2000]

    def test_unknown_agent_is_404(self, api_client, trade):
        response = api_client.post("/api/commission-trust-eft/agent-commission/", {
            "trade_id": trade.pk,
            "agent_id": 999,
            "amount": "5",
        }, format="json")
        assert response.status_code == 404

    def test_refund_validates_recipient(self, actor, trade):
        result = create_commission_trust_eft(actor, trade, "RefundOfDeposit", "100", recipient="N/A")

        assert not result.success
        assert peek(COMMISSION_TRUST_EFT) == 2000

    def test_check_existing_counts(self, api_client, actor, trade):
        for _ in range(3):
            create_commission_trust_eft(actor, trade, "OutsideBrokerCommission", "100", recipient="Acme Realty")

        check = api_client.get(
            f"/api/commission-trust-eft/check-existing/{trade.pk}/OutsideBrokerCommission/"
        ).json()
        assert check["count"] == 3
        assert check["eft_number"] == 2002


# =============================================================================
# General account (3000+)
# =============================================================================

@pytest.mark.django_db
class TestGeneralAccountEFT:

    def test_ap_expense(self, api_client, vendor):
        response = api_client.post("/api/general-account-eft/ap-expense/", {
            "vendor_id": vendor.pk,
            "recipient": "Northside Signs",
            "amount": "226.00",
            "hst": "26.00",
            "expense_category": "Signage",
            "invoice_number": "INV-88",
            "due_date": "04/30/2024",
        }, format="json")

        assert response.status_code == 201
        eft = response.json()["eft"]
        assert eft["eft_number"] == 3000
        assert eft["vendor_name"] == "Northside Signs"
        assert eft["due_date"] == "2024-04-30"
        assert eft["invoice_number"] == "INV-88"
        assert not LedgerEntry.objects.exists()

    def test_ap_expense_unknown_vendor(self, api_client):
        response = api_client.post("/api/general-account-eft/ap-expense/", {
            "vendor_id": 999,
            "recipient": "Nobody",
            "amount": "10",
        }, format="json")

        assert response.status_code == 400
        assert response.json()["detail"] == "Vendor not found."

    def test_general_expense_drops_invoice_fields(self, api_client):
        response = api_client.post("/api/general-account-eft/general-expense/", {
            "recipient": "Coffee Co",
            "amount": "40",
            "invoice_number": "X-1",
            "due_date": "2024-04-30",
            "expense_category": "Office",
        }, format="json")

        eft = response.json()["eft"]
        assert eft["type"] == "GeneralExpense"
        assert eft["invoice_number"] == ""
        assert eft["due_date"] is None

    def test_recipient_required(self, api_client):
        response = api_client.post("/api/general-account-eft/general-expense/", {"amount": "40"}, format="json")
        assert response.status_code == 400

    def test_patch_and_lookups(self, api_client, actor, vendor):
        from efts.commands import create_general_account_eft

        eft = create_general_account_eft(
            actor, "APExpense", "113", "Northside Signs",
            vendor_id=vendor.pk, expense_category="Signage", invoice_number="INV-1",
        ).data

        response = api_client.patch(f"/api/general-account-eft/{eft.pk}/", {
            "eft_created": True,
            "hst": "13.00",
            "cheque_date": "05/01/2024",
        }, format="json")
        assert response.status_code == 200
        eft.refresh_from_db()
        assert eft.eft_created is True
        assert eft.hst == D("13.00")
        assert eft.cheque_date == date(2024, 5, 1)
        assert eft.amount == D("113.00")

        assert len(api_client.get(f"/api/general-account-eft/vendor/{vendor.pk}/").json()) == 1
        assert len(api_client.get("/api/general-account-eft/category/Signage/").json()) == 1
        assert api_client.get("/api/general-account-eft/check-invoice/INV-1/").json() == {
            "exists": True, "eft_number": 3000,
        }
        assert api_client.get("/api/general-account-eft/check-invoice/INV-2/").json() == {"exists": False}

        with_efts = api_client.get(f"/api/vendors/{vendor.pk}/with-efts/").json()
        assert [e["eft_number"] for e in with_efts["general_account_efts"]] == [3000]


# =============================================================================
# Plain EFTs (4000+)
# =============================================================================

@pytest.mark.django_db
class TestPlainEFT:

    def test_next_number_is_a_peek(self, api_client):
        assert api_client.get("/api/eft/next-number/").json() == {"eft_number": 4000}
        assert api_client.get("/api/eft/next-number/").json() == {"eft_number": 4000}

    def test_create_record_posts_nothing(self, api_client, trade):
        response = api_client.post("/api/eft/", {"trade_id": trade.pk, "amount": "10"}, format="json")

        assert response.status_code == 201
        assert response.json()["eft_number"] == 4000
        assert api_client.get("/api/eft/next-number/").json() == {"eft_number": 4001}
        assert not LedgerEntry.objects.exists()

    def test_transfer_posts_trust_to_commission_trust(self, api_client, trade):
        response = api_client.post("/api/eft/transfer/", {
            "trade_id": trade.pk,
            "amount": "11300",
            "recipient": "Commission Trust",
        }, format="json")

        assert response.status_code == 201
        assert pair_for(4000) == (["10004"], ["10002"])

    def test_transfer_rejects_zero(self, actor, trade):
        result = create_eft_transfer(actor, trade, "0")
        assert not result.success


# =============================================================================
# Counter maintenance
# =============================================================================

@pytest.mark.django_db
class TestCounterMaintenance:

    def test_reset_counter_after_records_removed(self, api_client, actor, trade):
        create_real_estate_trust_eft(actor, trade, "CommissionTransfer", "10")
        create_real_estate_trust_eft(actor, trade, "CommissionTransfer", "10")
        RealEstateTrustEFT.objects.all().delete()

        response = api_client.post("/api/real-estate-trust-eft/reset-counter/")

        assert response.status_code == 200
        assert response.json()["next_eft_number"] == 1000
        assert peek(REAL_ESTATE_TRUST_EFT) == 1000

        result = create_real_estate_trust_eft(actor, trade, "CommissionTransfer", "10")
        assert result.data.eft_number == 1000

    def test_reset_refused_while_numbers_in_use(self, api_client, trade):
        body = {"trade_id": trade.pk, "amount": "500.00", "recipient": "Jane Buyer"}
        api_client.post("/api/real-estate-trust-eft/balance-deposit/", body, format="json")

        response = api_client.post("/api/real-estate-trust-eft/reset-counter/")

        assert response.status_code == 400
        assert "migrate" in response.json()["detail"]
        assert peek(REAL_ESTATE_TRUST_EFT) == 1001

        response = api_client.post("/api/real-estate-trust-eft/balance-deposit/", body, format="json")
        assert response.status_code == 201
        assert response.json()["eft_number"] == 1001

    def test_reset_ignores_legacy_numbers_below_floor(self, actor, trade):
        RealEstateTrustEFT.objects.create(
            eft_number=7, trade=trade, type="BalanceOfDeposit", amount=D("100"), recipient="Old",
        )
        assert reset_counter(actor, "real-estate-trust").success

    def test_reset_requires_permission(self, clerk_client, clerk_actor):
        assert clerk_client.post("/api/eft/reset-counter/").status_code == 403
        with pytest.raises(PermissionDenied):
            reset_counter(clerk_actor, "eft")

    def test_unknown_family(self, actor):
        assert not reset_counter(actor, "petty-cash").success

    def test_renumber_moves_legacy_records_and_ledger_rows(self, actor, trade):
        legacy = RealEstateTrustEFT.objects.create(
            eft_number=7, trade=trade, type="BalanceOfDeposit", amount=D("100"), recipient="Old",
        )
        RealEstateTrustEFT.objects.create(
            eft_number=3, trade=trade, type="BalanceOfDeposit", amount=D("50"), recipient="Older",
        )
        post_ledger_rows(
            transfer_pair("21300", "10002", D("100"), "Legacy refund", eft_number="7"),
            source="test",
        )
        # Same number on a commission trust account belongs to another family.
        post_ledger_rows(
            transfer_pair("21500", "10004", D("100"), "Unrelated", eft_number="7"),
            source="test",
        )

        result = renumber_below_floor(actor, "real-estate-trust")

        assert result.success
        assert result.data["migrated_count"] == 2
        assert result.data["next_eft_number"] == 1002
        assert list(
            RealEstateTrustEFT.objects.order_by("eft_number").values_list("recipient", "eft_number")
        ) == [("Older", 1000), ("Old", 1001)]

        legacy.refresh_from_db()
        assert legacy.eft_number == 1001
        assert sorted(LedgerEntry.objects.filter(eft_number="1001").values_list("account_number", flat=True)) == [
            "10002", "21300",
        ]
        assert LedgerEntry.objects.filter(eft_number="7").count() == 2
        assert peek(REAL_ESTATE_TRUST_EFT) == 1002

    def test_renumber_continues_after_existing_numbers(self, api_client, actor, trade):
        create_commission_trust_eft(actor, trade, "OurBrokerageCommission", "10", recipient="Office")
        CommissionTrustEFT.objects.create(
            eft_number=15, trade=trade, type="OurBrokerageCommission", amount=D("10"),
        )

        response = api_client.post("/api/commission-trust-eft/migrate/")

        assert response.status_code == 200
        assert response.json()["migrated_count"] == 1
        assert set(CommissionTrustEFT.objects.values_list("eft_number", flat=True)) == {2000, 2001}
        assert response.json()["next_eft_number"] == 2002

    def test_renumber_with_nothing_to_move(self, actor):
        result = renumber_below_floor(actor, "general-account")

        assert result.data["migrated_count"] == 0
        assert result.data["next_eft_number"] == 3000
        assert not GeneralAccountEFT.objects.exists()
