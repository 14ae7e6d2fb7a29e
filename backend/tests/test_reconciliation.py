# tests/test_reconciliation.py
"""
Tests for bank reconciliation settings (ledger reconciliation commands and views).
"""

from datetime import date
from decimal import Decimal

import pytest

from ledger.commands import post_ledger_rows, save_reconciliation_settings, set_transaction_cleared
from ledger.models import ClearedTransaction, ReconciliationSettings
from ledger.reports import reconciliation_state
from ledger.rows import credit, debit

MARCH = {"fromDate": "2024-03-01", "toDate": "2024-03-31"}
URL = "/api/reconciliation/10004/"


def D(value):
    return Decimal(str(value))


@pytest.fixture
def rows(db):
    return post_ledger_rows([
        debit("10004", "1300", "Trade #: 250 - Received From: Acme Realty", date=date(2024, 3, 15)),
        credit("10004", "5085", "Trade #: 250, Paid to: Dana Reyes", cheque_date=date(2024, 3, 20)),
    ], source="test")


@pytest.mark.django_db
class TestReconciliationCommands:

    def test_unsaved_period_reads_as_nothing_cleared(self):
        state = reconciliation_state("10004", date(2024, 3, 1), date(2024, 3, 31))

        assert state["cleared_transactions"] == []
        assert state["statement_amount"] is None
        assert state["cleared_debit"] == state["cleared_credit"] == D("0.00")

    def test_save_replaces_cleared_set(self, actor, rows):
        first, second = rows
        period = dict(from_date=date(2024, 3, 1), to_date=date(2024, 3, 31))

        save_reconciliation_settings(actor, "10004", statement_amount=D("-3785"),
                                     cleared_ledger_ids=[first.pk, second.pk], **period)
        save_reconciliation_settings(actor, "10004", statement_amount=D("1300"),
                                     cleared_ledger_ids=[first.pk], **period)

        state = reconciliation_state("10004", **period)
        assert [c["ledger_id"] for c in state["cleared_transactions"]] == [first.pk]
        assert state["cleared_transactions"][0]["cleared_by"] == "manager"
        assert state["statement_amount"] == D("1300.00")
        assert state["cleared_debit"] == D("1300.00")
        assert ReconciliationSettings.objects.count() == 1

    def test_save_rejects_unknown_rows(self, actor, rows):
        result = save_reconciliation_settings(
            actor, "10004", date(2024, 3, 1), date(2024, 3, 31), cleared_ledger_ids=[999],
        )
        assert not result.success
        assert "999" in result.error

    def test_toggle_is_idempotent(self, actor, rows):
        period = ("10004", date(2024, 3, 1), date(2024, 3, 31))

        set_transaction_cleared(actor, *period, ledger_id=rows[0].pk, should_clear=True)
        set_transaction_cleared(actor, *period, ledger_id=rows[0].pk, should_clear=True)
        assert ClearedTransaction.objects.count() == 1

        set_transaction_cleared(actor, *period, ledger_id=rows[0].pk, should_clear=False)
        set_transaction_cleared(actor, *period, ledger_id=rows[0].pk, should_clear=False)
        assert ClearedTransaction.objects.count() == 0

    def test_periods_are_separate(self, actor, rows):
        set_transaction_cleared(actor, "10004", date(2024, 3, 1), date(2024, 3, 31),
                                ledger_id=rows[0].pk, should_clear=True)

        april = reconciliation_state("10004", date(2024, 4, 1), date(2024, 4, 30))
        other_account = reconciliation_state("10002", date(2024, 3, 1), date(2024, 3, 31))
        assert april["cleared_transactions"] == []
        assert other_account["cleared_transactions"] == []


@pytest.mark.django_db
class TestReconciliationAPI:

    def test_get_requires_period(self, api_client):
        assert api_client.get(URL).status_code == 400

    def test_get_empty(self, api_client):
        response = api_client.get(URL, MARCH)

        assert response.status_code == 200
        assert response.json()["cleared_transactions"] == []

    def test_post_settings(self, api_client, rows):
        response = api_client.post(URL, {
            **MARCH,
            "statement_amount": "-3785.00",
            "cleared_ledger_ids": [r.pk for r in rows],
        }, format="json")

        assert response.status_code == 200
        data = response.json()
        assert len(data["cleared_transactions"]) == 2
        assert D(data["statement_amount"]) == D("-3785.00")
        assert D(data["cleared_credit"]) == D("5085.00")

    def test_toggle_cleared(self, api_client, rows):
        body = {**MARCH, "ledger_id": rows[1].pk, "should_clear": True}

        response = api_client.put(f"{URL}cleared-transactions/", body, format="json")
        assert [c["ledger_id"] for c in response.json()["cleared_transactions"]] == [rows[1].pk]

        body["should_clear"] = False
        response = api_client.put(f"{URL}cleared-transactions/", body, format="json")
        assert response.json()["cleared_transactions"] == []

    def test_toggle_unknown_row(self, api_client):
        response = api_client.put(f"{URL}cleared-transactions/", {
            **MARCH, "ledger_id": 999, "should_clear": True,
        }, format="json")
        assert response.status_code == 400

    def test_statement_amount(self, api_client):
        response = api_client.put(f"{URL}statement-amount/", {
            "from_date": "03/01/2024",
            "to_date": "03/31/2024",
            "statement_amount": "1200.55",
        }, format="json")

        assert response.status_code == 200
        assert D(response.json()["statement_amount"]) == D("1200.55")

    def test_reversed_period_is_400(self, api_client):
        response = api_client.get(URL, {"fromDate": "2024-03-31", "toDate": "2024-03-01"})
        assert response.status_code == 400
