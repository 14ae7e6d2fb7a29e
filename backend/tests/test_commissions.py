# tests/test_commissions.py
"""
Tests for agent commission arithmetic (trades/commissions.py).

Pure functions; no database.
"""

from decimal import Decimal

import pytest

from trades.commissions import calculate_agent_commission, fee_for_plan


def D(value):
    return Decimal(value)


class TestCalculateAgentCommission:

    def test_percentage_plan(self):
        """10000 at 2.5% on the 90/10 plan."""
        result = calculate_agent_commission(D("10000"), D("2.5"), "plan9010")

        assert result.amount == D("250.00")
        assert result.tax == D("32.50")
        assert result.total == D("282.50")
        assert result.fees_deducted == D("25.00")
        assert result.tax_on_fees == D("3.25")
        assert result.total_fees == D("28.25")
        assert result.net_commission == D("254.25")

    @pytest.mark.parametrize("plan,fee", [
        ("plan250", "250.00"),
        ("plan500", "500.00"),
        ("plan150", "150.00"),
    ])
    def test_fixed_fee_plans(self, plan, fee):
        result = calculate_agent_commission(D("100000"), D("5"), plan)

        assert result.amount == D("5000.00")
        assert result.fees_deducted == D(fee)
        assert result.tax_on_fees == (D(fee) * D("0.13")).quantize(D("0.01"))

    @pytest.mark.parametrize("plan,share", [
        ("plan9010", "0.10"),
        ("plan8515", "0.15"),
        ("plan955", "0.05"),
        ("plan5050", "0.50"),
        ("plan8020", "0.20"),
    ])
    def test_percentage_fee_plans(self, plan, share):
        result = calculate_agent_commission(D("100000"), D("5"), plan)
        assert result.fees_deducted == D("5000") * D(share)

    @pytest.mark.parametrize("plan", ["", "flatFee", "garnishment", "buyerRebate", "noFee", "unknown"])
    def test_fee_free_plans(self, plan):
        result = calculate_agent_commission(D("10000"), D("2.5"), plan)

        assert result.fees_deducted == D("0.00")
        assert result.total_fees == D("0.00")
        assert result.net_commission == result.total == D("282.50")

    def test_flexible_plan_uses_supplied_fee(self):
        result = calculate_agent_commission(D("10000"), D("2.5"), "flexible", flexible_fee=D("100"))

        assert result.fees_deducted == D("100.00")
        assert result.tax_on_fees == D("13.00")
        assert result.total_fees == D("113.00")
        assert result.net_commission == D("169.50")

    def test_flexible_plan_without_fee_is_free(self):
        result = calculate_agent_commission(D("10000"), D("2.5"), "flexible")
        assert result.fees_deducted == D("0.00")

    def test_buyer_rebate_reduces_amount_but_not_tax(self):
        """Tax stays on the full commission; the rebate comes off the amount."""
        result = calculate_agent_commission(D("10000"), D("2.5"), "", buyer_rebate=D("50"))

        assert result.amount == D("200.00")
        assert result.tax == D("32.50")
        assert result.total == D("232.50")
        assert result.net_commission == D("232.50")
        assert result.buyer_rebate == D("50.00")

    def test_buyer_rebate_with_fees(self):
        result = calculate_agent_commission(D("10000"), D("2.5"), "plan9010", buyer_rebate=D("50"))

        # Fees are taken on the commission before the rebate.
        assert result.fees_deducted == D("25.00")
        assert result.total == D("232.50")
        assert result.net_commission == D("204.25")

    def test_rounds_half_up_to_cents(self):
        result = calculate_agent_commission(D("1"), D("0.5"))
        assert result.amount == D("0.01")

        result = calculate_agent_commission(D("333.33"), D("3"))
        assert result.amount == D("10.00")
        assert result.tax == D("1.30")
        assert result.total == D("11.30")

    def test_accepts_strings_and_blanks(self):
        result = calculate_agent_commission("10000", "2.5", "plan9010", buyer_rebate="")
        assert result.net_commission == D("254.25")

        result = calculate_agent_commission(None, None)
        assert result.amount == D("0.00")
        assert result.net_commission == D("0.00")

    def test_as_dict(self):
        data = calculate_agent_commission(D("10000"), D("2.5"), "plan9010").as_dict()
        assert set(data) == {
            "amount", "tax", "total", "fees_deducted", "tax_on_fees",
            "total_fees", "net_commission", "buyer_rebate",
        }


def test_fee_for_plan_fixed_fee_ignores_amount():
    assert fee_for_plan("plan500", D("10")) == D("500")
