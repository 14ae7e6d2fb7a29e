# trades/models.py
"""
Trade models.

A Trade keeps the deal sheet sections as JSON documents (key info,
people, outside brokers, trust records, commission, conditions). Agent
commission lines are a child table so they can reference agents and be
recomputed from the commission rules whenever the trade is saved.

Writes go through trades/commands.py.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from trades.commissions import FEE_PLAN_CHOICES

TRADE_NUMBER_FLOOR = 200


class Trade(models.Model):
    trade_number = models.PositiveIntegerField(
        unique=True,
        validators=[MinValueValidator(TRADE_NUMBER_FLOOR)],
    )
    key_info = models.JSONField(default=dict, blank=True)
    people = models.JSONField(default=list, blank=True)
    outside_brokers = models.JSONField(default=list, blank=True)
    trust_records = models.JSONField(default=list, blank=True)
    commission = models.JSONField(default=dict, blank=True)
    conditions = models.JSONField(default=list, blank=True)

    is_finalized = models.BooleanField(default=False)
    fallen_thru = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-trade_number"]
        permissions = [
            ("finalize_trade", "Can finalize trades and post commission entries"),
        ]

    def __str__(self):
        return f"Trade #{self.trade_number}"

    @property
    def address(self) -> str:
        info = self.key_info or {}
        parts = [info.get("street_number"), info.get("street_name"), info.get("unit"),
                 info.get("city"), info.get("province")]
        return " ".join(str(p).strip() for p in parts if p and str(p).strip())

    @property
    def first_trust_record(self) -> dict:
        return (self.trust_records or [{}])[0] or {}


class AgentCommission(models.Model):
    """One agent's share of a trade's commission, in list order."""

    trade = models.ForeignKey(
        Trade,
        on_delete=models.CASCADE,
        related_name="agent_commissions",
    )
    position = models.PositiveSmallIntegerField(default=0)
    agent = models.ForeignKey(
        "parties.Agent",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="trade_commissions",
    )
    agent_name = models.CharField(max_length=200, blank=True, default="")
    classification = models.CharField(max_length=50, blank=True, default="")
    lead = models.CharField(max_length=50, blank=True, default="")

    award_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    percentage = models.DecimalField(max_digits=7, decimal_places=4, default=Decimal("0"))
    fee_plan = models.CharField(max_length=20, choices=FEE_PLAN_CHOICES, blank=True, default="")
    buyer_rebate_included = models.BooleanField(default=False)
    buyer_rebate_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    # Computed by trades.commissions.calculate_agent_commission
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    fees_deducted = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax_on_fees = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total_fees = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    net_commission = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["trade", "position"]

    def __str__(self):
        return f"{self.trade} - {self.agent_name or self.agent_id}"
