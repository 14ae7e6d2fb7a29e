# efts/models.py
"""
EFT record families.

Each family draws its numbers from its own counter in ledger.sequences:

    RealEstateTrustEFT   1000+   trust account disbursements
    CommissionTrustEFT   2000+   commission trust disbursements
    GeneralAccountEFT    3000+   operating account expenses
    EFTRecord            4000+   commission receipts / plain transfers

Numbers are allocated in the same transaction that inserts the record.
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone


class EFTBase(models.Model):
    eft_number = models.PositiveIntegerField(unique=True)
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    date = models.DateField(default=timezone.localdate)
    cheque_date = models.DateField(null=True, blank=True)
    recipient = models.CharField(max_length=200, blank=True, default="")
    description = models.CharField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-eft_number"]

    def __str__(self):
        return f"EFT #{self.eft_number} {self.amount} to {self.recipient}"


class RealEstateTrustEFT(EFTBase):
    class Type(models.TextChoices):
        COMMISSION_TRANSFER = "CommissionTransfer", "Commission Transfer"
        BALANCE_OF_DEPOSIT = "BalanceOfDeposit", "Balance of Deposit"
        REFUND_OF_DEPOSIT = "RefundOfDeposit", "Refund of Deposit"
        TRUST_DEPOSIT = "TrustDeposit", "Trust Deposit"

    trade = models.ForeignKey(
        "trades.Trade",
        on_delete=models.PROTECT,
        related_name="real_estate_trust_efts",
    )
    type = models.CharField(max_length=30, choices=Type.choices)

    class Meta(EFTBase.Meta):
        verbose_name = "real estate trust EFT"


class CommissionTrustEFT(EFTBase):
    class Type(models.TextChoices):
        AGENT_COMMISSION = "AgentCommissionTransfer", "Agent Commission Transfer"
        REFUND_OF_DEPOSIT = "RefundOfDeposit", "Refund of Deposit"
        OUTSIDE_BROKER = "OutsideBrokerCommission", "Outside Broker Commission"
        OUR_BROKERAGE = "OurBrokerageCommission", "Our Brokerage Commission"

    trade = models.ForeignKey(
        "trades.Trade",
        on_delete=models.PROTECT,
        related_name="commission_trust_efts",
    )
    type = models.CharField(max_length=30, choices=Type.choices)
    agent = models.ForeignKey(
        "parties.Agent",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="commission_trust_efts",
    )
    agent_name = models.CharField(max_length=200, blank=True, default="")

    class Meta(EFTBase.Meta):
        verbose_name = "commission trust EFT"


class GeneralAccountEFT(EFTBase):
    class Type(models.TextChoices):
        AP_EXPENSE = "APExpense", "A/P Expense"
        GENERAL_EXPENSE = "GeneralExpense", "General Expense"

    vendor = models.ForeignKey(
        "parties.Vendor",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="general_account_efts",
    )
    type = models.CharField(max_length=20, choices=Type.choices)
    hst = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    due_date = models.DateField(null=True, blank=True)
    expense_category = models.CharField(max_length=100, blank=True, default="", db_index=True)
    invoice_number = models.CharField(max_length=100, blank=True, default="", db_index=True)
    eft_created = models.BooleanField(default=False)

    class Meta(EFTBase.Meta):
        verbose_name = "general account EFT"


class EFTRecord(EFTBase):
    trade = models.ForeignKey(
        "trades.Trade",
        on_delete=models.PROTECT,
        related_name="eft_records",
    )

    class Meta(EFTBase.Meta):
        verbose_name = "EFT record"
        permissions = [
            ("manage_counters", "Can reset and renumber EFT counters"),
        ]
