"""
Initial migration for efts app.

Creates the four EFT record families:
- RealEstateTrustEFT (1000+)
- CommissionTrustEFT (2000+)
- GeneralAccountEFT (3000+)
- EFTRecord (4000+)
"""
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


def eft_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("eft_number", models.PositiveIntegerField(unique=True)),
        ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
        ("date", models.DateField(default=django.utils.timezone.localdate)),
        ("cheque_date", models.DateField(blank=True, null=True)),
        ("recipient", models.CharField(blank=True, default="", max_length=200)),
        ("description", models.CharField(blank=True, default="", max_length=500)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("parties", "0001_initial"),
        ("trades", "0001_initial"),
        ("ledger", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RealEstateTrustEFT",
            fields=eft_fields() + [
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("CommissionTransfer", "Commission Transfer"),
                            ("BalanceOfDeposit", "Balance of Deposit"),
                            ("RefundOfDeposit", "Refund of Deposit"),
                            ("TrustDeposit", "Trust Deposit"),
                        ],
                        max_length=30,
                    ),
                ),
                (
                    "trade",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="real_estate_trust_efts",
                        to="trades.trade",
                    ),
                ),
            ],
            options={
                "ordering": ["-eft_number"],
                "abstract": False,
                "verbose_name": "real estate trust EFT",
            },
        ),
        migrations.CreateModel(
            name="CommissionTrustEFT",
            fields=eft_fields() + [
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("AgentCommissionTransfer", "Agent Commission Transfer"),
                            ("RefundOfDeposit", "Refund of Deposit"),
                            ("OutsideBrokerCommission", "Outside Broker Commission"),
                            ("OurBrokerageCommission", "Our Brokerage Commission"),
                        ],
                        max_length=30,
                    ),
                ),
                ("agent_name", models.CharField(blank=True, default="", max_length=200)),
                (
                    "agent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="commission_trust_efts",
                        to="parties.agent",
                    ),
                ),
                (
                    "trade",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="commission_trust_efts",
                        to="trades.trade",
                    ),
                ),
            ],
            options={
                "ordering": ["-eft_number"],
                "abstract": False,
                "verbose_name": "commission trust EFT",
            },
        ),
        migrations.CreateModel(
            name="GeneralAccountEFT",
            fields=eft_fields() + [
                (
                    "type",
                    models.CharField(
                        choices=[("APExpense", "A/P Expense"), ("GeneralExpense", "General Expense")],
                        max_length=20,
                    ),
                ),
                ("hst", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("due_date", models.DateField(blank=True, null=True)),
                ("expense_category", models.CharField(blank=True, db_index=True, default="", max_length=100)),
                ("invoice_number", models.CharField(blank=True, db_index=True, default="", max_length=100)),
                ("eft_created", models.BooleanField(default=False)),
                (
                    "vendor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="general_account_efts",
                        to="parties.vendor",
                    ),
                ),
            ],
            options={
                "ordering": ["-eft_number"],
                "abstract": False,
                "verbose_name": "general account EFT",
            },
        ),
        migrations.CreateModel(
            name="EFTRecord",
            fields=eft_fields() + [
                (
                    "trade",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="eft_records",
                        to="trades.trade",
                    ),
                ),
            ],
            options={
                "ordering": ["-eft_number"],
                "abstract": False,
                "verbose_name": "EFT record",
                "permissions": [("manage_counters", "Can reset and renumber EFT counters")],
            },
        ),
    ]
