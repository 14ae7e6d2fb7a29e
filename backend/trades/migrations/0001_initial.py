"""
Initial migration for trades app.

Creates:
- Trade: deal sheet with JSON sections
- AgentCommission: per-agent commission lines
"""
from decimal import Decimal

import django.core.validators
from django.db import migrations, models
import django.db.models.deletion

FEE_PLAN_CHOICES = [
    ("", "None"),
    ("flatFee", "Flat Fee"),
    ("garnishment", "Garnishment"),
    ("plan250", "Plan 250"),
    ("plan500", "Plan 500"),
    ("plan9010", "Plan 90/10"),
    ("plan955", "Plan 95/5"),
    ("plan8515", "Plan 85/15"),
    ("plan5050", "Plan 50/50"),
    ("plan8020", "Plan 80/20"),
    ("plan150", "Plan 150"),
    ("buyerRebate", "Buyer Rebate"),
    ("noFee", "No Fee"),
    ("flexible", "Flexible"),
]


def money():
    return models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("parties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Trade",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "trade_number",
                    models.PositiveIntegerField(
                        unique=True,
                        validators=[django.core.validators.MinValueValidator(200)],
                    ),
                ),
                ("key_info", models.JSONField(blank=True, default=dict)),
                ("people", models.JSONField(blank=True, default=list)),
                ("outside_brokers", models.JSONField(blank=True, default=list)),
                ("trust_records", models.JSONField(blank=True, default=list)),
                ("commission", models.JSONField(blank=True, default=dict)),
                ("conditions", models.JSONField(blank=True, default=list)),
                ("is_finalized", models.BooleanField(default=False)),
                ("fallen_thru", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-trade_number"],
                "permissions": [
                    ("finalize_trade", "Can finalize trades and post commission entries"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AgentCommission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveSmallIntegerField(default=0)),
                ("agent_name", models.CharField(blank=True, default="", max_length=200)),
                ("classification", models.CharField(blank=True, default="", max_length=50)),
                ("lead", models.CharField(blank=True, default="", max_length=50)),
                ("award_amount", money()),
                ("percentage", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=7)),
                ("fee_plan", models.CharField(blank=True, choices=FEE_PLAN_CHOICES, default="", max_length=20)),
                ("buyer_rebate_included", models.BooleanField(default=False)),
                ("buyer_rebate_amount", money()),
                ("amount", money()),
                ("fees_deducted", money()),
                ("tax", money()),
                ("tax_on_fees", money()),
                ("total", money()),
                ("total_fees", money()),
                ("net_commission", money()),
                (
                    "agent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="trade_commissions",
                        to="parties.agent",
                    ),
                ),
                (
                    "trade",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="agent_commissions",
                        to="trades.trade",
                    ),
                ),
            ],
            options={
                "ordering": ["trade", "position"],
            },
        ),
    ]
