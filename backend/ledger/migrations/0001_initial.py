"""
Initial migration for ledger app.

Creates:
- LedgerEntry: general ledger rows
- Sequence: EFT and journal entry counters
- ReconciliationSettings / ClearedTransaction: bank reconciliation state
"""
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("account_number", models.CharField(db_index=True, max_length=10)),
                ("account_name", models.CharField(max_length=100)),
                ("debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("description", models.CharField(max_length=500)),
                ("eft_number", models.CharField(blank=True, db_index=True, default="", max_length=20)),
                ("ap_number", models.CharField(blank=True, default="", max_length=20)),
                ("type", models.CharField(blank=True, default="", max_length=50)),
                ("reference", models.CharField(blank=True, default="", max_length=50)),
                ("date", models.DateField(blank=True, null=True)),
                ("cheque_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["created_at", "id"],
                "verbose_name_plural": "ledger entries",
                "permissions": [
                    ("post_journal_entry", "Can post manual journal entries"),
                    ("clear_ledger", "Can delete every ledger row"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Sequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True)),
                ("last_value", models.IntegerField()),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ReconciliationSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("account_number", models.CharField(max_length=10)),
                ("from_date", models.DateField()),
                ("to_date", models.DateField()),
                ("statement_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "reconciliation settings",
            },
        ),
        migrations.AddConstraint(
            model_name="reconciliationsettings",
            constraint=models.UniqueConstraint(
                fields=("account_number", "from_date", "to_date"),
                name="uniq_reconciliation_period",
            ),
        ),
        migrations.CreateModel(
            name="ClearedTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cleared_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("cleared_by", models.CharField(default="user", max_length=150)),
                (
                    "ledger_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="clearances",
                        to="ledger.ledgerentry",
                    ),
                ),
                (
                    "settings",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cleared_transactions",
                        to="ledger.reconciliationsettings",
                    ),
                ),
            ],
            options={
                "ordering": ["cleared_at", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="clearedtransaction",
            constraint=models.UniqueConstraint(
                fields=("settings", "ledger_entry"),
                name="uniq_cleared_ledger_entry",
            ),
        ),
    ]
