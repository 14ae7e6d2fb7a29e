# ledger/models.py
"""
General ledger models.

LedgerEntry and Sequence are COMMAND-OWNED tables.
==================================================
Rows are written only by ledger/commands.py, ledger/sequences.py and the
trade/EFT commands that call them. Saves, deletes and bulk writes outside
``command_writes_allowed()`` raise ``RuntimeError``.

Models:
- LedgerEntry: one debit or credit line against a chart account
- Sequence: named counter for EFT and journal entry numbers
- ReconciliationSettings: statement amount for an account and period
- ClearedTransaction: a ledger row ticked off during reconciliation
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone

from ledger.write_barrier import write_context_allowed

COMMAND_CONTEXTS = {"command"}


def _guard(action: str, model_name: str) -> None:
    if not write_context_allowed(COMMAND_CONTEXTS):
        raise RuntimeError(
            f"{action} on {model_name} is only allowed inside command_writes_allowed(). "
            "Use the ledger command layer."
        )


class CommandOwnedQuerySet(models.QuerySet):
    """QuerySet whose bulk writes require a command write context."""

    def update(self, **kwargs):
        _guard("Direct update", self.model.__name__)
        return super().update(**kwargs)

    def delete(self):
        _guard("Direct delete", self.model.__name__)
        return super().delete()

    def bulk_create(self, objs, *args, **kwargs):
        _guard("Direct bulk_create", self.model.__name__)
        return super().bulk_create(objs, *args, **kwargs)


class CommandOwnedModel(models.Model):
    """Abstract base for tables only the command layer may write."""

    objects = CommandOwnedQuerySet.as_manager()

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        _guard("Direct saves", type(self).__name__)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        _guard("Direct deletes", type(self).__name__)
        return super().delete(*args, **kwargs)


class LedgerEntry(CommandOwnedModel):
    """
    A single ledger line.

    ``date`` is the posting date (finalized date for commission rows);
    ``cheque_date`` is set on rows produced by EFT disbursements.
    """

    account_number = models.CharField(max_length=10, db_index=True)
    account_name = models.CharField(max_length=100)
    debit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    credit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    description = models.CharField(max_length=500)
    eft_number = models.CharField(max_length=20, blank=True, default="", db_index=True)
    ap_number = models.CharField(max_length=20, blank=True, default="")
    type = models.CharField(max_length=50, blank=True, default="")
    reference = models.CharField(max_length=50, blank=True, default="")
    date = models.DateField(null=True, blank=True)
    cheque_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name_plural = "ledger entries"
        permissions = [
            ("post_journal_entry", "Can post manual journal entries"),
            ("clear_ledger", "Can delete every ledger row"),
        ]

    def __str__(self):
        side = f"Dr {self.debit}" if self.debit else f"Cr {self.credit}"
        return f"{self.account_number} {side} {self.description}"


class Sequence(CommandOwnedModel):
    """Last number issued for a named counter."""

    name = models.CharField(max_length=50, unique=True)
    last_value = models.IntegerField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name}={self.last_value}"


class ReconciliationSettings(models.Model):
    """Statement amount and cleared rows for one account over one period."""

    account_number = models.CharField(max_length=10)
    from_date = models.DateField()
    to_date = models.DateField()
    statement_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "reconciliation settings"
        constraints = [
            models.UniqueConstraint(
                fields=["account_number", "from_date", "to_date"],
                name="uniq_reconciliation_period",
            ),
        ]

    def __str__(self):
        return f"{self.account_number} {self.from_date}..{self.to_date}"


class ClearedTransaction(models.Model):
    settings = models.ForeignKey(
        ReconciliationSettings,
        on_delete=models.CASCADE,
        related_name="cleared_transactions",
    )
    ledger_entry = models.ForeignKey(
        LedgerEntry,
        on_delete=models.CASCADE,
        related_name="clearances",
    )
    cleared_at = models.DateTimeField(default=timezone.now)
    cleared_by = models.CharField(max_length=150, default="user")

    class Meta:
        ordering = ["cleared_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["settings", "ledger_entry"],
                name="uniq_cleared_ledger_entry",
            ),
        ]
