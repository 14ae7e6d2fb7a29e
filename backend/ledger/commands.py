# ledger/commands.py
"""
Command layer for the general ledger.

Commands are the single point where ledger rows and reconciliation
state change. Views call commands; commands enforce rules and write.

Pattern:
1. Validate permissions (require)
2. Validate business rules
3. Perform the operation inside command_writes_allowed()
4. Log and return CommandResult

``post_ledger_rows`` is the shared entry point other apps (trades, efts)
use to persist the rows their posting rules produce.
"""

import logging
from datetime import date as date_cls
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from accounts.authz import ActorContext, CLEAR_LEDGER, POST_JOURNAL_ENTRY, require
from ledger import chart
from ledger.models import ClearedTransaction, LedgerEntry, ReconciliationSettings
from ledger.rows import LedgerRow, ZERO, money, totals, transfer_pair
from ledger.sequences import JOURNAL_ENTRY, allocate
from ledger.write_barrier import command_writes_allowed
from ops.metrics import ledger_rows_posted

logger = logging.getLogger(__name__)


class CommandResult:
    """
    Wrapper for command results with success/failure info.

    Usage:
        result = post_journal_entry(actor, date=..., lines=[...])
        if result.success:
            entries = result.data
        else:
            error_message = result.error
    """

    def __init__(self, success: bool, data=None, error: str = None):
        self.success = success
        self.data = data
        self.error = error

    @classmethod
    def ok(cls, data=None):
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str):
        return cls(success=False, error=error)


LEDGER_FIELDS = (
    "account_number", "account_name", "debit", "credit", "description",
    "eft_number", "ap_number", "type", "reference", "date", "cheque_date",
)


# =============================================================================
# Posting
# =============================================================================

@transaction.atomic
def post_ledger_rows(rows: list[LedgerRow], *, source: str) -> list[LedgerEntry]:
    """
    Persist ledger rows in order.

    Rows with neither a debit nor a credit are dropped. An unbalanced
    batch is logged and still written; the posting rules own balance.
    """
    rows = [row for row in rows if not row.is_empty]
    if not rows:
        return []

    total_debit, total_credit = totals(rows)
    if total_debit != total_credit:
        logger.warning(
            "Posting unbalanced ledger rows",
            extra={
                "source": source,
                "total_debit": str(total_debit),
                "total_credit": str(total_credit),
                "difference": str(total_debit - total_credit),
            },
        )

    entries = []
    with command_writes_allowed():
        for row in rows:
            entry = LedgerEntry(
                account_number=row.account_number,
                account_name=row.account_name,
                debit=row.debit,
                credit=row.credit,
                description=row.description,
                eft_number=row.eft_number,
                type=row.type,
                reference=row.reference,
                date=row.date,
                cheque_date=row.cheque_date,
            )
            entry.save()
            entries.append(entry)

    ledger_rows_posted.labels(source=source).inc(len(entries))
    logger.info(
        "Posted ledger rows",
        extra={"source": source, "rows": len(entries), "total_debit": str(total_debit)},
    )
    return entries


# =============================================================================
# Manual ledger rows
# =============================================================================

@transaction.atomic
def create_ledger_entry(actor: ActorContext, **data) -> CommandResult:
    """Add a single ledger row by hand (GL adjustments)."""
    if not data.get("account_number"):
        return CommandResult.fail("Account number is required.")
    if not data.get("description"):
        return CommandResult.fail("Description is required.")

    data.setdefault("account_name", chart.account_name(data["account_number"]))
    if not data["account_name"]:
        return CommandResult.fail("Account name is required for accounts outside the chart.")

    entry = LedgerEntry(**{k: v for k, v in data.items() if k in LEDGER_FIELDS})
    with command_writes_allowed():
        entry.save()

    ledger_rows_posted.labels(source="manual").inc()
    logger.info(
        "Ledger row created",
        extra={"ledger_id": entry.id, "account": entry.account_number, "user": actor.label},
    )
    return CommandResult.ok(entry)


@transaction.atomic
def update_ledger_entry(actor: ActorContext, entry_id: int, **changes) -> CommandResult:
    try:
        entry = LedgerEntry.objects.select_for_update().get(pk=entry_id)
    except LedgerEntry.DoesNotExist:
        return CommandResult.fail("Ledger entry not found.")

    for field, value in changes.items():
        if field in LEDGER_FIELDS:
            setattr(entry, field, value)

    if "account_number" in changes and "account_name" not in changes:
        entry.account_name = chart.account_name(entry.account_number) or entry.account_name

    with command_writes_allowed():
        entry.save()

    logger.info(
        "Ledger row updated",
        extra={"ledger_id": entry.id, "fields": sorted(changes), "user": actor.label},
    )
    return CommandResult.ok(entry)


@transaction.atomic
def delete_ledger_entry(actor: ActorContext, entry_id: int) -> CommandResult:
    try:
        entry = LedgerEntry.objects.select_for_update().get(pk=entry_id)
    except LedgerEntry.DoesNotExist:
        return CommandResult.fail("Ledger entry not found.")

    with command_writes_allowed():
        entry.delete()

    logger.info("Ledger row deleted", extra={"ledger_id": entry_id, "user": actor.label})
    return CommandResult.ok({"id": entry_id})


@transaction.atomic
def clear_ledger(actor: ActorContext) -> CommandResult:
    """Delete every ledger row. Staff only."""
    require(actor, CLEAR_LEDGER)

    with command_writes_allowed():
        _, per_model = LedgerEntry.objects.all().delete()
    deleted = per_model.get("ledger.LedgerEntry", 0)

    logger.warning("Ledger cleared", extra={"deleted": deleted, "user": actor.label})
    return CommandResult.ok({"deleted": deleted})


# =============================================================================
# Journal entries
# =============================================================================

@transaction.atomic
def post_journal_entry(
    actor: ActorContext,
    date: date_cls,
    lines: list[dict],
    description: str = "",
) -> CommandResult:
    """
    Post a balanced manual journal entry under one JE reference.

    Each line is ``{"account_number", "debit", "credit", "description"?}``
    with exactly one side non-zero.
    """
    require(actor, POST_JOURNAL_ENTRY)

    if len(lines) < 2:
        return CommandResult.fail("A journal entry needs at least two lines.")

    rows = []
    for index, line in enumerate(lines, start=1):
        line_debit = money(line.get("debit"))
        line_credit = money(line.get("credit"))
        if line_debit < ZERO or line_credit < ZERO:
            return CommandResult.fail(f"Line {index}: amounts cannot be negative.")
        if (line_debit > ZERO) == (line_credit > ZERO):
            return CommandResult.fail(f"Line {index}: enter either a debit or a credit.")

        account_number = str(line.get("account_number") or "")
        name = line.get("account_name") or chart.account_name(account_number)
        if not account_number or not name:
            return CommandResult.fail(f"Line {index}: unknown account {account_number!r}.")

        line_description = line.get("description") or description
        if not line_description:
            return CommandResult.fail(f"Line {index}: description is required.")

        rows.append(LedgerRow(
            account_number=account_number,
            account_name=name,
            description=line_description,
            debit=line_debit,
            credit=line_credit,
            date=date,
            type="Journal Entry",
        ))

    total_debit, total_credit = totals(rows)
    if total_debit != total_credit:
        return CommandResult.fail(
            f"Journal entry is not balanced: debits {total_debit} != credits {total_credit}."
        )

    reference = JOURNAL_ENTRY.format(allocate(JOURNAL_ENTRY))
    for row in rows:
        row.reference = reference

    entries = post_ledger_rows(rows, source="journal_entry")
    logger.info(
        "Journal entry posted",
        extra={"reference": reference, "lines": len(entries), "user": actor.label},
    )
    return CommandResult.ok({"reference": reference, "entries": entries})


@transaction.atomic
def record_eft_transfer(
    actor: ActorContext,
    eft_number: str,
    amount: Decimal,
    description: str,
    cheque_date: date_cls | None = None,
) -> CommandResult:
    """Record a trust-to-commission-trust transfer as a 10004 Dr / 10002 Cr pair."""
    amount = money(amount)
    if not eft_number or not description or amount <= ZERO:
        return CommandResult.fail("EFT number, description and a positive amount are required.")

    rows = transfer_pair(
        chart.CASH_COMMISSION_TRUST,
        chart.CASH_TRUST,
        amount,
        description,
        eft_number=eft_number,
        cheque_date=cheque_date or timezone.localdate(),
    )
    entries = post_ledger_rows(rows, source="eft_transfer")
    logger.info(
        "EFT transfer recorded",
        extra={"eft_number": eft_number, "amount": str(amount), "user": actor.label},
    )
    return CommandResult.ok(entries)


# =============================================================================
# Reconciliation
# =============================================================================

def _period(account_number: str, from_date: date_cls, to_date: date_cls) -> ReconciliationSettings:
    settings_row, _ = ReconciliationSettings.objects.select_for_update().get_or_create(
        account_number=account_number,
        from_date=from_date,
        to_date=to_date,
    )
    return settings_row


@transaction.atomic
def save_reconciliation_settings(
    actor: ActorContext,
    account_number: str,
    from_date: date_cls,
    to_date: date_cls,
    statement_amount: Decimal | None = None,
    cleared_ledger_ids: list[int] | None = None,
) -> CommandResult:
    """Create or replace the settings for a period, including the cleared set."""
    if from_date > to_date:
        return CommandResult.fail("fromDate must be on or before toDate.")

    wanted = set(cleared_ledger_ids or [])
    found = set(LedgerEntry.objects.filter(pk__in=wanted).values_list("pk", flat=True))
    missing = wanted - found
    if missing:
        return CommandResult.fail(f"Unknown ledger entries: {sorted(missing)}.")

    settings_row = _period(account_number, from_date, to_date)
    settings_row.statement_amount = statement_amount
    settings_row.save(update_fields=["statement_amount", "updated_at"])

    settings_row.cleared_transactions.exclude(ledger_entry_id__in=wanted).delete()
    already = set(settings_row.cleared_transactions.values_list("ledger_entry_id", flat=True))
    ClearedTransaction.objects.bulk_create([
        ClearedTransaction(settings=settings_row, ledger_entry_id=pk, cleared_by=actor.label)
        for pk in sorted(wanted - already)
    ])

    logger.info(
        "Reconciliation settings saved",
        extra={"account": account_number, "cleared": len(wanted), "user": actor.label},
    )
    return CommandResult.ok(settings_row)


@transaction.atomic
def set_transaction_cleared(
    actor: ActorContext,
    account_number: str,
    from_date: date_cls,
    to_date: date_cls,
    ledger_id: int,
    should_clear: bool,
) -> CommandResult:
    """Tick or untick one ledger row. Repeating the same call changes nothing."""
    if not LedgerEntry.objects.filter(pk=ledger_id).exists():
        return CommandResult.fail("Ledger entry not found.")

    settings_row = _period(account_number, from_date, to_date)
    if should_clear:
        ClearedTransaction.objects.get_or_create(
            settings=settings_row,
            ledger_entry_id=ledger_id,
            defaults={"cleared_by": actor.label},
        )
    else:
        settings_row.cleared_transactions.filter(ledger_entry_id=ledger_id).delete()

    return CommandResult.ok(settings_row)


@transaction.atomic
def set_statement_amount(
    actor: ActorContext,
    account_number: str,
    from_date: date_cls,
    to_date: date_cls,
    statement_amount: Decimal | None,
) -> CommandResult:
    settings_row = _period(account_number, from_date, to_date)
    settings_row.statement_amount = statement_amount
    settings_row.save(update_fields=["statement_amount", "updated_at"])
    return CommandResult.ok(settings_row)
