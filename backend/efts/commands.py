# efts/commands.py
"""
Command layer for EFT records.

Every create command allocates the family's next number inside its own
transaction, stores the record and, where the record type moves money
between ledger accounts, posts one matched Dr/Cr pair:

    description  "Trade #: N, Paid to: <recipient>"
    eft_number   the allocated number
    date         the record date
    cheque_date  the cheque date (today when omitted)

Counter maintenance (reset, renumbering legacy records below the floor)
is staff only.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import logging
from typing import Optional

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from accounts.authz import ActorContext, MANAGE_COUNTERS, require
from ledger import chart
from ledger.commands import CommandResult, post_ledger_rows
from ledger.models import LedgerEntry
from ledger.rows import ZERO, money, transfer_pair
from ledger.sequences import (
    COMMISSION_TRUST_EFT,
    EFT,
    GENERAL_ACCOUNT_EFT,
    REAL_ESTATE_TRUST_EFT,
    SequenceSpec,
    allocate,
    reset,
    sync,
)
from ledger.write_barrier import command_writes_allowed
from parties.models import Vendor
from efts.models import CommissionTrustEFT, EFTRecord, GeneralAccountEFT, RealEstateTrustEFT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostingRule:
    """Ledger pair and default description for one record type."""
    debit_account: Optional[str]
    credit_account: Optional[str]
    default_description: str

    @property
    def posts(self) -> bool:
        return bool(self.debit_account and self.credit_account)


REAL_ESTATE_TRUST_RULES = {
    RealEstateTrustEFT.Type.COMMISSION_TRANSFER: PostingRule(
        None, None, "Transfer funds to Commission Trust"),
    RealEstateTrustEFT.Type.BALANCE_OF_DEPOSIT: PostingRule(
        chart.TRUST_LIABILITY, chart.CASH_TRUST, "Refund of Balance of Deposit"),
    RealEstateTrustEFT.Type.REFUND_OF_DEPOSIT: PostingRule(
        chart.TRUST_LIABILITY, chart.CASH_TRUST, "Refund of Deposit"),
    RealEstateTrustEFT.Type.TRUST_DEPOSIT: PostingRule(
        None, None, "Trust deposit"),
}

COMMISSION_TRUST_RULES = {
    CommissionTrustEFT.Type.AGENT_COMMISSION: PostingRule(
        chart.COMMISSION_PAYABLE, chart.CASH_COMMISSION_TRUST, "Agent Commission Payment"),
    CommissionTrustEFT.Type.REFUND_OF_DEPOSIT: PostingRule(
        chart.TRUST_LIABILITY, chart.CASH_TRUST, "Transfer Refund"),
    CommissionTrustEFT.Type.OUTSIDE_BROKER: PostingRule(
        chart.AP_OTHER_BROKERS, chart.CASH_COMMISSION_TRUST, "Transfer commission to outside broker"),
    CommissionTrustEFT.Type.OUR_BROKERAGE: PostingRule(
        chart.CASH_CURRENT, chart.CASH_COMMISSION_TRUST, "Transfer Office Share"),
}

PLAIN_TRANSFER_RULE = PostingRule(chart.CASH_COMMISSION_TRUST, chart.CASH_TRUST, "EFT transfer")

REFUND_TYPES = {
    RealEstateTrustEFT.Type.REFUND_OF_DEPOSIT,
    CommissionTrustEFT.Type.REFUND_OF_DEPOSIT,
}


@dataclass(frozen=True)
class Family:
    """An EFT record family: its model, counter and the ledger accounts it posts to."""
    key: str
    model: type
    sequence: SequenceSpec
    accounts: frozenset


def _accounts(*rules: PostingRule) -> frozenset:
    return frozenset(
        acct for rule in rules for acct in (rule.debit_account, rule.credit_account) if acct
    )


FAMILIES = {
    "real-estate-trust": Family(
        "real-estate-trust", RealEstateTrustEFT, REAL_ESTATE_TRUST_EFT,
        _accounts(*REAL_ESTATE_TRUST_RULES.values()),
    ),
    "commission-trust": Family(
        "commission-trust", CommissionTrustEFT, COMMISSION_TRUST_EFT,
        _accounts(*COMMISSION_TRUST_RULES.values()),
    ),
    "general-account": Family(
        "general-account", GeneralAccountEFT, GENERAL_ACCOUNT_EFT,
        frozenset(),
    ),
    "eft": Family(
        "eft", EFTRecord, EFT,
        _accounts(PLAIN_TRANSFER_RULE) | {chart.AR_COMMISSION},
    ),
}


def paid_to_description(trade, recipient: str) -> str:
    return f"Trade #: {trade.trade_number}, Paid to: {recipient}"


def _post_pair(rule: PostingRule, record, trade, source: str):
    rows = transfer_pair(
        rule.debit_account,
        rule.credit_account,
        record.amount,
        paid_to_description(trade, record.recipient),
        eft_number=str(record.eft_number),
        date=record.date,
        cheque_date=record.cheque_date,
    )
    return post_ledger_rows(rows, source=source)


# =============================================================================
# Trade-linked EFTs (real estate trust, commission trust)
# =============================================================================

def _validate_refund(recipient: str, amount: Decimal) -> Optional[str]:
    if not recipient or not recipient.strip() or recipient.strip() == "N/A":
        return "Valid recipient is required. Please provide a recipient name."
    if amount <= ZERO:
        return "Valid amount is required. Please provide an amount greater than 0."
    return None


@transaction.atomic
def create_real_estate_trust_eft(
    actor: ActorContext,
    trade,
    type: str,
    amount,
    recipient: str = "",
    description: str = "",
    cheque_date: Optional[date] = None,
) -> CommandResult:
    """Create a real estate trust EFT (1000 family)."""
    rule = REAL_ESTATE_TRUST_RULES.get(type)
    if rule is None:
        return CommandResult.fail(f"Unknown real estate trust EFT type {type!r}.")

    amount = money(amount)
    if type in REFUND_TYPES:
        error = _validate_refund(recipient, amount)
        if error:
            return CommandResult.fail(error)

    if type == RealEstateTrustEFT.Type.TRUST_DEPOSIT:
        default_description = f"Trust deposit from {recipient}"
        cheque_date = None
    else:
        default_description = rule.default_description
        cheque_date = cheque_date or timezone.localdate()

    eft = RealEstateTrustEFT(
        eft_number=allocate(REAL_ESTATE_TRUST_EFT),
        trade=trade,
        type=type,
        amount=amount,
        recipient=recipient,
        description=description or default_description,
        date=timezone.localdate(),
        cheque_date=cheque_date,
    )
    eft.save()

    if rule.posts:
        _post_pair(rule, eft, trade, source="real_estate_trust_eft")

    logger.info(
        "Real estate trust EFT created",
        extra={
            "eft_number": eft.eft_number,
            "type": type,
            "trade_number": trade.trade_number,
            "amount": str(amount),
            "user": actor.label,
        },
    )
    return CommandResult.ok(eft)


@transaction.atomic
def create_commission_trust_eft(
    actor: ActorContext,
    trade,
    type: str,
    amount,
    recipient: str = "",
    description: str = "",
    cheque_date: Optional[date] = None,
    agent=None,
    agent_name: str = "",
) -> CommandResult:
    """Create a commission trust EFT (2000 family)."""
    rule = COMMISSION_TRUST_RULES.get(type)
    if rule is None:
        return CommandResult.fail(f"Unknown commission trust EFT type {type!r}.")

    amount = money(amount)
    if type in REFUND_TYPES:
        error = _validate_refund(recipient, amount)
        if error:
            return CommandResult.fail(error)

    eft = CommissionTrustEFT(
        eft_number=allocate(COMMISSION_TRUST_EFT),
        trade=trade,
        type=type,
        amount=amount,
        recipient=recipient,
        agent=agent,
        agent_name=agent_name or (agent.full_name if agent else ""),
        description=description or rule.default_description,
        date=timezone.localdate(),
        cheque_date=cheque_date or timezone.localdate(),
    )
    eft.save()

    _post_pair(rule, eft, trade, source="commission_trust_eft")

    logger.info(
        "Commission trust EFT created",
        extra={
            "eft_number": eft.eft_number,
            "type": type,
            "trade_number": trade.trade_number,
            "amount": str(amount),
            "user": actor.label,
        },
    )
    return CommandResult.ok(eft)


# =============================================================================
# General account EFTs
# =============================================================================

@transaction.atomic
def create_general_account_eft(
    actor: ActorContext,
    type: str,
    amount,
    recipient: str,
    vendor_id: Optional[int] = None,
    expense_category: str = "",
    description: str = "",
    invoice_number: str = "",
    hst=None,
    due_date: Optional[date] = None,
    cheque_date: Optional[date] = None,
) -> CommandResult:
    """Create an A/P or general expense EFT (3000 family). Posts no ledger rows."""
    if type not in GeneralAccountEFT.Type.values:
        return CommandResult.fail(f"Unknown general account EFT type {type!r}.")
    if not recipient:
        return CommandResult.fail("Recipient is required.")

    vendor = None
    if vendor_id and type == GeneralAccountEFT.Type.AP_EXPENSE:
        vendor = Vendor.objects.filter(pk=vendor_id).first()
        if vendor is None:
            return CommandResult.fail("Vendor not found.")

    eft = GeneralAccountEFT(
        eft_number=allocate(GENERAL_ACCOUNT_EFT),
        type=type,
        vendor=vendor,
        amount=money(amount),
        recipient=recipient,
        hst=money(hst),
        due_date=due_date if type == GeneralAccountEFT.Type.AP_EXPENSE else None,
        expense_category=expense_category or "",
        description=description or "",
        invoice_number=invoice_number if type == GeneralAccountEFT.Type.AP_EXPENSE else "",
        date=timezone.localdate(),
        cheque_date=cheque_date or timezone.localdate(),
    )
    eft.save()

    logger.info(
        "General account EFT created",
        extra={
            "eft_number": eft.eft_number,
            "type": type,
            "vendor_id": vendor.pk if vendor else None,
            "amount": str(eft.amount),
            "user": actor.label,
        },
    )
    return CommandResult.ok(eft)


GENERAL_ACCOUNT_EDITABLE = ("eft_created", "hst", "cheque_date")


@transaction.atomic
def update_general_account_eft(actor: ActorContext, eft_id: int, **changes) -> CommandResult:
    try:
        eft = GeneralAccountEFT.objects.select_for_update().get(pk=eft_id)
    except GeneralAccountEFT.DoesNotExist:
        return CommandResult.fail("EFT not found.")

    fields = [f for f in GENERAL_ACCOUNT_EDITABLE if f in changes]
    for f in fields:
        value = changes[f]
        setattr(eft, f, money(value) if f == "hst" else value)
    eft.save(update_fields=fields + ["updated_at"])

    logger.info(
        "General account EFT updated",
        extra={"eft_number": eft.eft_number, "fields": fields, "user": actor.label},
    )
    return CommandResult.ok(eft)


# =============================================================================
# Plain EFTs (4000 family)
# =============================================================================

def record_commission_receipt(trade, amount, recipient: str, on: date) -> EFTRecord:
    """
    Store the commission receipt taken at finalize.

    Runs inside the finalize transaction; the ledger rows for the receipt
    come from the finalize posting rules.
    """
    eft = EFTRecord(
        eft_number=allocate(EFT),
        trade=trade,
        amount=money(amount),
        recipient=recipient,
        description=f"Commission received from {recipient}" if recipient else "Commission received",
        date=on,
    )
    eft.save()
    return eft


@transaction.atomic
def create_eft_record(actor: ActorContext, trade, amount, recipient: str = "") -> CommandResult:
    """Allocate a plain EFT number for a trade without posting."""
    eft = EFTRecord(
        eft_number=allocate(EFT),
        trade=trade,
        amount=money(amount),
        recipient=recipient,
        date=timezone.localdate(),
    )
    eft.save()
    logger.info(
        "EFT record created",
        extra={"eft_number": eft.eft_number, "trade_number": trade.trade_number, "user": actor.label},
    )
    return CommandResult.ok(eft)


@transaction.atomic
def create_eft_transfer(actor: ActorContext, trade, amount, recipient: str = "") -> CommandResult:
    """Plain EFT moving funds from trust to commission trust (10004 Dr / 10002 Cr)."""
    amount = money(amount)
    if amount <= ZERO:
        return CommandResult.fail("Amount must be greater than zero.")

    eft = EFTRecord(
        eft_number=allocate(EFT),
        trade=trade,
        amount=amount,
        recipient=recipient,
        description=PLAIN_TRANSFER_RULE.default_description,
        date=timezone.localdate(),
    )
    eft.save()
    entries = _post_pair(PLAIN_TRANSFER_RULE, eft, trade, source="eft_transfer")

    logger.info(
        "EFT transfer created",
        extra={
            "eft_number": eft.eft_number,
            "trade_number": trade.trade_number,
            "amount": str(amount),
            "user": actor.label,
        },
    )
    return CommandResult.ok({"eft": eft, "entries": entries})


# =============================================================================
# Counter maintenance
# =============================================================================

def reset_counter(actor: ActorContext, family_key: str) -> CommandResult:
    """
    Rewind a family counter so the next number is its floor.

    Refused while any record of the family is numbered at or above the
    floor, since the counter would then hand out numbers already in use.
    """
    require(actor, MANAGE_COUNTERS)
    family = FAMILIES.get(family_key)
    if family is None:
        return CommandResult.fail(f"Unknown EFT family {family_key!r}.")

    in_use = family.model.objects.filter(eft_number__gte=family.sequence.floor).count()
    if in_use:
        return CommandResult.fail(
            f"{in_use} EFT record(s) already numbered from {family.sequence.floor}; "
            "the counter cannot be reset. Use migrate to renumber legacy records."
        )

    next_number = reset(family.sequence)
    logger.warning(
        "EFT counter reset",
        extra={"family": family.key, "next_eft_number": next_number, "user": actor.label},
    )
    return CommandResult.ok({
        "message": f"EFT counter reset. Next EFT will be {next_number}.",
        "next_eft_number": next_number,
    })


@transaction.atomic
def renumber_below_floor(actor: ActorContext, family_key: str) -> CommandResult:
    """
    Move records numbered below the family floor onto fresh numbers.

    Legacy records are renumbered in ascending order starting after the
    highest number already at or above the floor. Ledger rows on the
    family's accounts follow their record's new number. The counter is
    then synced to the last number in use.
    """
    require(actor, MANAGE_COUNTERS)
    family = FAMILIES.get(family_key)
    if family is None:
        return CommandResult.fail(f"Unknown EFT family {family_key!r}.")

    model = family.model
    floor = family.sequence.floor

    highest = model.objects.filter(eft_number__gte=floor).aggregate(m=Max("eft_number"))["m"]
    next_number = max(floor, (highest or 0) + 1)

    migrated = 0
    for record in model.objects.select_for_update().filter(eft_number__lt=floor).order_by("eft_number"):
        old_number = record.eft_number
        record.eft_number = next_number
        record.save(update_fields=["eft_number", "updated_at"])

        if family.accounts:
            with command_writes_allowed():
                LedgerEntry.objects.filter(
                    eft_number=str(old_number),
                    account_number__in=family.accounts,
                ).update(eft_number=str(next_number))

        migrated += 1
        next_number += 1

    last_value = next_number - 1 if (migrated or highest) else floor - 1
    following = sync(family.sequence, last_value)

    logger.warning(
        "EFT records renumbered",
        extra={
            "family": family.key,
            "migrated": migrated,
            "next_eft_number": following,
            "user": actor.label,
        },
    )
    return CommandResult.ok({
        "message": f"Migrated {migrated} EFT records. Next EFT will be {following}.",
        "migrated_count": migrated,
        "next_eft_number": following,
    })
