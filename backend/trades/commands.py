# trades/commands.py
"""
Command layer for trades.

Pattern:
1. Validate permissions (require)
2. Apply business policies (can_*)
3. Perform the operation (model changes, ledger postings)
4. Return CommandResult

Agent commission lines are recomputed from the commission rules on every
create and update; stored figures never come from the client.

Finalize is a one-time action. It locks the trade row, records the
commission receipt as a plain EFT when one applies, posts the ledger
rows built by trades.posting and marks the trade finalized, all in one
transaction.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from accounts.authz import ActorContext, FINALIZE_TRADE, require
from ledger.commands import CommandResult, post_ledger_rows
from ledger.rows import ZERO, money
from ledger.sequences import EFT, peek
from ops.metrics import trades_finalized
from parties.models import Agent
from trades.commissions import FLEXIBLE, calculate_agent_commission
from trades.models import TRADE_NUMBER_FLOOR, AgentCommission, Trade
from trades.policies import can_delete_trade, can_finalize
from trades.posting import (
    SELLING_SIDE,
    PaymentReceipt,
    TradeSnapshot,
    build_finalize_rows,
    default_payment_amount,
    default_received_from,
    payment_required,
)

logger = logging.getLogger(__name__)

SECTION_FIELDS = (
    "key_info", "people", "outside_brokers", "trust_records", "commission", "conditions",
)


def next_trade_number() -> int:
    """Highest trade number plus one, never below 200."""
    current = Trade.objects.aggregate(m=Max("trade_number"))["m"] or 0
    return max(current + 1, TRADE_NUMBER_FLOOR)


def _replace_agent_commissions(trade: Trade, lines: list[dict]) -> None:
    trade.agent_commissions.all().delete()

    agent_ids = {line["agent_id"] for line in lines if line.get("agent_id")}
    agents = Agent.objects.in_bulk(agent_ids)

    rows = []
    for position, line in enumerate(lines):
        agent = agents.get(line.get("agent_id"))
        fee_plan = line.get("fee_plan") or (agent.fee_plan if agent else "")
        rebate_included = bool(line.get("buyer_rebate_included"))
        rebate_amount = money(line.get("buyer_rebate_amount")) if rebate_included else ZERO

        breakdown = calculate_agent_commission(
            award_amount=line.get("award_amount"),
            percentage=line.get("percentage"),
            fee_plan=fee_plan,
            flexible_fee=line.get("fees_deducted") if fee_plan == FLEXIBLE else None,
            buyer_rebate=rebate_amount,
        )
        rows.append(AgentCommission(
            trade=trade,
            position=position,
            agent=agent,
            agent_name=line.get("agent_name") or (agent.full_name if agent else ""),
            classification=line.get("classification", ""),
            lead=line.get("lead", ""),
            award_amount=money(line.get("award_amount")),
            percentage=Decimal(str(line.get("percentage") or 0)),
            fee_plan=fee_plan,
            buyer_rebate_included=rebate_included,
            buyer_rebate_amount=rebate_amount,
            amount=breakdown.amount,
            fees_deducted=breakdown.fees_deducted,
            tax=breakdown.tax,
            tax_on_fees=breakdown.tax_on_fees,
            total=breakdown.total,
            total_fees=breakdown.total_fees,
            net_commission=breakdown.net_commission,
        ))
    AgentCommission.objects.bulk_create(rows)


@transaction.atomic
def create_trade(actor: ActorContext, trade_number: int, agent_commissions=None, **sections) -> CommandResult:
    if trade_number < TRADE_NUMBER_FLOOR:
        return CommandResult.fail(f"Trade number must be {TRADE_NUMBER_FLOOR} or higher.")
    if Trade.objects.filter(trade_number=trade_number).exists():
        return CommandResult.fail("Trade number already exists.")

    trade = Trade(trade_number=trade_number)
    for field in SECTION_FIELDS:
        if field in sections:
            setattr(trade, field, sections[field])
    trade.key_info = {**(trade.key_info or {}), "trade_number": trade_number}
    trade.save()

    _replace_agent_commissions(trade, agent_commissions or [])

    logger.info(
        "Trade created",
        extra={"trade_number": trade_number, "agents": len(agent_commissions or []), "user": actor.label},
    )
    return CommandResult.ok(trade)


@transaction.atomic
def update_trade(actor: ActorContext, trade_id: int, agent_commissions=None, **changes) -> CommandResult:
    try:
        trade = Trade.objects.select_for_update().get(pk=trade_id)
    except Trade.DoesNotExist:
        return CommandResult.fail("Trade not found.")

    new_number = changes.pop("trade_number", trade.trade_number)
    if new_number != trade.trade_number:
        if new_number < TRADE_NUMBER_FLOOR:
            return CommandResult.fail(f"Trade number must be {TRADE_NUMBER_FLOOR} or higher.")
        if Trade.objects.filter(trade_number=new_number).exclude(pk=trade.pk).exists():
            return CommandResult.fail("Trade number already exists.")
        trade.trade_number = new_number

    for field in SECTION_FIELDS:
        if field in changes:
            setattr(trade, field, changes[field])
    trade.key_info = {**(trade.key_info or {}), "trade_number": trade.trade_number}
    if "fallen_thru" in changes:
        trade.fallen_thru = bool(changes["fallen_thru"])
    trade.save()

    if agent_commissions is not None:
        _replace_agent_commissions(trade, agent_commissions)

    logger.info(
        "Trade updated",
        extra={"trade_number": trade.trade_number, "fields": sorted(changes), "user": actor.label},
    )
    return CommandResult.ok(trade)


@transaction.atomic
def delete_trade(actor: ActorContext, trade_id: int) -> CommandResult:
    try:
        trade = Trade.objects.select_for_update().get(pk=trade_id)
    except Trade.DoesNotExist:
        return CommandResult.fail("Trade not found.")

    allowed, reason = can_delete_trade(trade)
    if not allowed:
        return CommandResult.fail(reason)

    trade_number = trade.trade_number
    trade.delete()
    logger.info("Trade deleted", extra={"trade_number": trade_number, "user": actor.label})
    return CommandResult.ok({"trade_number": trade_number})


# =============================================================================
# Finalize
# =============================================================================

def _payment_for(
    snapshot: TradeSnapshot,
    received_from: Optional[str],
    payment_amount: Optional[Decimal],
    eft_number: str = "",
) -> Optional[PaymentReceipt]:
    if not payment_required(snapshot):
        return None
    amount = money(payment_amount) if payment_amount is not None else default_payment_amount(snapshot)
    return PaymentReceipt(
        received_from=received_from or default_received_from(snapshot),
        amount=amount,
        eft_number=eft_number,
    )


def preview_finalize(
    trade: Trade,
    finalized_date: date,
    closing_date: Optional[date] = None,
    end: str = SELLING_SIDE,
    received_from: Optional[str] = None,
    payment_amount: Optional[Decimal] = None,
) -> dict:
    """
    Rows finalize would post, without writing or consuming an EFT number.

    The receipt rows show the EFT number the next plain EFT would get.
    """
    snapshot = TradeSnapshot.from_trade(trade)
    payment = _payment_for(snapshot, received_from, payment_amount, eft_number=str(peek(EFT)))
    rows = build_finalize_rows(
        snapshot,
        finalized_date=finalized_date,
        closing_date=closing_date or timezone.localdate(),
        end=end,
        payment=payment,
    )
    return {
        "trade_number": trade.trade_number,
        "we_hold": snapshot.we_hold,
        "deposit": snapshot.deposit,
        "total_commission": snapshot.total_commission,
        "payment_required": payment_required(snapshot),
        "default_payment_amount": default_payment_amount(snapshot),
        "default_received_from": default_received_from(snapshot),
        "rows": [row.as_dict() for row in rows],
    }


@transaction.atomic
def finalize_trade(
    actor: ActorContext,
    trade_number: int,
    finalized_date: Optional[date] = None,
    closing_date: Optional[date] = None,
    end: str = SELLING_SIDE,
    fallen_thru: bool = False,
    received_from: Optional[str] = None,
    payment_amount: Optional[Decimal] = None,
) -> CommandResult:
    """
    Finalize a trade once.

    A fallen-thru trade is closed without any ledger postings.
    """
    require(actor, FINALIZE_TRADE)

    try:
        trade = Trade.objects.select_for_update().get(trade_number=trade_number)
    except Trade.DoesNotExist:
        return CommandResult.fail("Trade not found.")

    allowed, reason = can_finalize(trade, finalized_date, closing_date, fallen_thru)
    if not allowed:
        return CommandResult.fail(reason)

    trade.key_info = {**(trade.key_info or {}), "finalized_date": finalized_date.isoformat()}
    trade.is_finalized = True

    if fallen_thru:
        trade.fallen_thru = True
        trade.save(update_fields=["key_info", "is_finalized", "fallen_thru", "updated_at"])
        trades_finalized.labels(outcome="fallen_thru").inc()
        logger.info(
            "Trade closed as fallen thru",
            extra={"trade_number": trade_number, "user": actor.label},
        )
        return CommandResult.ok({"trade": trade, "entries": [], "eft": None})

    closing_date = closing_date or timezone.localdate()
    snapshot = TradeSnapshot.from_trade(trade)
    payment = _payment_for(snapshot, received_from, payment_amount)

    receipt = None
    if payment and payment.amount > ZERO:
        from efts.commands import record_commission_receipt

        receipt = record_commission_receipt(
            trade,
            amount=payment.amount,
            recipient=payment.received_from,
            on=closing_date,
        )
        payment = PaymentReceipt(
            received_from=payment.received_from,
            amount=payment.amount,
            eft_number=str(receipt.eft_number),
        )

    rows = build_finalize_rows(
        snapshot,
        finalized_date=finalized_date,
        closing_date=closing_date,
        end=end,
        payment=payment,
    )
    entries = post_ledger_rows(rows, source="finalize")

    trade.save(update_fields=["key_info", "is_finalized", "updated_at"])
    trades_finalized.labels(outcome="posted").inc()
    logger.info(
        "Trade finalized",
        extra={
            "trade_number": trade_number,
            "we_hold": snapshot.we_hold,
            "rows": len(entries),
            "eft_number": payment.eft_number if payment else "",
            "user": actor.label,
        },
    )
    return CommandResult.ok({"trade": trade, "entries": entries, "eft": receipt})
