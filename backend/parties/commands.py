# parties/commands.py
"""
Command layer for counterparty records.

Agent employee numbers start at 100 and vendor numbers at 1; when the
caller omits a number, the next free one is assigned inside the same
transaction as the insert.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Max

from accounts.authz import ActorContext
from ledger.commands import CommandResult
from parties.models import AGENT_NUMBER_FLOOR, Agent, Lawyer, OutsideBroker, Vendor

logger = logging.getLogger(__name__)


def next_employee_no() -> int:
    """Highest employee number plus one, never below 100."""
    current = Agent.objects.aggregate(m=Max("employee_no"))["m"] or 0
    return max(current + 1, AGENT_NUMBER_FLOOR)


def next_vendor_number() -> int:
    current = Vendor.objects.aggregate(m=Max("vendor_number"))["m"] or 0
    return current + 1


def _save(actor: ActorContext, instance, data: dict, action: str) -> CommandResult:
    for field, value in data.items():
        setattr(instance, field, value)
    try:
        with transaction.atomic():
            instance.save()
    except IntegrityError as e:
        logger.info(
            "Party save rejected",
            extra={"model": type(instance).__name__, "error": str(e)},
        )
        return CommandResult.fail(f"{type(instance).__name__} number is already in use.")

    logger.info(
        f"{type(instance).__name__} {action}",
        extra={"party_id": instance.pk, "user": actor.label},
    )
    return CommandResult.ok(instance)


# =============================================================================
# Agents
# =============================================================================

@transaction.atomic
def create_agent(actor: ActorContext, **data) -> CommandResult:
    if not data.get("employee_no"):
        data["employee_no"] = next_employee_no()
    if data["employee_no"] < AGENT_NUMBER_FLOOR:
        return CommandResult.fail(f"Employee number must be {AGENT_NUMBER_FLOOR} or higher.")
    return _save(actor, Agent(), data, "created")


@transaction.atomic
def update_agent(actor: ActorContext, agent: Agent, **data) -> CommandResult:
    if "employee_no" in data and data["employee_no"] < AGENT_NUMBER_FLOOR:
        return CommandResult.fail(f"Employee number must be {AGENT_NUMBER_FLOOR} or higher.")
    return _save(actor, agent, data, "updated")


# =============================================================================
# Vendors
# =============================================================================

@transaction.atomic
def create_vendor(actor: ActorContext, **data) -> CommandResult:
    if not data.get("vendor_number"):
        data["vendor_number"] = next_vendor_number()
    return _save(actor, Vendor(), data, "created")


@transaction.atomic
def update_vendor(actor: ActorContext, vendor: Vendor, **data) -> CommandResult:
    return _save(actor, vendor, data, "updated")


# =============================================================================
# Lawyers & outside brokers
# =============================================================================

@transaction.atomic
def create_lawyer(actor: ActorContext, **data) -> CommandResult:
    return _save(actor, Lawyer(), data, "created")


@transaction.atomic
def update_lawyer(actor: ActorContext, lawyer: Lawyer, **data) -> CommandResult:
    return _save(actor, lawyer, data, "updated")


@transaction.atomic
def create_outside_broker(actor: ActorContext, **data) -> CommandResult:
    return _save(actor, OutsideBroker(), data, "created")


@transaction.atomic
def update_outside_broker(actor: ActorContext, broker: OutsideBroker, **data) -> CommandResult:
    return _save(actor, broker, data, "updated")


@transaction.atomic
def delete_party(actor: ActorContext, instance) -> CommandResult:
    """Delete any counterparty record. EFTs keep their recipient text."""
    model_name = type(instance).__name__
    party_id = instance.pk
    instance.delete()
    logger.info(f"{model_name} deleted", extra={"party_id": party_id, "user": actor.label})
    return CommandResult.ok({"id": party_id})
