# ledger/sequences.py
"""
Named counters for EFT and journal entry numbers.

Each counter is a single ``Sequence`` row keyed by name. ``allocate``
locks the row with ``select_for_update`` and bumps it inside the
caller's transaction, so a rolled-back command never burns a number.
``peek`` only reads.

Families and their floors:

    real_estate_trust_eft   1000
    commission_trust_eft    2000
    general_account_eft     3000
    eft                     4000
    journal_entry           1001  (formatted JE1001, JE1002, ...)
"""

from dataclasses import dataclass
import logging

from django.db import IntegrityError, transaction

from ledger.models import Sequence
from ledger.write_barrier import command_writes_allowed
from ops.metrics import eft_numbers_issued

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequenceSpec:
    name: str
    floor: int
    prefix: str = ""

    def format(self, value: int) -> str:
        return f"{self.prefix}{value}"


REAL_ESTATE_TRUST_EFT = SequenceSpec("real_estate_trust_eft", 1000)
COMMISSION_TRUST_EFT = SequenceSpec("commission_trust_eft", 2000)
GENERAL_ACCOUNT_EFT = SequenceSpec("general_account_eft", 3000)
EFT = SequenceSpec("eft", 4000)
JOURNAL_ENTRY = SequenceSpec("journal_entry", 1001, prefix="JE")

ALL_SEQUENCES = (
    REAL_ESTATE_TRUST_EFT,
    COMMISSION_TRUST_EFT,
    GENERAL_ACCOUNT_EFT,
    EFT,
    JOURNAL_ENTRY,
)


def _locked_row(spec: SequenceSpec) -> Sequence:
    with command_writes_allowed():
        try:
            return Sequence.objects.select_for_update().get(name=spec.name)
        except Sequence.DoesNotExist:
            try:
                with transaction.atomic():
                    return Sequence.objects.create(name=spec.name, last_value=spec.floor - 1)
            except IntegrityError:
                return Sequence.objects.select_for_update().get(name=spec.name)


def allocate(spec: SequenceSpec) -> int:
    """
    Consume and return the next number for ``spec``.

    Must run inside ``transaction.atomic``; the lock is held until the
    surrounding transaction commits.
    """
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError(f"allocate({spec.name}) must run inside transaction.atomic")

    seq = _locked_row(spec)
    value = max(seq.last_value + 1, spec.floor)
    seq.last_value = value
    with command_writes_allowed():
        seq.save(update_fields=["last_value", "updated_at"])
    eft_numbers_issued.labels(sequence=spec.name).inc()
    return value


def peek(spec: SequenceSpec) -> int:
    """Next number ``allocate`` would hand out. Consumes nothing."""
    last_value = (
        Sequence.objects.filter(name=spec.name)
        .values_list("last_value", flat=True)
        .first()
    )
    if last_value is None:
        return spec.floor
    return max(last_value + 1, spec.floor)


@transaction.atomic
def reset(spec: SequenceSpec) -> int:
    """Rewind the counter so the next number is the floor."""
    seq = _locked_row(spec)
    seq.last_value = spec.floor - 1
    with command_writes_allowed():
        seq.save(update_fields=["last_value", "updated_at"])
    logger.warning("Sequence reset", extra={"sequence": spec.name, "next": spec.floor})
    return spec.floor


@transaction.atomic
def sync(spec: SequenceSpec, last_value: int) -> int:
    """Set the last issued number; returns the next number."""
    seq = _locked_row(spec)
    seq.last_value = max(last_value, spec.floor - 1)
    with command_writes_allowed():
        seq.save(update_fields=["last_value", "updated_at"])
    logger.info("Sequence synced", extra={"sequence": spec.name, "last_value": seq.last_value})
    return seq.last_value + 1
