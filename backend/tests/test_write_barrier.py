# tests/test_write_barrier.py
"""
Tests for write barrier enforcement on ledger rows and counters.
"""

from decimal import Decimal

import pytest

from ledger.commands import post_ledger_rows
from ledger.models import LedgerEntry, Sequence
from ledger.rows import transfer_pair
from ledger.serializers import LedgerEntrySerializer
from ledger.write_barrier import command_writes_allowed, current_write_context


def _entry(**kwargs):
    values = dict(
        account_number="10001",
        account_name="CASH - CURRENT ACCOUNT",
        debit=Decimal("10.00"),
        description="Barrier test",
    )
    values.update(kwargs)
    return LedgerEntry(**values)


@pytest.mark.django_db
def test_direct_model_save_raises():
    with pytest.raises(RuntimeError, match="only allowed inside command_writes_allowed"):
        _entry().save()

    assert LedgerEntry.objects.count() == 0


@pytest.mark.django_db
def test_direct_create_in_serializer_raises():
    serializer = LedgerEntrySerializer(data={
        "account_number": "10001",
        "description": "Serializer row",
        "debit": "10.00",
    })
    serializer.is_valid(raise_exception=True)

    with pytest.raises(RuntimeError, match="Direct saves"):
        serializer.save()


@pytest.mark.django_db
def test_queryset_writes_raise():
    entries = post_ledger_rows(
        transfer_pair("10004", "10002", Decimal("25.00"), "Barrier pair", eft_number="4000"),
        source="test",
    )
    assert len(entries) == 2

    with pytest.raises(RuntimeError, match="Direct update"):
        LedgerEntry.objects.filter(eft_number="4000").update(eft_number="4001")

    with pytest.raises(RuntimeError, match="Direct delete"):
        LedgerEntry.objects.all().delete()

    with pytest.raises(RuntimeError, match="Direct deletes"):
        entries[0].delete()

    with pytest.raises(RuntimeError, match="Direct bulk_create"):
        LedgerEntry.objects.bulk_create([_entry()])

    assert LedgerEntry.objects.filter(eft_number="4000").count() == 2


@pytest.mark.django_db
def test_command_context_allows_writes():
    with pytest.raises(RuntimeError, match="command_writes_allowed"):
        Sequence.objects.create(name="eft", last_value=3999)

    with command_writes_allowed():
        seq = Sequence.objects.create(name="eft", last_value=3999)
        entry = _entry()
        entry.save()

    assert seq.last_value == 3999
    assert LedgerEntry.objects.filter(pk=entry.pk).exists()


def test_context_is_popped_after_block():
    assert current_write_context() is None
    with command_writes_allowed():
        assert current_write_context() == "command"
    assert current_write_context() is None

    with pytest.raises(ValueError):
        with command_writes_allowed():
            raise ValueError("boom")
    assert current_write_context() is None


def test_guarded_tables_are_ledger_rows_and_counters():
    from django.apps import apps

    from ledger.models import CommandOwnedModel

    guarded = {m for m in apps.get_models() if issubclass(m, CommandOwnedModel)}
    assert guarded == {LedgerEntry, Sequence}
