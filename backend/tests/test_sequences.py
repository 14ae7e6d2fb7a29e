# tests/test_sequences.py
"""
Tests for named counters (ledger/sequences.py).
"""

import pytest
from django.db import transaction

from ledger.models import Sequence
from ledger.sequences import (
    COMMISSION_TRUST_EFT,
    EFT,
    GENERAL_ACCOUNT_EFT,
    JOURNAL_ENTRY,
    REAL_ESTATE_TRUST_EFT,
    allocate,
    peek,
    reset,
    sync,
)


@pytest.mark.django_db
class TestAllocate:

    @pytest.mark.parametrize("spec,first", [
        (REAL_ESTATE_TRUST_EFT, 1000),
        (COMMISSION_TRUST_EFT, 2000),
        (GENERAL_ACCOUNT_EFT, 3000),
        (EFT, 4000),
        (JOURNAL_ENTRY, 1001),
    ])
    def test_first_number_is_floor(self, spec, first):
        with transaction.atomic():
            assert allocate(spec) == first
            assert allocate(spec) == first + 1

    def test_families_are_independent(self):
        with transaction.atomic():
            allocate(EFT)
            allocate(EFT)
            assert allocate(COMMISSION_TRUST_EFT) == 2000
        assert peek(EFT) == 4002

    def test_rolled_back_allocation_is_not_burned(self):
        with pytest.raises(ValueError):
            with transaction.atomic():
                assert allocate(REAL_ESTATE_TRUST_EFT) == 1000
                raise ValueError("request failed")

        assert peek(REAL_ESTATE_TRUST_EFT) == 1000
        with transaction.atomic():
            assert allocate(REAL_ESTATE_TRUST_EFT) == 1000

    def test_counter_below_floor_jumps_to_floor(self):
        sync(EFT, 12)

        with transaction.atomic():
            assert allocate(EFT) == 4000


@pytest.mark.django_db
class TestPeekResetSync:

    def test_peek_consumes_nothing(self):
        assert peek(EFT) == 4000
        assert peek(EFT) == 4000
        assert not Sequence.objects.filter(name=EFT.name).exists()

    def test_journal_entry_format(self):
        assert JOURNAL_ENTRY.format(peek(JOURNAL_ENTRY)) == "JE1001"

    def test_reset_returns_to_floor(self):
        with transaction.atomic():
            for _ in range(3):
                allocate(GENERAL_ACCOUNT_EFT)
        assert peek(GENERAL_ACCOUNT_EFT) == 3003

        assert reset(GENERAL_ACCOUNT_EFT) == 3000
        assert peek(GENERAL_ACCOUNT_EFT) == 3000

    def test_sync_sets_last_value(self):
        assert sync(COMMISSION_TRUST_EFT, 2041) == 2042
        assert peek(COMMISSION_TRUST_EFT) == 2042
        assert Sequence.objects.get(name=COMMISSION_TRUST_EFT.name).last_value == 2041
