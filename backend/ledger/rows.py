# ledger/rows.py
"""
In-memory ledger lines.

Posting rules build lists of ``LedgerRow`` values; ledger commands are
the only place they turn into ``LedgerEntry`` rows.
"""

from dataclasses import dataclass, asdict, field
import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ledger.chart import account_name as chart_account_name

MONEY_Q = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value) -> Decimal:
    """Round to cents, half-up. ``None`` and blanks count as zero."""
    if value is None or value == "":
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(MONEY_Q, rounding=ROUND_HALF_UP)


@dataclass
class LedgerRow:
    account_number: str
    description: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    eft_number: str = ""
    date: Optional[datetime.date] = None
    cheque_date: Optional[datetime.date] = None
    type: str = ""
    reference: str = ""
    account_name: str = field(default="")

    def __post_init__(self):
        self.account_number = str(self.account_number)
        self.debit = money(self.debit)
        self.credit = money(self.credit)
        self.eft_number = "" if self.eft_number is None else str(self.eft_number)
        if not self.account_name:
            self.account_name = chart_account_name(self.account_number)

    @property
    def is_empty(self) -> bool:
        return self.debit == ZERO and self.credit == ZERO

    def as_dict(self) -> dict:
        return asdict(self)


def debit(account_number: str, amount, description: str, **kwargs) -> LedgerRow:
    return LedgerRow(account_number, description, debit=amount, **kwargs)


def credit(account_number: str, amount, description: str, **kwargs) -> LedgerRow:
    return LedgerRow(account_number, description, credit=amount, **kwargs)


def transfer_pair(
    debit_account: str,
    credit_account: str,
    amount,
    description: str,
    eft_number="",
    **kwargs,
) -> list[LedgerRow]:
    """Matched Dr/Cr lines sharing amount, description, EFT number and dates."""
    return [
        debit(debit_account, amount, description, eft_number=eft_number, **kwargs),
        credit(credit_account, amount, description, eft_number=eft_number, **kwargs),
    ]


def totals(rows: Iterable[LedgerRow]) -> tuple[Decimal, Decimal]:
    total_debit = ZERO
    total_credit = ZERO
    for row in rows:
        total_debit += row.debit
        total_credit += row.credit
    return total_debit, total_credit
