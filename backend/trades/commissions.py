# trades/commissions.py
"""
Agent commission arithmetic.

Pure functions, no database access. ``calculate_agent_commission``
turns an award amount, a commission percentage and the agent's fee plan
into the figures stored on each AgentCommission row and used by the
finalize posting rules.

    amount         = award * percentage / 100
    tax            = amount * HST
    total          = amount + tax
    fees           = fee plan (fixed dollars or a share of amount)
    tax_on_fees    = fees * HST
    total_fees     = fees + tax_on_fees
    net_commission = total - total_fees

A buyer rebate comes off the amount after tax has been computed, so the
tax still reflects the full commission.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal

from ledger.rows import ZERO, money

HST_RATE = Decimal("0.13")

FLEXIBLE = "flexible"

FIXED_FEES = {
    "plan250": Decimal("250"),
    "plan500": Decimal("500"),
    "plan150": Decimal("150"),
}

PERCENTAGE_FEES = {
    "plan9010": Decimal("0.10"),
    "plan8515": Decimal("0.15"),
    "plan955": Decimal("0.05"),
    "plan5050": Decimal("0.50"),
    "plan8020": Decimal("0.20"),
}

FEE_PLAN_CHOICES = [
    ("", "None"),
    ("flatFee", "Flat Fee"),
    ("garnishment", "Garnishment"),
    ("plan250", "Plan 250"),
    ("plan500", "Plan 500"),
    ("plan9010", "Plan 90/10"),
    ("plan955", "Plan 95/5"),
    ("plan8515", "Plan 85/15"),
    ("plan5050", "Plan 50/50"),
    ("plan8020", "Plan 80/20"),
    ("plan150", "Plan 150"),
    ("buyerRebate", "Buyer Rebate"),
    ("noFee", "No Fee"),
    (FLEXIBLE, "Flexible"),
]


def _decimal(value) -> Decimal:
    if value is None or value == "":
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class CommissionBreakdown:
    amount: Decimal
    tax: Decimal
    total: Decimal
    fees_deducted: Decimal
    tax_on_fees: Decimal
    total_fees: Decimal
    net_commission: Decimal
    buyer_rebate: Decimal = ZERO

    def as_dict(self) -> dict:
        return asdict(self)


def fee_for_plan(fee_plan: str, amount: Decimal, flexible_fee=None) -> Decimal:
    """Fees deducted under ``fee_plan``; unknown and fee-free plans give zero."""
    if fee_plan in FIXED_FEES:
        return FIXED_FEES[fee_plan]
    if fee_plan in PERCENTAGE_FEES:
        return amount * PERCENTAGE_FEES[fee_plan]
    if fee_plan == FLEXIBLE:
        return _decimal(flexible_fee)
    return ZERO


def calculate_agent_commission(
    award_amount,
    percentage,
    fee_plan: str = "",
    flexible_fee=None,
    buyer_rebate=None,
) -> CommissionBreakdown:
    """
    Compute one agent's commission figures.

    Args:
        award_amount: Commission pool the percentage applies to
        percentage: Agent share, in percent (e.g. 2.5)
        fee_plan: Fee plan code from FEE_PLAN_CHOICES
        flexible_fee: Fee in dollars when ``fee_plan`` is "flexible"
        buyer_rebate: Rebate in dollars taken off the amount, if any

    All outputs are rounded half-up to cents.
    """
    award = _decimal(award_amount)
    pct = _decimal(percentage)

    amount = award * pct / Decimal("100")
    tax = amount * HST_RATE
    total = amount + tax

    fees = fee_for_plan(fee_plan or "", amount, flexible_fee)
    tax_on_fees = fees * HST_RATE
    total_fees = fees + tax_on_fees

    rebate = _decimal(buyer_rebate)
    if rebate > ZERO:
        amount = amount - rebate
        total = amount + tax

    return CommissionBreakdown(
        amount=money(amount),
        tax=money(tax),
        total=money(total),
        fees_deducted=money(fees),
        tax_on_fees=money(tax_on_fees),
        total_fees=money(total_fees),
        net_commission=money(total - total_fees),
        buyer_rebate=money(rebate),
    )
