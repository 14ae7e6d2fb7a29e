# trades/policies.py
"""
Business policy functions for trades.

Policies answer: "Is this action allowed given the current state?"
They return (bool, reason) tuples and never write.
"""

from trades.posting import WE_HOLD_YES


def can_finalize(trade, finalized_date, closing_date, fallen_thru: bool = False) -> tuple[bool, str]:
    """Check whether a trade may be finalized with the given dates."""
    if trade.is_finalized:
        return False, "Trade already finalized."

    if not finalized_date:
        return False, "Finalized date is required."

    if fallen_thru:
        return True, ""

    we_hold = (trade.first_trust_record or {}).get("we_hold")
    if we_hold == WE_HOLD_YES and not closing_date:
        return False, "Closing date is required when the brokerage holds the deposit."

    return True, ""


def can_delete_trade(trade) -> tuple[bool, str]:
    if (
        trade.real_estate_trust_efts.exists()
        or trade.commission_trust_efts.exists()
        or trade.eft_records.exists()
    ):
        return False, "Trade has EFT records; it cannot be deleted."

    return True, ""
