# ledger/reports.py
"""
Read-side reports over ledger rows.

- ledger_rows: the general ledger listing, optionally for a period
- account_feed: one account's rows for bank reconciliation, each row
  resolved to its trade, payee and reference
- reconciliation_state: saved statement amount and cleared rows
- trial_balance: debit, credit and balance per account

A row falls in a period when either its cheque date or its posting date
does.
"""

from collections import defaultdict
from datetime import date
import re
from typing import Optional

from django.db.models import F, Q, Sum

from ledger import chart
from ledger.models import LedgerEntry, ReconciliationSettings
from ledger.rows import ZERO

TRADE_NUMBER_RE = re.compile(r"Trade #:\s*(\d+)", re.IGNORECASE)


def in_period(from_date: Optional[date], to_date: Optional[date]) -> Q:
    if not (from_date and to_date):
        return Q()
    return Q(cheque_date__range=(from_date, to_date)) | Q(date__range=(from_date, to_date))


def ledger_rows(from_date: Optional[date] = None, to_date: Optional[date] = None):
    """Ledger rows, most recent cheque date first."""
    return LedgerEntry.objects.filter(in_period(from_date, to_date)).order_by(
        F("cheque_date").desc(nulls_last=True),
        F("date").desc(nulls_last=True),
        "-id",
    )


# =============================================================================
# Account reconciliation feed
# =============================================================================

def _eft_model_for(account_number: str):
    from efts.models import CommissionTrustEFT, GeneralAccountEFT, RealEstateTrustEFT

    return {
        chart.CASH_TRUST: RealEstateTrustEFT,
        chart.CASH_COMMISSION_TRUST: CommissionTrustEFT,
        chart.CASH_CURRENT: GeneralAccountEFT,
    }.get(account_number)


def _trust_reference(trade, description: str) -> str:
    lowered = (description or "").lower()
    for record in trade.trust_records or []:
        received_from = str(record.get("received_from") or "").strip()
        reference = str(record.get("reference") or "").strip()
        if received_from and reference and f"received from: {received_from.lower()}" in lowered:
            return reference
    return ""


def account_feed(account_number: str, from_date: date, to_date: date) -> list[dict]:
    """
    Rows posted to ``account_number`` in the period, oldest first.

    The trade is found through the EFT record matching the row's EFT
    number (10002 real estate trust, 10004 commission trust, 10001
    general account), else from a ``Trade #: N`` description prefix.
    The reference is the matching trust record's reference, else
    ``EFT#<number>``.
    """
    from trades.models import Trade

    entries = list(
        LedgerEntry.objects.filter(account_number=account_number)
        .filter(in_period(from_date, to_date))
        .order_by(F("cheque_date").asc(nulls_last=True), F("date").asc(nulls_last=True), "id")
    )
    if not entries:
        return []

    eft_model = _eft_model_for(account_number)
    efts = {}
    if eft_model is not None:
        numbers = {int(e.eft_number) for e in entries if e.eft_number.isdigit()}
        efts = eft_model.objects.in_bulk(numbers, field_name="eft_number")

    trade_ids = {getattr(eft, "trade_id", None) for eft in efts.values()} - {None}
    trades_by_id = Trade.objects.in_bulk(trade_ids)

    described = set()
    for entry in entries:
        match = TRADE_NUMBER_RE.search(entry.description or "")
        if match:
            described.add(int(match.group(1)))
    trades_by_number = Trade.objects.in_bulk(described, field_name="trade_number")

    feed = []
    for entry in entries:
        eft = efts.get(int(entry.eft_number)) if entry.eft_number.isdigit() else None
        trade = trades_by_id.get(getattr(eft, "trade_id", None)) if eft else None
        if trade is None:
            match = TRADE_NUMBER_RE.search(entry.description or "")
            if match:
                trade = trades_by_number.get(int(match.group(1)))

        description = entry.description or ""
        address = trade.address if trade else ""
        if address and address not in description:
            description = f"{description} - {address}"

        reference = _trust_reference(trade, entry.description) if trade else ""
        if not reference and entry.eft_number:
            reference = f"EFT#{entry.eft_number}"

        is_debit = entry.debit > ZERO
        feed.append({
            "id": entry.id,
            "date": entry.date or entry.cheque_date,
            "cheque_date": entry.cheque_date,
            "reference": reference or None,
            "description": description,
            "amount": entry.debit if is_debit else entry.credit,
            "type": "Debit" if is_debit else "Credit",
            "trade_number": trade.trade_number if trade else _described_number(entry),
            "trade_id": trade.pk if trade else None,
            "payee": (eft.recipient or None) if eft else None,
            "debit_account": entry.account_number if is_debit else None,
            "credit_account": entry.account_number if entry.credit > ZERO else None,
            "account_number": entry.account_number,
            "account_name": entry.account_name,
            "created_at": entry.created_at,
            "updated_at": entry.updated_at,
        })
    return feed


def _described_number(entry) -> Optional[int]:
    match = TRADE_NUMBER_RE.search(entry.description or "")
    return int(match.group(1)) if match else None


# =============================================================================
# Reconciliation
# =============================================================================

def reconciliation_state(account_number: str, from_date: date, to_date: date) -> dict:
    """Saved settings for the period; an unsaved period reads as nothing cleared."""
    settings_row = (
        ReconciliationSettings.objects
        .filter(account_number=account_number, from_date=from_date, to_date=to_date)
        .prefetch_related("cleared_transactions__ledger_entry")
        .first()
    )
    if settings_row is None:
        return {
            "account_number": account_number,
            "from_date": from_date,
            "to_date": to_date,
            "statement_amount": None,
            "cleared_transactions": [],
            "cleared_debit": ZERO,
            "cleared_credit": ZERO,
        }

    cleared = list(settings_row.cleared_transactions.all())
    cleared_debit = sum((c.ledger_entry.debit for c in cleared), ZERO)
    cleared_credit = sum((c.ledger_entry.credit for c in cleared), ZERO)
    return {
        "id": settings_row.pk,
        "account_number": account_number,
        "from_date": from_date,
        "to_date": to_date,
        "statement_amount": settings_row.statement_amount,
        "cleared_transactions": [
            {"ledger_id": c.ledger_entry_id, "cleared_at": c.cleared_at, "cleared_by": c.cleared_by}
            for c in cleared
        ],
        "cleared_debit": cleared_debit,
        "cleared_credit": cleared_credit,
        "updated_at": settings_row.updated_at,
    }


# =============================================================================
# Trial balance
# =============================================================================

def trial_balance(from_date: Optional[date] = None, to_date: Optional[date] = None) -> dict:
    """
    Totals per account, ordered by account number.

    ``balance`` is debit minus credit.
    """
    grouped = (
        LedgerEntry.objects.filter(in_period(from_date, to_date))
        .values("account_number")
        .annotate(debit=Sum("debit"), credit=Sum("credit"))
        .order_by("account_number")
    )

    names = defaultdict(str)
    for number, name in (
        LedgerEntry.objects.filter(in_period(from_date, to_date))
        .values_list("account_number", "account_name")
        .distinct()
    ):
        names[number] = names[number] or name

    accounts = []
    total_debit = ZERO
    total_credit = ZERO
    for row in grouped:
        debit = row["debit"] or ZERO
        credit = row["credit"] or ZERO
        total_debit += debit
        total_credit += credit
        accounts.append({
            "account_number": row["account_number"],
            "account_name": chart.account_name(row["account_number"]) or names[row["account_number"]],
            "debit": debit,
            "credit": credit,
            "balance": debit - credit,
        })

    return {
        "from_date": from_date,
        "to_date": to_date,
        "accounts": accounts,
        "total_debit": total_debit,
        "total_credit": total_credit,
        "is_balanced": total_debit == total_credit,
    }
