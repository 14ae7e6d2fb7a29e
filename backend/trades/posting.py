# trades/posting.py
"""
Ledger rows for finalizing a trade.

``build_finalize_rows`` is a fixed set of rules, not an accounting
engine. The rows depend on who holds the deposit (the first trust
record's "We Hold" flag), whether the deposit covers the total
commission, and whether one or two agents share the trade.

Commission rows carry the finalized date. Rows recording the receipt of
outstanding commission into the commission trust account carry the
closing date and the receipt's EFT number.

The rules do not force a balanced batch; ledger.commands logs a warning
when the rows it receives do not balance.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ledger import chart
from ledger.rows import ZERO, LedgerRow, credit, debit, money
from trades.commissions import HST_RATE

WE_HOLD_YES = "Yes"
WE_HOLD_NO = "No"
LISTING_SIDE = "Listing Side"
SELLING_SIDE = "Selling Side"


@dataclass(frozen=True)
class AgentFigures:
    amount: Decimal = ZERO
    tax: Decimal = ZERO
    fees_deducted: Decimal = ZERO
    total_fees: Decimal = ZERO
    net_commission: Decimal = ZERO
    buyer_rebate: Decimal = ZERO

    @property
    def tax_on_fees(self) -> Decimal:
        """Fee tax as recorded on the agent line (total fees less fees)."""
        return self.total_fees - self.fees_deducted

    @property
    def computed_tax_on_fees(self) -> Decimal:
        return money(self.fees_deducted * HST_RATE)

    @classmethod
    def from_commission(cls, row) -> "AgentFigures":
        rebate = row.buyer_rebate_amount if row.buyer_rebate_included else ZERO
        return cls(
            amount=money(row.amount),
            tax=money(row.tax),
            fees_deducted=money(row.fees_deducted),
            total_fees=money(row.total_fees),
            net_commission=money(row.net_commission),
            buyer_rebate=money(rebate),
        )


@dataclass(frozen=True)
class TradeSnapshot:
    trade_number: int
    street_number: str = ""
    street_name: str = ""
    we_hold: str = ""
    deposit: Decimal = ZERO
    listing_amount: Decimal = ZERO
    listing_tax: Decimal = ZERO
    selling_amount: Decimal = ZERO
    selling_tax: Decimal = ZERO
    agents: tuple = field(default_factory=tuple)
    listing_broker_company: str = ""

    @property
    def description(self) -> str:
        address = f"{self.street_number} {self.street_name}".strip()
        if address:
            return f"Trade #: {self.trade_number} - {address}"
        return f"Trade #: {self.trade_number}"

    @property
    def address(self) -> str:
        return f"{self.street_number} {self.street_name}".strip()

    @property
    def total_commission(self) -> Decimal:
        return self.listing_amount + self.selling_amount + self.listing_tax + self.selling_tax

    @property
    def is_dual_agent(self) -> bool:
        return len(self.agents) == 2

    @property
    def buyer_rebate_total(self) -> Decimal:
        return sum((a.buyer_rebate for a in self.agents), ZERO)

    def agent(self, index: int) -> AgentFigures:
        return self.agents[index] if len(self.agents) > index else AgentFigures()

    @classmethod
    def from_trade(cls, trade) -> "TradeSnapshot":
        info = trade.key_info or {}
        trust = trade.first_trust_record
        rows = (trade.commission or {}).get("commission_income_rows") or []

        listing = next((r for r in rows if r.get("end") == LISTING_SIDE), None)
        selling = next((r for r in rows if r.get("end") == SELLING_SIDE), None)
        if rows:
            listing = listing or rows[0]
            selling = selling or rows[0]
        listing = listing or {}
        selling = selling or {}

        return cls(
            trade_number=trade.trade_number,
            street_number=str(info.get("street_number") or ""),
            street_name=str(info.get("street_name") or ""),
            we_hold=str(trust.get("we_hold") or ""),
            deposit=money(trust.get("amount")),
            listing_amount=money(listing.get("listing_amount")),
            listing_tax=money(listing.get("listing_tax")),
            selling_amount=money(selling.get("selling_amount")),
            selling_tax=money(selling.get("selling_tax")),
            agents=tuple(
                AgentFigures.from_commission(row)
                for row in trade.agent_commissions.order_by("position")
            ),
            listing_broker_company=_listing_broker_company(trade.outside_brokers or []),
        )


@dataclass(frozen=True)
class PaymentReceipt:
    """Commission received into the commission trust account at finalize."""
    received_from: str
    amount: Decimal
    eft_number: str = ""


def _listing_broker_company(brokers: list) -> str:
    for broker in brokers:
        kind = str(broker.get("type") or "")
        end = str(broker.get("end") or "").lower()
        if kind == "Listing Broker" or "listing" in end:
            return str(broker.get("company") or "")
    return ""


def payment_required(snapshot: TradeSnapshot) -> bool:
    """A receipt is needed when we do not hold the deposit or it falls short."""
    return snapshot.we_hold == WE_HOLD_NO or snapshot.total_commission > snapshot.deposit


def default_payment_amount(snapshot: TradeSnapshot) -> Decimal:
    if snapshot.we_hold == WE_HOLD_NO:
        return money(snapshot.selling_amount + snapshot.selling_tax)
    if snapshot.we_hold == WE_HOLD_YES and snapshot.total_commission > snapshot.deposit:
        return money(snapshot.total_commission - snapshot.deposit)
    return ZERO


def default_received_from(snapshot: TradeSnapshot) -> str:
    return snapshot.listing_broker_company


def _deposit_settlement(snapshot: TradeSnapshot, desc: str, on: date) -> LedgerRow:
    total = snapshot.total_commission
    if snapshot.deposit >= total:
        return credit(chart.TRUST_LIABILITY, snapshot.deposit - total, desc, date=on)
    return debit(chart.AR_COMMISSION, total - snapshot.deposit, desc, date=on)


def _shortfall_receipt(
    snapshot: TradeSnapshot,
    payment: Optional[PaymentReceipt],
    closing_date: date,
    amount: Optional[Decimal] = None,
) -> list[LedgerRow]:
    """10004 Dr / 12200 Cr for ``amount``, the shortfall when omitted."""
    shortfall = snapshot.total_commission - snapshot.deposit if amount is None else amount
    received_from = payment.received_from if payment else default_received_from(snapshot)
    eft_number = payment.eft_number if payment else ""
    desc = f"Trade #: {snapshot.trade_number} - {snapshot.address} - Received From: {received_from}"
    return [
        debit(chart.CASH_COMMISSION_TRUST, shortfall, desc, eft_number=eft_number, date=closing_date),
        credit(chart.AR_COMMISSION, shortfall, desc, eft_number=eft_number, date=closing_date),
    ]


def _we_hold_single(snapshot: TradeSnapshot, desc: str, on: date) -> list[LedgerRow]:
    agent = snapshot.agent(0)
    s = snapshot
    return [
        credit(chart.COMMISSION_PAYABLE, agent.net_commission, desc, date=on),
        debit(chart.AGENT_COMMISSION, s.listing_amount, desc, date=on),
        debit(chart.HST_INPUT_CREDIT, s.listing_tax, desc, date=on),
        credit(chart.FEE_INCOME, agent.fees_deducted, desc, date=on),
        credit(chart.HST_INPUT_CREDIT, agent.tax_on_fees, desc, date=on),
        credit(chart.COMMISSION_INCOME, s.listing_amount + s.selling_amount, desc, date=on),
        credit(chart.HST_COLLECTED, s.listing_tax + s.selling_tax, desc, date=on),
        debit(chart.TRUST_LIABILITY, s.deposit, desc, date=on),
        _deposit_settlement(s, desc, on),
    ]


def _we_hold_single_tail(snapshot: TradeSnapshot, desc: str, on: date) -> list[LedgerRow]:
    s = snapshot
    return [
        credit(chart.AP_OTHER_BROKERS, s.selling_amount + s.selling_tax, desc, date=on),
        debit(chart.OUTSIDE_BROKER_COMMISSION, s.selling_amount, desc, date=on),
        debit(chart.HST_INPUT_CREDIT, s.selling_tax, desc, date=on),
    ]


def _we_hold_dual(snapshot: TradeSnapshot, desc: str, on: date) -> list[LedgerRow]:
    first, second = snapshot.agent(0), snapshot.agent(1)
    s = snapshot
    return [
        debit(chart.HST_INPUT_CREDIT, s.listing_tax, desc, date=on),
        debit(chart.OUTSIDE_BROKER_COMMISSION, s.listing_amount, desc, date=on),
        credit(chart.AP_OTHER_BROKERS, s.selling_amount + s.selling_tax, desc, date=on),
        _deposit_settlement(s, desc, on),
        debit(chart.TRUST_LIABILITY, s.deposit, desc, date=on),
        credit(chart.HST_COLLECTED, s.listing_tax + s.selling_tax, desc, date=on),
        credit(chart.COMMISSION_INCOME, s.listing_amount + s.selling_amount, desc, date=on),
        credit(chart.HST_INPUT_CREDIT, first.computed_tax_on_fees, desc, date=on),
        credit(chart.FEE_INCOME, first.fees_deducted, desc, date=on),
        debit(chart.HST_INPUT_CREDIT, s.selling_tax, desc, date=on),
        debit(chart.AGENT_COMMISSION, s.selling_amount, desc, date=on),
        credit(chart.COMMISSION_PAYABLE, first.net_commission, desc, date=on),
        credit(chart.COMMISSION_PAYABLE, second.net_commission, desc, date=on),
        credit(chart.FEE_INCOME, second.fees_deducted, desc, date=on),
        credit(chart.HST_INPUT_CREDIT, second.computed_tax_on_fees, desc, date=on),
    ]


def _we_do_not_hold(
    snapshot: TradeSnapshot,
    desc: str,
    on: date,
    closing_date: date,
    end: str,
    payment: Optional[PaymentReceipt],
) -> list[LedgerRow]:
    s = snapshot
    commission = s.listing_amount if end == LISTING_SIDE else s.selling_amount
    tax = money(commission * HST_RATE)
    first = s.agent(0)

    rows = [
        credit(chart.COMMISSION_INCOME, commission, desc, date=on),
        debit(chart.HST_INPUT_CREDIT, tax, desc, date=on),
        credit(chart.HST_COLLECTED, tax, desc, date=on),
        debit(chart.AGENT_COMMISSION, first.amount, desc, date=on),
        credit(chart.COMMISSION_PAYABLE, first.net_commission, desc, date=on),
        credit(chart.FEE_INCOME, first.fees_deducted, desc, date=on),
        credit(chart.HST_INPUT_CREDIT, first.tax_on_fees, desc, date=on),
    ]

    if s.is_dual_agent:
        second = s.agent(1)
        rows += [
            debit(chart.AGENT_COMMISSION, second.amount, desc, date=on),
            credit(chart.COMMISSION_PAYABLE, second.net_commission, desc, date=on),
            credit(chart.FEE_INCOME, second.fees_deducted, desc, date=on),
            credit(chart.HST_INPUT_CREDIT, second.computed_tax_on_fees, desc, date=on),
        ]

    if payment and payment.amount > ZERO:
        receipt_desc = f"Trade #: {s.trade_number} - Received From: {payment.received_from}"
        rows += [
            debit(chart.AR_COMMISSION, payment.amount, desc, eft_number=payment.eft_number, date=on),
            debit(chart.CASH_COMMISSION_TRUST, payment.amount, receipt_desc,
                  eft_number=payment.eft_number, date=closing_date),
            credit(chart.AR_COMMISSION, payment.amount, receipt_desc,
                   eft_number=payment.eft_number, date=closing_date),
        ]

    rebate = s.buyer_rebate_total
    if rebate > ZERO:
        rows.append(credit(chart.REFERRAL_FEES, rebate, f"Trade #: {s.trade_number} - Buyer Rebate", date=on))

    return rows


def build_finalize_rows(
    snapshot: TradeSnapshot,
    finalized_date: date,
    closing_date: Optional[date] = None,
    end: str = SELLING_SIDE,
    payment: Optional[PaymentReceipt] = None,
) -> list[LedgerRow]:
    """
    Ordered ledger rows for finalizing ``snapshot``.

    Args:
        snapshot: Figures read from the trade
        finalized_date: Date on the commission rows
        closing_date: Date on receipt rows (today when omitted)
        end: "Selling Side" or "Listing Side"; picks the commission
            booked when the brokerage does not hold the deposit
        payment: Commission receipt recorded at finalize, if any

    Rows with neither a debit nor a credit are dropped.
    """
    closing_date = closing_date or date.today()
    desc = snapshot.description

    if snapshot.we_hold == WE_HOLD_YES:
        short = snapshot.total_commission > snapshot.deposit
        if snapshot.is_dual_agent:
            rows = _we_hold_dual(snapshot, desc, finalized_date)
            if short and payment and payment.amount > ZERO:
                rows += _shortfall_receipt(snapshot, payment, closing_date, amount=payment.amount)
        else:
            rows = _we_hold_single(snapshot, desc, finalized_date)
            if short:
                rows += _shortfall_receipt(snapshot, payment, closing_date)
            rows += _we_hold_single_tail(snapshot, desc, finalized_date)
    else:
        rows = _we_do_not_hold(snapshot, desc, finalized_date, closing_date, end, payment)

    return [row for row in rows if not row.is_empty]
