# ledger/chart.py
"""
Fixed chart of accounts used by the posting rules.

Account numbers are stored on ledger rows as strings; the name written
next to each number always comes from ``CHART``.
"""

CASH_CURRENT = "10001"
CASH_TRUST = "10002"
CASH_COMMISSION_TRUST = "10004"
AR_COMMISSION = "12200"
AP_OTHER_BROKERS = "21100"
TRUST_LIABILITY = "21300"
COMMISSION_PAYABLE = "21500"
HST_COLLECTED = "23000"
HST_INPUT_CREDIT = "23001"
COMMISSION_INCOME = "40100"
FEE_INCOME = "44100"
AGENT_COMMISSION = "50100"
OUTSIDE_BROKER_COMMISSION = "51100"
REFERRAL_FEES = "52100"

CHART = {
    CASH_CURRENT: "CASH - CURRENT ACCOUNT",
    CASH_TRUST: "CASH - TRUST",
    CASH_COMMISSION_TRUST: "CASH - COMMISSION TRUST ACCOUNT",
    AR_COMMISSION: "A/R - COMMISSION FROM DEALS",
    AP_OTHER_BROKERS: "A/P - OTHER BROKERS & REFERRALS",
    TRUST_LIABILITY: "LIABILITY FOR TRUST FUNDS HELD",
    COMMISSION_PAYABLE: "COMMISSION PAYABLE",
    HST_COLLECTED: "HST COLLECTED",
    HST_INPUT_CREDIT: "HST INPUT TAX CREDIT",
    COMMISSION_INCOME: "COMMISSION INCOME",
    FEE_INCOME: "FEE DEDUCTED INCOME",
    AGENT_COMMISSION: "AGENT'S COMMISSION",
    OUTSIDE_BROKER_COMMISSION: "OUTSIDE BROKER COMMISSION",
    REFERRAL_FEES: "REFERRAL FEES",
}


def account_name(number: str) -> str:
    """Name for a chart account; unknown numbers map to an empty string."""
    return CHART.get(str(number), "")
