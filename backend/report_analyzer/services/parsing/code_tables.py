"""
Credit Report Analyzer - Bureau Code Tables

Immutable code-to-label mappings, each with an explicit unknown-code policy:

- status:          unknown code -> AccountStatus.UNKNOWN
- account type:    unknown code -> "Account Type <code>" (raw code kept for audit)
- portfolio type:  unknown or absent code -> no qualifier
"""
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

from ...models.ssot import AccountStatus


# =============================================================================
# ACCOUNT STATUS
# =============================================================================

STATUS_CODES: Mapping[str, AccountStatus] = MappingProxyType({
    "11": AccountStatus.ACTIVE,
    "13": AccountStatus.CLOSED,
    "21": AccountStatus.ACTIVE,
    "22": AccountStatus.ACTIVE,
    "23": AccountStatus.ACTIVE,
    "24": AccountStatus.ACTIVE,
    "25": AccountStatus.ACTIVE,
    "53": AccountStatus.DEFAULTED,
    "71": AccountStatus.ACTIVE,
    "78": AccountStatus.SETTLED,
    "80": AccountStatus.WRITTEN_OFF,
    "82": AccountStatus.WRITTEN_OFF,
    "83": AccountStatus.WRITTEN_OFF,
    "84": AccountStatus.WRITTEN_OFF,
})

# Buckets for the summary counts. 22-25 display as Active but are not
# counted in the active bucket.
ACTIVE_STATUS_CODES: FrozenSet[str] = frozenset({"11", "21", "71"})
CLOSED_STATUS_CODES: FrozenSet[str] = frozenset({"13"})


# =============================================================================
# ACCOUNT TYPE
# =============================================================================

DEFAULT_ACCOUNT_TYPE_CODE = "00"

ACCOUNT_TYPES: Mapping[str, str] = MappingProxyType({
    "00": "Auto Loan",
    "01": "Housing Loan",
    "02": "Property Loan",
    "03": "Loan Against Shares",
    "04": "Personal Loan",
    "05": "Consumer Loan",
    "06": "Gold Loan",
    "07": "Education Loan",
    "08": "Loan to Professional",
    "09": "Credit Card",
    "10": "Credit Card",
    "11": "Leasing",
    "12": "Overdraft",
    "13": "Two-wheeler Loan",
    "14": "Non-funded Credit Facility",
    "15": "Loan Against Bank Deposits",
    "16": "Fleet Card",
    "17": "Commercial Vehicle Loan",
    "18": "Telco - Wireless",
    "19": "Telco - Broadband",
    "20": "Telco - Landline",
    "31": "Secured Credit Card",
    "32": "Used Car Loan",
    "33": "Construction Equipment Loan",
    "34": "Tractor Loan",
    "35": "Corporate Credit Card",
    "36": "Kisan Credit Card",
    "37": "Loan on Credit Card",
    "38": "Prime Minister Jaan Dhan Yojana",
    "39": "Mudra Loans",
    "43": "Microfinance - Business Loan",
    "44": "Microfinance - Personal Loan",
    "45": "Microfinance - Housing Loan",
    "47": "Microfinance - Others",
    "51": "Business Loan - General",
    "52": "Business Loan - Priority Sector - Small Business",
    "53": "Business Loan - Priority Sector - Agriculture",
    "54": "Business Loan - Priority Sector - Others",
    "55": "Business Loan - Secured",
    "56": "Business Loan - Unsecured",
    "59": "Business Non-funded Credit Facility - General",
    "61": "Business Non-funded Credit Facility - Priority Sector - Small Business",
})


# =============================================================================
# PORTFOLIO TYPE
# =============================================================================

PORTFOLIO_TYPES: Mapping[str, str] = MappingProxyType({
    "R": "Revolving",
    "I": "Installment",  # Term loans
    "M": "Mortgage",
    "O": "Other",
})

# Portfolio types counted as secured in the fallback balance split
SECURED_PORTFOLIO_TYPES: FrozenSet[str] = frozenset({"I", "M"})


# =============================================================================
# LOOKUPS
# =============================================================================

def translate_status(code: Optional[str]) -> AccountStatus:
    return STATUS_CODES.get((code or "").strip(), AccountStatus.UNKNOWN)


def translate_account_type(code: Optional[str]) -> str:
    code = (code or "").strip() or DEFAULT_ACCOUNT_TYPE_CODE
    return ACCOUNT_TYPES.get(code, f"Account Type {code}")


def translate_portfolio_type(code: Optional[str]) -> Optional[str]:
    return PORTFOLIO_TYPES.get((code or "").strip())


def compose_account_label(account_type_code: Optional[str], portfolio_code: Optional[str]) -> str:
    """'Personal Loan (Installment)', or just 'Personal Loan' without a known portfolio type."""
    label = translate_account_type(account_type_code)
    qualifier = translate_portfolio_type(portfolio_code)
    return f"{label} ({qualifier})" if qualifier else label
