"""
Credit Report Analyzer - Single Source of Truth Models

These models are the ONLY data structures that leave the extraction pipeline.
No module downstream of the assembler may reference the raw XML tree.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


# =============================================================================
# ENUMS
# =============================================================================

class AccountStatus(str, Enum):
    ACTIVE = "Active"
    CLOSED = "Closed"
    PENDING = "Pending"
    DEFAULTED = "Defaulted"
    SETTLED = "Settled"
    WRITTEN_OFF = "WrittenOff"
    UNKNOWN = "Unknown"


class AddressType(str, Enum):
    PERMANENT = "Permanent"
    CURRENT = "Current"
    OFFICE = "Office"


# =============================================================================
# INTERMEDIATE: TRANSLATED ACCOUNT (Output of Code Translator)
# =============================================================================

@dataclass(frozen=True)
class TranslatedAccount:
    """
    One tradeline after code translation, before display formatting.

    Holds the raw account number and raw YYYYMMDD dates; the assembler masks
    and reformats them and then drops this object.
    """
    type: str
    bank: str
    account_number: str
    current_balance: int
    amount_overdue: int
    credit_limit: int
    status: AccountStatus
    open_date: Optional[str] = None
    date_reported: Optional[str] = None
    date_closed: Optional[str] = None


# =============================================================================
# SSOT: CREDIT REPORT (Output of Record Assembler)
# =============================================================================

@dataclass(frozen=True)
class BasicDetails:
    """Identity block."""
    name: str
    mobile: str = "N/A"
    pan: str = "N/A"
    credit_score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mobile": self.mobile,
            "pan": self.pan,
            "creditScore": self.credit_score,
        }


@dataclass(frozen=True)
class ReportSummary:
    """
    Account summary block.

    active + closed may be less than total: written-off, settled and other
    terminal statuses are counted in total_accounts only.
    """
    total_accounts: int = 0
    active_accounts: int = 0
    closed_accounts: int = 0
    current_balance: int = 0
    secured_amount: int = 0
    unsecured_amount: int = 0
    last_7_days_enquiries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalAccounts": self.total_accounts,
            "activeAccounts": self.active_accounts,
            "closedAccounts": self.closed_accounts,
            "currentBalance": self.current_balance,
            "securedAmount": self.secured_amount,
            "unsecuredAmount": self.unsecured_amount,
            "last7DaysEnquiries": self.last_7_days_enquiries,
        }


@dataclass(frozen=True)
class CreditAccount:
    """Single tradeline, display-safe. account_number is already masked."""
    type: str
    bank: str
    account_number: str
    current_balance: int = 0
    amount_overdue: int = 0
    credit_limit: int = 0
    status: AccountStatus = AccountStatus.UNKNOWN
    open_date: Optional[str] = None
    date_reported: Optional[str] = None
    date_closed: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "bank": self.bank,
            "accountNumber": self.account_number,
            "currentBalance": self.current_balance,
            "amountOverdue": self.amount_overdue,
            "creditLimit": self.credit_limit,
            "status": self.status.value,
            "openDate": self.open_date,
            "dateReported": self.date_reported,
            "dateClosed": self.date_closed,
        }


@dataclass(frozen=True)
class Address:
    type: AddressType
    address: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "address": self.address}


@dataclass(frozen=True)
class CreditReport:
    """
    The normalized record handed to the persistence layer.

    Immutable once assembled; the store owns it from here on.
    """
    basic_details: BasicDetails
    report_summary: ReportSummary
    credit_accounts: List[CreditAccount] = field(default_factory=list)
    addresses: List[Address] = field(default_factory=list)
    file_name: str = ""
    upload_date: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape exposed by the API."""
        return {
            "basicDetails": self.basic_details.to_dict(),
            "reportSummary": self.report_summary.to_dict(),
            "creditAccounts": [acc.to_dict() for acc in self.credit_accounts],
            "addresses": [addr.to_dict() for addr in self.addresses],
            "fileName": self.file_name,
            "uploadDate": self.upload_date.isoformat(),
        }
