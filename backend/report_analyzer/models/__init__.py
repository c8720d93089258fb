"""Credit Report Analyzer - Data Models"""
from .ssot import (
    # Enums
    AccountStatus, AddressType,
    # Translator output
    TranslatedAccount,
    # Assembler output
    BasicDetails, ReportSummary, CreditAccount, Address, CreditReport,
)

__all__ = [
    "AccountStatus", "AddressType",
    "TranslatedAccount",
    "BasicDetails", "ReportSummary", "CreditAccount", "Address", "CreditReport",
]
