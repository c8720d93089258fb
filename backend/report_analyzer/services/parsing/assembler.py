"""
Credit Report Analyzer - Record Assembler (stage 4)

Builds the final CreditReport: display transforms (dates, masked account
numbers, address string) plus the one completeness check the pipeline
enforces, a non-empty applicant name.
"""
from __future__ import annotations
import logging
import re
from datetime import datetime
from typing import Any, List, Optional, Sequence

from ...models.ssot import (
    Address, AddressType, BasicDetails, CreditAccount, CreditReport,
    ReportSummary, TranslatedAccount,
)
from .errors import PerAccountFormattingError, PerAddressFormattingError, ValidationError
from .field_locator import lookup_path, text_at
from .xml_tree import as_list

logger = logging.getLogger(__name__)

ADDRESS_UNAVAILABLE = "Address not available in XML"

ADDRESS_FIELDS = (
    "First_Line_Of_Address_non_normalized",
    "Second_Line_Of_Address_non_normalized",
    "Third_Line_Of_Address_non_normalized",
    "City_non_normalized",
    "State_non_normalized",
    "ZIP_Postal_Code_non_normalized",
)

EMPTY_DATE = "00000000"
DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$", re.ASCII)


# =============================================================================
# DISPLAY TRANSFORMS
# =============================================================================

def format_date(value: Optional[str]) -> Optional[str]:
    """YYYYMMDD -> DD/MM/YYYY. None for absent, all-zero or malformed input."""
    if not isinstance(value, str) or len(value) != 8 or value == EMPTY_DATE:
        return None
    match = DATE_RE.match(value)
    if not match:
        return None
    year, month, day = match.groups()
    return f"{day}/{month}/{year}"


def mask_account_number(account_number: Any) -> str:
    """
    Keep only the last 4 characters visible.

    <= 4 chars:  unchanged
    5-8 chars:   X for every hidden character, e.g. XXXX5678
    9-12 chars:  XXXX-5678
    > 12 chars:  XXXX-XXXX-5678
    """
    text = str(account_number)
    if len(text) <= 4:
        return text

    last4 = text[-4:]
    if len(text) > 12:
        return "XXXX-XXXX-" + last4
    if len(text) > 8:
        return "XXXX-" + last4
    return "X" * (len(text) - 4) + last4


def format_address(block: Any) -> str:
    """Join the non-empty address components of one holder address block."""
    if not isinstance(block, dict):
        raise PerAddressFormattingError(
            f"address block is not an element block: {type(block).__name__}"
        )
    components = [text_at(block, (name,)) for name in ADDRESS_FIELDS]
    return ", ".join(part for part in components if part)


def build_addresses(accounts: Sequence[Any], limit: int = 1) -> List[Address]:
    """
    Collect unique holder addresses in account order, at most `limit` of them.

    Only the CAIS holder address is read, so every entry is Permanent. Falls
    back to a single sentinel entry when nothing usable is found.
    """
    addresses: List[Address] = []
    seen = set()

    for index, node in enumerate(accounts):
        for block in as_list(lookup_path(node, ("CAIS_Holder_Address_Details",))):
            try:
                full_address = format_address(block)
            except PerAddressFormattingError as e:
                logger.warning(f"Skipping address on account #{index}: {e}")
                continue

            if not full_address or full_address in seen:
                continue
            seen.add(full_address)
            addresses.append(Address(type=AddressType.PERMANENT, address=full_address))
            if len(addresses) >= limit:
                return addresses

    if not addresses:
        addresses.append(Address(type=AddressType.PERMANENT, address=ADDRESS_UNAVAILABLE))
    return addresses


def finalize_account(account: TranslatedAccount) -> CreditAccount:
    """Mask the account number and reformat dates. The raw number is not kept."""
    try:
        return CreditAccount(
            type=account.type,
            bank=account.bank,
            account_number=mask_account_number(account.account_number),
            current_balance=account.current_balance,
            amount_overdue=account.amount_overdue,
            credit_limit=account.credit_limit,
            status=account.status,
            open_date=format_date(account.open_date),
            date_reported=format_date(account.date_reported),
            date_closed=format_date(account.date_closed),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise PerAccountFormattingError(f"cannot format tradeline {account.bank!r}: {e}") from e


# =============================================================================
# ASSEMBLY
# =============================================================================

def assemble(
    identity: BasicDetails,
    summary: ReportSummary,
    accounts: Sequence[TranslatedAccount],
    addresses: Sequence[Address],
    file_name: str,
    upload_date: Optional[datetime] = None,
) -> CreditReport:
    """
    Emit the normalized CreditReport.

    Raises ValidationError when the applicant name is empty.
    """
    if not identity.name or not identity.name.strip():
        raise ValidationError("Invalid XML structure: Missing required fields (applicant name)")

    credit_accounts: List[CreditAccount] = []
    for account in accounts:
        try:
            credit_accounts.append(finalize_account(account))
        except PerAccountFormattingError as e:
            logger.warning(f"Dropping tradeline: {e}")

    return CreditReport(
        basic_details=identity,
        report_summary=summary,
        credit_accounts=credit_accounts,
        addresses=list(addresses),
        file_name=file_name,
        upload_date=upload_date or datetime.utcnow(),
    )
