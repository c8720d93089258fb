"""
Credit Report Analyzer - Code Translator & Aggregator (stage 3)

Translates each CAIS account node into a TranslatedAccount and computes the
report summary.

Summary balances come from the CAIS_Summary block when it is populated. When
its total outstanding balance is exactly zero the block is treated as absent
and the balances are rebuilt from the accounts themselves:

    current   = sum(round(Current_Balance))
    secured   = sum(round(Current_Balance) where Portfolio_Type in {I, M})
    unsecured = current - secured

Stage 3 never fails the extraction. A broken account is dropped, a broken
summary field falls back to 0.
"""
from __future__ import annotations
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List, Optional, Sequence, Tuple

from ...models.ssot import ReportSummary, TranslatedAccount
from .code_tables import (
    ACTIVE_STATUS_CODES,
    CLOSED_STATUS_CODES,
    SECURED_PORTFOLIO_TYPES,
    compose_account_label,
    translate_status,
)
from .errors import PerAccountFormattingError
from .field_locator import ExtractionContext, text_at

logger = logging.getLogger(__name__)

UNKNOWN_BANK = "Unknown Bank"
UNKNOWN_ACCOUNT_NUMBER = "XXXX"

ZERO = Decimal("0")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _parse_decimal(value: Optional[str]) -> Optional[Decimal]:
    """Parse an amount string. Returns None when empty, raises ValueError when not numeric."""
    if not value:
        return None
    cleaned = value.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"not a number: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return amount


def _lenient_decimal(value: Optional[str]) -> Decimal:
    """Like _parse_decimal but 0 on absence or garbage."""
    try:
        return _parse_decimal(value) or ZERO
    except ValueError:
        logger.warning(f"Ignoring non-numeric amount {value!r}")
        return ZERO


def round_amount(amount: Decimal) -> int:
    """Round half-up to a whole currency unit."""
    return int(amount.to_integral_value(rounding=ROUND_HALF_UP))


def _non_negative(amount: Decimal) -> Decimal:
    return amount if amount > ZERO else ZERO


def _parse_count(value: Optional[str]) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


# =============================================================================
# PER-ACCOUNT TRANSLATION
# =============================================================================

def _account_amount(node: Any, *fields: str) -> int:
    """First non-empty amount among fields, rounded and clamped at 0."""
    for name in fields:
        amount = _parse_decimal(text_at(node, (name,)))
        if amount is not None:
            return round_amount(_non_negative(amount))
    return 0


def translate_account(node: Any, index: int = -1) -> TranslatedAccount:
    """
    Translate one CAIS_Account_DETAILS node.

    Raises PerAccountFormattingError when the node cannot be translated.
    """
    if not isinstance(node, dict):
        raise PerAccountFormattingError(
            f"account #{index} is not an element block: {type(node).__name__}", index
        )

    try:
        status_code = text_at(node, ("Account_Status",))
        portfolio_type = text_at(node, ("Portfolio_Type",))

        return TranslatedAccount(
            type=compose_account_label(text_at(node, ("Account_Type",)), portfolio_type),
            bank=text_at(node, ("Subscriber_Name",)) or UNKNOWN_BANK,
            account_number=text_at(node, ("Account_Number",)) or UNKNOWN_ACCOUNT_NUMBER,
            current_balance=_account_amount(node, "Current_Balance"),
            amount_overdue=_account_amount(node, "Amount_Past_Due"),
            credit_limit=_account_amount(
                node, "Credit_Limit_Amount", "Highest_Credit_or_Original_Loan_Amount"
            ),
            status=translate_status(status_code),
            open_date=text_at(node, ("Open_Date",)) or None,
            date_reported=text_at(node, ("Date_Reported",)) or None,
            date_closed=text_at(node, ("Date_Closed",)) or None,
        )
    except (ValueError, TypeError, AttributeError, ArithmeticError) as e:
        raise PerAccountFormattingError(f"account #{index}: {e}", index) from e


def translate_accounts(accounts: Sequence[Any]) -> List[TranslatedAccount]:
    """Translate every account, dropping the ones that fail."""
    translated: List[TranslatedAccount] = []
    for index, node in enumerate(accounts):
        try:
            translated.append(translate_account(node, index))
        except PerAccountFormattingError as e:
            logger.warning(f"Dropping tradeline: {e}")
    return translated


# =============================================================================
# SUMMARY
# =============================================================================

def _count_statuses(accounts: Sequence[Any]) -> Tuple[int, int]:
    active = closed = 0
    for node in accounts:
        code = text_at(node, ("Account_Status",))
        if code in ACTIVE_STATUS_CODES:
            active += 1
        elif code in CLOSED_STATUS_CODES:
            closed += 1
    return active, closed


def _fallback_balances(accounts: Sequence[Any]) -> Tuple[int, int, int]:
    # Each balance is rounded before summing, the same way tradelines carry it.
    current = secured_amount = 0
    for node in accounts:
        balance = round_amount(_non_negative(_lenient_decimal(text_at(node, ("Current_Balance",)))))
        current += balance
        if text_at(node, ("Portfolio_Type",)) in SECURED_PORTFOLIO_TYPES:
            secured_amount += balance

    unsecured_amount = current - secured_amount
    if unsecured_amount < 0:
        logger.warning(
            f"Secured balance {secured_amount} exceeds total {current}; clamping unsecured to 0"
        )
        unsecured_amount = 0
    return current, secured_amount, unsecured_amount


def compute_summary(context: ExtractionContext, accounts: Sequence[Any]) -> ReportSummary:
    active, closed = _count_statuses(accounts)

    summary_block = context.balance_summary
    current = _lenient_decimal(text_at(summary_block, ("Outstanding_Balance_All",)))

    if current == ZERO:
        logger.info("CAIS summary balance absent or zero; summing account balances")
        current_balance, secured_amount, unsecured_amount = _fallback_balances(accounts)
    else:
        current_balance = round_amount(_non_negative(current))
        secured_amount = round_amount(_non_negative(
            _lenient_decimal(text_at(summary_block, ("Outstanding_Balance_Secured",)))
        ))
        unsecured_amount = round_amount(_non_negative(
            _lenient_decimal(text_at(summary_block, ("Outstanding_Balance_UnSecured",)))
        ))

    return ReportSummary(
        total_accounts=len(accounts),
        active_accounts=active,
        closed_accounts=closed,
        current_balance=current_balance,
        secured_amount=secured_amount,
        unsecured_amount=unsecured_amount,
        last_7_days_enquiries=_parse_count(
            text_at(context.enquiry_summary, ("TotalCAPSLast7Days",))
        ),
    )


def translate_and_aggregate(
    context: ExtractionContext,
    accounts: Optional[Sequence[Any]] = None,
) -> Tuple[ReportSummary, List[TranslatedAccount]]:
    """Run stage 3: summary over every raw account, translation per account."""
    if accounts is None:
        accounts = context.accounts

    summary = compute_summary(context, accounts)
    translated = translate_accounts(accounts)

    if len(translated) < len(accounts):
        logger.warning(f"Dropped {len(accounts) - len(translated)} of {len(accounts)} tradelines")
    return summary, translated
