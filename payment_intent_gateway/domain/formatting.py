"""Scheme formatting - maps a PaymentIntent onto a SEPA or Faster Payments payload"""

import logging
import re
from datetime import datetime
from typing import Optional

from payment_intent_gateway.domain.models import (
    DEFAULT_CURRENCY,
    FASTER_PAYMENTS_REFERENCE_LIMIT,
    FasterPaymentsPayment,
    FormattedPayment,
    PaymentIntent,
    PaymentType,
    SEPAPayment,
    Unformatted,
)
from payment_intent_gateway.utils.date_utils import utc_calendar_date, utc_now

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"[^0-9]")

ACCOUNT_NUMBER_DIGITS = 8
SORT_CODE_DIGITS = 6
UK_DOMESTIC_DIGITS = ACCOUNT_NUMBER_DIGITS + SORT_CODE_DIGITS


def split_uk_account(iban: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """
    Derive (sort_code, account_number) from an IBAN-like string.

    Keeps only the digits: the account number is the last 8, the sort code
    the 6 before them. Shorter digit strings yield shorter or empty parts.

    Example:
        GB29NWBK60161331926819 -> digits 2960161331926819
        -> sort code "601613", account number "31926819"
    """
    if iban is None:
        return None, None

    digits = _NON_DIGIT_RE.sub("", iban)
    if len(digits) < UK_DOMESTIC_DIGITS:
        logger.warning(
            "Account identifier has fewer digits than sort code + account number",
            extra={"digit_count": len(digits)},
        )

    account_number = digits[-ACCOUNT_NUMBER_DIGITS:]
    sort_code = digits[-UK_DOMESTIC_DIGITS:-ACCOUNT_NUMBER_DIGITS]
    return sort_code, account_number


def format_sepa(intent: PaymentIntent, now: datetime) -> SEPAPayment:
    return SEPAPayment(
        creditor_name=intent.recipient_name,
        creditor_iban=intent.iban,
        amount=intent.amount,
        currency=intent.currency or DEFAULT_CURRENCY,
        remittance_information=intent.reference,
        execution_date=utc_calendar_date(now),
    )


def format_faster_payments(intent: PaymentIntent, now: datetime) -> FasterPaymentsPayment:
    sort_code, account_number = split_uk_account(intent.iban)
    reference = intent.reference[:FASTER_PAYMENTS_REFERENCE_LIMIT] if intent.reference is not None else None

    # Currency is always GBP, whatever the intent states
    return FasterPaymentsPayment(
        payee_name=intent.recipient_name,
        payee_account_number=account_number,
        sort_code=sort_code,
        amount=intent.amount,
        reference=reference,
        payment_date_time=now,
    )


def format_payment(intent: PaymentIntent, now: datetime | None = None) -> FormattedPayment:
    """
    Format *intent* for its suggested scheme.

    Never fails: an undeterminable scheme yields ``Unformatted``. Amounts are
    passed through as extracted.
    """
    now = now or utc_now()

    if intent.suggested_payment_type == PaymentType.SEPA:
        return format_sepa(intent, now)
    elif intent.suggested_payment_type == PaymentType.FASTER_PAYMENTS:
        return format_faster_payments(intent, now)
    else:
        return Unformatted()
