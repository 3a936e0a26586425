"""
Strict input validation for callers of the Loan Ledger engine.

The calculators themselves never raise for business inputs; they clamp.
Services that accept user-facing values call these first and translate
the resulting ValidationException into their own error response.
"""

from datetime import date, datetime
from typing import Optional, Union

from loan_ledger.domain.exceptions import (
    AmountExceedsRequestedException,
    FutureDateException,
    InvalidAmountException,
)

from .models import LoanOriginationInput
from .money import ZERO, Numeric, to_decimal


def validate_positive_amount(amount: Numeric, field_name: str) -> None:
    """
    Raises:
        InvalidAmountException: If amount <= 0
    """
    if to_decimal(amount) <= ZERO:
        raise InvalidAmountException(field_name, amount)


def validate_past_date(
    value: Union[date, datetime],
    field_name: str,
    now: Optional[Union[date, datetime]] = None,
) -> None:
    """
    Ensure a date is not in the future.

    Args:
        value: Date or datetime to check
        field_name: Name reported in the exception
        now: Reference point (defaults to today / the current time). When only
            one of value and now is a datetime, both are compared as dates.

    Raises:
        FutureDateException: If value is after now
    """
    if now is None:
        now = datetime.now(value.tzinfo) if isinstance(value, datetime) else date.today()
    checked = value
    if isinstance(value, datetime) != isinstance(now, datetime):
        checked = value.date() if isinstance(value, datetime) else value
        now = now.date() if isinstance(now, datetime) else now
    if checked > now:
        raise FutureDateException(field_name, value)


def validate_loan_amounts(requested_amount: Numeric, amount_gived: Numeric) -> None:
    """
    Raises:
        AmountExceedsRequestedException: If the disbursement exceeds the request
    """
    if to_decimal(amount_gived) > to_decimal(requested_amount):
        raise AmountExceedsRequestedException(requested_amount, amount_gived)


def validate_origination_input(loan_input: LoanOriginationInput) -> None:
    """
    Validate the user-facing parameters of a new loan.

    Raises:
        InvalidAmountException: If requested_amount or week_duration is not
            positive, or rate is negative
    """
    validate_positive_amount(loan_input.requested_amount, "requested_amount")
    validate_positive_amount(loan_input.week_duration, "week_duration")
    if to_decimal(loan_input.rate) < ZERO:
        raise InvalidAmountException(
            "rate",
            loan_input.rate,
            message=f"rate cannot be negative (got {loan_input.rate})",
        )
