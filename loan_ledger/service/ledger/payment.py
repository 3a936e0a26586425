"""
Payment Processing for the Loan Ledger engine.

This module decides how much of each payment is profit recognition and
how much is capital recovery, and computes the loan's new pending
balance. It also carries the balance helpers used by collection screens
(pending amount, payoff check, progress).
"""

from decimal import ROUND_HALF_UP, Decimal

import structlog

from loan_ledger.core.metrics import record_payment_processed, record_profit_capped

from .models import PaymentInput, PaymentResult
from .money import (
    ZERO,
    Numeric,
    floor_at_zero,
    is_within_epsilon,
    ledger_context,
    quantize_money,
    to_decimal,
)
from .profit import calculate_profit_ratio
from .settings import LedgerSettings, ledger_settings

logger = structlog.get_logger(__name__)


def process_payment(
    payment_input: PaymentInput,
    settings: LedgerSettings = ledger_settings,
) -> PaymentResult:
    """
    Split a payment between profit and return to capital.

    Business Rules:
        - Bad debt: the whole payment is profit, nothing returns to capital
        - Otherwise: profit = amount x (loan profit / loan total debt)
        - Profit can never exceed the payment amount, even when the loan
          snapshot is corrupt (profit > total debt); only positive payments
          are logged and counted as capped
        - return_to_capital = amount - profit
        - new_pending_amount = max(0, pending - amount)
        - is_fully_paid when the new pending balance is within epsilon of 0

    Args:
        payment_input: Payment amount and the loan's current snapshot
        settings: Ledger settings (uses defaults if not provided)

    Returns:
        PaymentResult whose profit and capital parts sum exactly to amount
    """
    amount = to_decimal(payment_input.amount)
    pending_amount = to_decimal(payment_input.loan_pending_amount)

    with ledger_context(settings):
        if payment_input.is_bad_debt:
            profit_amount = amount
            return_to_capital = ZERO
        else:
            ratio = calculate_profit_ratio(
                payment_input.loan_profit_amount,
                payment_input.loan_total_debt,
                settings,
            )
            raw_profit = quantize_money(amount * ratio, settings)

            if raw_profit > amount:
                profit_amount = amount
                if amount > ZERO:
                    record_profit_capped()
                    logger.warning(
                        "payment_profit_capped",
                        amount=str(amount),
                        computed_profit=str(raw_profit),
                        loan_profit_amount=str(payment_input.loan_profit_amount),
                        loan_total_debt=str(payment_input.loan_total_debt),
                    )
            else:
                profit_amount = raw_profit

            return_to_capital = amount - profit_amount

        new_pending_amount = quantize_money(floor_at_zero(pending_amount - amount), settings)

    result = PaymentResult(
        amount=amount,
        profit_amount=profit_amount,
        return_to_capital=return_to_capital,
        new_pending_amount=new_pending_amount,
        is_fully_paid=is_within_epsilon(new_pending_amount, settings),
    )

    record_payment_processed(payment_input.is_bad_debt)
    logger.debug(
        "payment_processed",
        amount=str(result.amount),
        profit_amount=str(result.profit_amount),
        return_to_capital=str(result.return_to_capital),
        new_pending_amount=str(result.new_pending_amount),
        is_bad_debt=payment_input.is_bad_debt,
    )

    return result


def calculate_pending_amount(
    total_debt_acquired: Numeric,
    total_paid: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """Remaining balance of a loan given everything paid so far, floored at 0."""
    with ledger_context(settings):
        pending = to_decimal(total_debt_acquired) - to_decimal(total_paid)
    return quantize_money(floor_at_zero(pending), settings)


def is_loan_fully_paid(total_debt_acquired: Numeric, total_paid: Numeric) -> bool:
    return to_decimal(total_paid) >= to_decimal(total_debt_acquired)


def calculate_payment_progress(
    total_debt_acquired: Numeric,
    total_paid: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """
    Percentage of the total debt paid so far.

    Returns:
        Percentage rounded to 2 places (0 when total debt is 0)
    """
    total_debt_acquired = to_decimal(total_debt_acquired)
    if total_debt_acquired == ZERO:
        return Decimal("0.00")
    with ledger_context(settings):
        progress = to_decimal(total_paid) / total_debt_acquired * 100
        return progress.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
