"""
Profit Calculations for the Loan Ledger engine.

This module holds the derivation functions shared by origination and
payment processing:
- Profit ratio (profit / total debt)
- Base profit of a loan (requested amount x rate)
- Inherited profit on renewal (profit heredado)
- Proportional payment distribution
- Physical disbursement on renewal

Key rule for renewals: only the PROFIT PORTION of the prior loan's
pending balance is inherited, never the pending balance itself:

    profit_heredado = pending_amount_stored x (profit_amount / total_debt_acquired)

Example (prior loan of $3,000 at 40% for 14 weeks, 10 of 14 payments made):
    pending 1,200 x (1,200 / 4,200) = 342.86  (not 1,200)
"""

from decimal import Decimal

from .models import PaymentDistribution
from .money import (
    ZERO,
    Numeric,
    floor_at_zero,
    ledger_context,
    quantize_money,
    to_decimal,
)
from .settings import LedgerSettings, ledger_settings


def calculate_profit_ratio(
    profit_amount: Numeric,
    total_debt: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """
    Calculate the fraction of a loan's debt that is profit.

    This is the only divide-by-zero guard in the engine: a non-positive
    total debt yields 0. The ratio is returned at the full precision of
    the ledger context.

    Args:
        profit_amount: Total profit of the loan
        total_debt: Total debt of the loan (principal + profit)
        settings: Ledger settings (uses defaults if not provided)

    Returns:
        profit_amount / total_debt, or 0 if total_debt <= 0
    """
    total_debt = to_decimal(total_debt)
    if total_debt <= ZERO:
        return ZERO
    with ledger_context(settings):
        return to_decimal(profit_amount) / total_debt


def calculate_profit(
    requested_amount: Numeric,
    rate: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """
    Calculate the base profit of a loan.

    Example:
        calculate_profit(3000, "0.40") -> Decimal("1200.00")
    """
    with ledger_context(settings):
        profit = to_decimal(requested_amount) * to_decimal(rate)
    return quantize_money(profit, settings)


def calculate_profit_heredado(
    pending_amount_stored: Numeric,
    profit_amount: Numeric,
    total_debt_acquired: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """
    Calculate the profit a renewal inherits from the loan it replaces.

    Args:
        pending_amount_stored: Prior loan's unpaid balance (profit + capital)
        profit_amount: Prior loan's total profit
        total_debt_acquired: Prior loan's total debt

    Returns:
        pending_amount_stored x profit ratio, rounded to money places
    """
    ratio = calculate_profit_ratio(profit_amount, total_debt_acquired, settings)
    with ledger_context(settings):
        profit_heredado = to_decimal(pending_amount_stored) * ratio
    return quantize_money(profit_heredado, settings)


def calculate_payment_distribution(
    amount: Numeric,
    ratio: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> PaymentDistribution:
    """
    Split an amount into profit and return-to-capital by a profit ratio.

    The profit is rounded first and the capital portion is the remainder,
    so both parts always add up to the amount exactly.
    """
    amount = to_decimal(amount)
    with ledger_context(settings):
        profit = quantize_money(amount * to_decimal(ratio), settings)
        return PaymentDistribution(
            profit=profit,
            return_to_capital=amount - profit,
        )


def calculate_amount_to_give(
    requested_amount: Numeric,
    pending_debt: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """
    Calculate the cash physically handed over on a renewal.

    The prior loan's full pending balance is settled out of the new
    principal; the result never goes below 0.
    """
    with ledger_context(settings):
        amount_gived = to_decimal(requested_amount) - to_decimal(pending_debt)
    return quantize_money(floor_at_zero(amount_gived), settings)
