"""
Loan Origination for the Loan Ledger engine.

This module computes the full financial snapshot of a loan at signing:
1. Base profit from the requested amount and rate
2. Inherited profit from a prior loan (renewals only)
3. Total debt, pending balance and weekly installment
4. Physical disbursement (the prior balance is settled from the new principal)
5. Profit ratio used to split future payments

This is the entry point used by loan-creation and renewal services.
"""

from typing import Optional

import structlog

from loan_ledger.core.metrics import record_disbursement_floored, record_loan_calculated

from .models import LoanOriginationInput, LoanOriginationResult, PriorLoanState
from .money import ZERO, ledger_context, quantize_money, quantize_ratio, to_decimal
from .profit import (
    calculate_amount_to_give,
    calculate_profit,
    calculate_profit_heredado,
    calculate_profit_ratio,
)
from .settings import LedgerSettings, ledger_settings

logger = structlog.get_logger(__name__)


def create_loan(
    loan_input: LoanOriginationInput,
    prior_loan: Optional[PriorLoanState] = None,
    settings: LedgerSettings = ledger_settings,
) -> LoanOriginationResult:
    """
    Compute the financial snapshot of a new loan or renewal.

    Business Rules:
        - profit_base = requested_amount x rate
        - profit_heredado = prior pending x (prior profit / prior total debt)
        - profit_amount = profit_base + profit_heredado
        - total_debt_acquired = requested_amount + profit_amount
        - amount_gived = max(0, requested_amount - prior pending)
        - expected_weekly_payment = total_debt_acquired / week_duration

    Nothing here raises for zero or negative inputs; callers validate
    user-facing values beforehand (see validators.validate_origination_input).

    Args:
        loan_input: Requested amount, rate and term
        prior_loan: Snapshot of the loan being renewed (None for new loans)
        settings: Ledger settings (uses defaults if not provided)

    Returns:
        LoanOriginationResult with every monetary field rounded to money places
    """
    with ledger_context(settings):
        requested_amount = quantize_money(to_decimal(loan_input.requested_amount), settings)

        profit_base = calculate_profit(requested_amount, loan_input.rate, settings)

        if prior_loan is None:
            profit_heredado = ZERO
            amount_gived = requested_amount
        else:
            prior_pending = to_decimal(prior_loan.pending_amount_stored)
            profit_heredado = calculate_profit_heredado(
                prior_pending,
                prior_loan.profit_amount,
                prior_loan.total_debt_acquired,
                settings,
            )
            amount_gived = calculate_amount_to_give(requested_amount, prior_pending, settings)

            if prior_pending > requested_amount:
                record_disbursement_floored()
                logger.info(
                    "renewal_disbursement_floored",
                    requested_amount=str(requested_amount),
                    prior_pending_amount=str(prior_pending),
                )

        profit_amount = quantize_money(profit_base + profit_heredado, settings)
        return_to_capital = requested_amount
        total_debt_acquired = quantize_money(return_to_capital + profit_amount, settings)

        if loan_input.week_duration > 0:
            expected_weekly_payment = quantize_money(
                total_debt_acquired / loan_input.week_duration, settings
            )
        else:
            expected_weekly_payment = quantize_money(ZERO, settings)

        profit_ratio = quantize_ratio(
            calculate_profit_ratio(profit_amount, total_debt_acquired, settings), settings
        )

    result = LoanOriginationResult(
        requested_amount=requested_amount,
        amount_gived=amount_gived,
        profit_base=profit_base,
        profit_heredado=quantize_money(profit_heredado, settings),
        profit_amount=profit_amount,
        return_to_capital=return_to_capital,
        total_debt_acquired=total_debt_acquired,
        pending_amount_stored=total_debt_acquired,
        expected_weekly_payment=expected_weekly_payment,
        profit_ratio=profit_ratio,
        is_renewal=prior_loan is not None,
    )

    record_loan_calculated(result.is_renewal)
    logger.debug(
        "loan_calculated",
        is_renewal=result.is_renewal,
        requested_amount=str(result.requested_amount),
        profit_amount=str(result.profit_amount),
        total_debt_acquired=str(result.total_debt_acquired),
    )

    return result
