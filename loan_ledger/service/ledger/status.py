"""
Loan Status Derivation for the Loan Ledger engine.

States: ACTIVE, FINISHED, BAD_DEBT.

    ACTIVE -> FINISHED   a payment drives the pending balance to ~0
    ACTIVE -> BAD_DEBT   an external process writes the loan off

FINISHED and BAD_DEBT are terminal here. A renewal creates a new loan
that references the old one; it never moves the old loan back to ACTIVE.
The engine only classifies; the caller stores the status.
"""

from datetime import date
from typing import Optional

from .models import LoanStatus
from .money import Numeric, is_within_epsilon, to_decimal
from .settings import LedgerSettings, ledger_settings


def get_loan_status(
    pending_amount: Numeric,
    bad_debt_date: Optional[date] = None,
    settings: LedgerSettings = ledger_settings,
) -> LoanStatus:
    """
    Classify a loan from its pending balance and bad-debt marker.

    A paid-off loan is FINISHED even if it was written off earlier.

    Args:
        pending_amount: Current pending balance
        bad_debt_date: Date the loan was written off (None if never)
        settings: Ledger settings (uses defaults if not provided)

    Returns:
        LoanStatus.FINISHED, LoanStatus.BAD_DEBT or LoanStatus.ACTIVE
    """
    if is_within_epsilon(to_decimal(pending_amount), settings):
        return LoanStatus.FINISHED
    if bad_debt_date is not None:
        return LoanStatus.BAD_DEBT
    return LoanStatus.ACTIVE
