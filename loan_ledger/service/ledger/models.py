"""
Data models for the loan accounting engine.

These are plain immutable values: callers build the inputs from whatever
storage records they own, and persist the fields of the results. No
database entity ever enters the engine.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .money import Numeric


class LoanStatus(str, Enum):
    """Loan status derived from the pending balance and bad-debt marker."""
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"  # Pending balance paid down to ~0
    BAD_DEBT = "BAD_DEBT"  # Written off as uncollectable


@dataclass(frozen=True)
class LoanOriginationInput:
    """
    Parameters of a new loan or renewal.

    Attributes:
        requested_amount: Principal the borrower asked for (>= 0)
        rate: Fractional rate for the whole term (0.40 = 40%)
        week_duration: Number of weekly installments
    """
    requested_amount: Numeric
    rate: Numeric
    week_duration: int


@dataclass(frozen=True)
class PriorLoanState:
    """
    Financial snapshot of the loan being renewed.

    Attributes:
        pending_amount_stored: Unpaid balance (profit + capital) still owed
        profit_amount: Total profit embedded in that loan's debt
        total_debt_acquired: That loan's total debt at origination
    """
    pending_amount_stored: Numeric
    profit_amount: Numeric
    total_debt_acquired: Numeric


@dataclass(frozen=True)
class LoanOriginationResult:
    """
    Complete financial snapshot of a loan at signing time.

    Attributes:
        requested_amount: Principal requested
        amount_gived: Physical disbursement (requested minus prior pending, floored at 0)
        profit_base: requested_amount x rate
        profit_heredado: Profit inherited from the prior loan (0 for new loans)
        profit_amount: profit_base + profit_heredado
        return_to_capital: Principal component owed (= requested_amount)
        total_debt_acquired: requested_amount + profit_amount
        pending_amount_stored: Initial pending balance (= total_debt_acquired)
        expected_weekly_payment: total_debt_acquired / week_duration
        profit_ratio: profit_amount / total_debt_acquired
        is_renewal: Whether a prior loan was absorbed
    """
    requested_amount: Decimal
    amount_gived: Decimal
    profit_base: Decimal
    profit_heredado: Decimal
    profit_amount: Decimal
    return_to_capital: Decimal
    total_debt_acquired: Decimal
    pending_amount_stored: Decimal
    expected_weekly_payment: Decimal
    profit_ratio: Decimal
    is_renewal: bool = False

    def to_dict(self) -> dict:
        """Convert to storage format (decimals as strings)."""
        return {
            "requested_amount": str(self.requested_amount),
            "amount_gived": str(self.amount_gived),
            "profit_base": str(self.profit_base),
            "profit_heredado": str(self.profit_heredado),
            "profit_amount": str(self.profit_amount),
            "return_to_capital": str(self.return_to_capital),
            "total_debt_acquired": str(self.total_debt_acquired),
            "pending_amount_stored": str(self.pending_amount_stored),
            "expected_weekly_payment": str(self.expected_weekly_payment),
            "profit_ratio": str(self.profit_ratio),
            "is_renewal": self.is_renewal,
        }


@dataclass(frozen=True)
class PaymentInput:
    """
    A payment received against a loan, plus the loan's current snapshot.

    Attributes:
        amount: Payment received
        loan_profit_amount: Loan's total profit
        loan_total_debt: Loan's total debt (principal + profit)
        loan_pending_amount: Loan's pending balance before this payment
        is_bad_debt: Whether the loan has been written off
    """
    amount: Numeric
    loan_profit_amount: Numeric
    loan_total_debt: Numeric
    loan_pending_amount: Numeric
    is_bad_debt: bool = False


@dataclass(frozen=True)
class PaymentResult:
    """
    How a payment splits between profit and capital.

    profit_amount + return_to_capital always equals amount.
    """
    amount: Decimal
    profit_amount: Decimal
    return_to_capital: Decimal
    new_pending_amount: Decimal
    is_fully_paid: bool

    def to_dict(self) -> dict:
        """Convert to storage format (decimals as strings)."""
        return {
            "amount": str(self.amount),
            "profit_amount": str(self.profit_amount),
            "return_to_capital": str(self.return_to_capital),
            "new_pending_amount": str(self.new_pending_amount),
            "is_fully_paid": self.is_fully_paid,
        }


@dataclass(frozen=True)
class PaymentDistribution:
    """Profit and capital portions of an arbitrary amount."""
    profit: Decimal
    return_to_capital: Decimal
