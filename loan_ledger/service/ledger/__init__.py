"""
Loan Ledger Engine - loan origination, renewal and payment accounting
"""

from .settings import LedgerSettings, ledger_settings
from .models import (
    LoanStatus,
    LoanOriginationInput,
    PriorLoanState,
    LoanOriginationResult,
    PaymentInput,
    PaymentResult,
    PaymentDistribution,
)
from .money import to_decimal, quantize_money, quantize_ratio, ledger_context
from .profit import (
    calculate_profit_ratio,
    calculate_profit,
    calculate_profit_heredado,
    calculate_payment_distribution,
    calculate_amount_to_give,
)
from .origination import create_loan
from .payment import (
    process_payment,
    calculate_pending_amount,
    is_loan_fully_paid,
    calculate_payment_progress,
)
from .status import get_loan_status
from .portfolio import calculate_recovery_rate, calculate_average_ticket
from .validators import (
    validate_positive_amount,
    validate_past_date,
    validate_loan_amounts,
    validate_origination_input,
)

__all__ = [
    # Settings
    "LedgerSettings",
    "ledger_settings",
    # Models
    "LoanStatus",
    "LoanOriginationInput",
    "PriorLoanState",
    "LoanOriginationResult",
    "PaymentInput",
    "PaymentResult",
    "PaymentDistribution",
    # Decimal helpers
    "to_decimal",
    "quantize_money",
    "quantize_ratio",
    "ledger_context",
    # Profit
    "calculate_profit_ratio",
    "calculate_profit",
    "calculate_profit_heredado",
    "calculate_payment_distribution",
    "calculate_amount_to_give",
    # Origination
    "create_loan",
    # Payments
    "process_payment",
    "calculate_pending_amount",
    "is_loan_fully_paid",
    "calculate_payment_progress",
    # Status
    "get_loan_status",
    # Portfolio
    "calculate_recovery_rate",
    "calculate_average_ticket",
    # Validation
    "validate_positive_amount",
    "validate_past_date",
    "validate_loan_amounts",
    "validate_origination_input",
]
