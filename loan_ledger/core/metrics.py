"""Prometheus metrics for the Loan Ledger engine.

Business Metrics (for Product/Finance):
- loan_ledger_loans_calculated_total: Originations by kind (new, renewal)
- loan_ledger_payments_processed_total: Payments by kind (regular, bad_debt)

Data Quality Metrics (for Engineering):
- loan_ledger_payment_profit_capped_total: Profit guard activations
- loan_ledger_disbursement_floored_total: Renewals whose prior balance
  exceeded the new principal
"""

from prometheus_client import Counter, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from .config import settings


# =============================================================================
# Business Metrics
# =============================================================================

loans_calculated_total = Counter(
    "loan_ledger_loans_calculated_total",
    "Total number of loan originations calculated",
    ["kind"],  # new, renewal
)

payments_processed_total = Counter(
    "loan_ledger_payments_processed_total",
    "Total number of payments distributed between profit and capital",
    ["kind"],  # regular, bad_debt
)


# =============================================================================
# Data Quality Metrics
# =============================================================================

payment_profit_capped_total = Counter(
    "loan_ledger_payment_profit_capped_total",
    "Payments whose proportional profit exceeded the payment amount",
)

disbursement_floored_total = Counter(
    "loan_ledger_disbursement_floored_total",
    "Renewals where the prior pending balance exceeded the requested amount",
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_loan_calculated(is_renewal: bool) -> None:
    """Record a loan origination in metrics."""
    if not settings.metrics_enabled:
        return
    kind = "renewal" if is_renewal else "new"
    loans_calculated_total.labels(kind=kind).inc()


def record_payment_processed(is_bad_debt: bool) -> None:
    """Record a processed payment in metrics."""
    if not settings.metrics_enabled:
        return
    kind = "bad_debt" if is_bad_debt else "regular"
    payments_processed_total.labels(kind=kind).inc()


def record_profit_capped() -> None:
    if settings.metrics_enabled:
        payment_profit_capped_total.inc()


def record_disbursement_floored() -> None:
    if settings.metrics_enabled:
        disbursement_floored_total.inc()


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST
