"""Portfolio-level ratios used by collection and reporting screens."""

from decimal import ROUND_HALF_UP, Decimal

from .money import ZERO, Numeric, ledger_context, quantize_money, to_decimal
from .settings import LedgerSettings, ledger_settings


def calculate_recovery_rate(
    total_expected: Numeric,
    total_collected: Numeric,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """
    Calculate the percentage of expected collections actually collected.

    Args:
        total_expected: Amount that should have been collected
        total_collected: Amount actually collected
        settings: Ledger settings (uses defaults if not provided)

    Returns:
        Recovery rate as a percentage rounded to 2 places (0 if nothing expected)
    """
    total_expected = to_decimal(total_expected)
    if total_expected == ZERO:
        return Decimal("0.00")
    with ledger_context(settings):
        rate = to_decimal(total_collected) / total_expected * 100
        return rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def calculate_average_ticket(
    total_amount: Numeric,
    loan_count: int,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """Average loan size, 0 when there are no loans."""
    if loan_count <= 0:
        return quantize_money(ZERO, settings)
    with ledger_context(settings):
        average = to_decimal(total_amount) / loan_count
    return quantize_money(average, settings)
