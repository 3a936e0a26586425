"""
Decimal arithmetic helpers for money math.

Every public engine function routes its numeric inputs through
``to_decimal`` so that no binary floating point ever reaches a monetary
calculation. Ratios are kept at full context precision; results are
quantized only when a result object is built.

Every calculation runs inside ``ledger_context()``, a fixed decimal
context built from LedgerSettings, so results never depend on the
caller's thread-local context.
"""

import decimal
from decimal import Decimal
from typing import ContextManager, Union

from .settings import LedgerSettings, ledger_settings

Numeric = Union[Decimal, int, float, str]

ZERO = Decimal(0)


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a plain numeric value to Decimal.

    Floats go through ``str()`` so ``0.40`` becomes ``Decimal('0.4')``
    instead of its binary expansion.

    Raises:
        TypeError: If value is not a Decimal, int, float or str
        ValueError: If value is NaN or infinite
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid monetary values")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        result = Decimal(str(value).strip())
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Non-finite value: {value!r}")
    return result


def quantize_money(
    value: Decimal,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """Round a monetary value to the configured number of places."""
    with ledger_context(settings):
        return value.quantize(settings.money_quantum, rounding=settings.rounding)


def quantize_ratio(
    value: Decimal,
    settings: LedgerSettings = ledger_settings,
) -> Decimal:
    """Round a ratio to the configured number of places."""
    with ledger_context(settings):
        return value.quantize(settings.ratio_quantum, rounding=settings.rounding)


def floor_at_zero(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def is_within_epsilon(
    value: Decimal,
    settings: LedgerSettings = ledger_settings,
) -> bool:
    """True when value is at or below the payoff tolerance."""
    return value <= settings.fully_paid_epsilon


def ledger_context(
    settings: LedgerSettings = ledger_settings,
) -> ContextManager[decimal.Context]:
    """
    Decimal context for engine arithmetic.

    Precision and rounding come from settings. InvalidOperation,
    DivisionByZero and Overflow are trapped; Inexact and Rounded are not.
    Amounts need fewer than ``settings.precision - settings.money_places``
    integer digits.
    """
    context = decimal.Context(
        prec=settings.precision,
        rounding=settings.rounding,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )
    return decimal.localcontext(context)
