"""
Ledger Settings for the Loan Ledger engine.

This module contains the business constants used by the loan accounting
calculations. They can be overridden via environment variables with the
LEDGER_ prefix:
    LEDGER_FULLY_PAID_EPSILON=0.01
    LEDGER_MONEY_PLACES=2
    LEDGER_ROUNDING=ROUND_HALF_UP
    LEDGER_PRECISION=60

Usage:
    from loan_ledger.service.ledger.settings import ledger_settings

    # Use default settings (loaded from env)
    epsilon = ledger_settings.fully_paid_epsilon

    # Or create custom settings for testing
    custom = LedgerSettings(money_places=0)
"""

import decimal
from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ROUNDING_MODES = (
    decimal.ROUND_HALF_UP,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_UP,
    decimal.ROUND_DOWN,
    decimal.ROUND_CEILING,
    decimal.ROUND_FLOOR,
    decimal.ROUND_05UP,
)


class LedgerSettings(BaseSettings):
    """
    Configurable parameters for the loan accounting engine.

    All settings can be overridden via environment variables with LEDGER_ prefix.
    Monetary values are in currency units (not cents).
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Payoff Tolerance ===
    fully_paid_epsilon: Decimal = Field(
        default=Decimal("0.01"),
        ge=0,
        description="Pending balance at or below this is treated as fully paid",
    )

    # === Rounding ===
    money_places: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Decimal places kept on monetary results",
    )
    ratio_places: int = Field(
        default=4,
        ge=1,
        le=12,
        description="Decimal places kept on the reported profit ratio",
    )
    precision: int = Field(
        default=60,
        ge=28,
        le=1000,
        description="Significant digits of the decimal context every calculation runs in",
    )
    rounding: str = Field(
        default=decimal.ROUND_HALF_UP,
        description="decimal module rounding mode applied when quantizing results",
    )

    @field_validator("rounding")
    @classmethod
    def validate_rounding(cls, v: str) -> str:
        """Validate that the rounding mode is one the decimal module knows."""
        v = v.upper()
        if v not in ROUNDING_MODES:
            raise ValueError(
                f"Unknown rounding mode {v!r}; expected one of {', '.join(ROUNDING_MODES)}"
            )
        return v

    @property
    def money_quantum(self) -> Decimal:
        """Exponent used to quantize monetary values (e.g. Decimal('0.01'))."""
        return Decimal(1).scaleb(-self.money_places)

    @property
    def ratio_quantum(self) -> Decimal:
        """Exponent used to quantize the reported profit ratio."""
        return Decimal(1).scaleb(-self.ratio_places)


@lru_cache
def get_ledger_settings() -> LedgerSettings:
    """Get cached ledger settings instance."""
    return LedgerSettings()


ledger_settings = get_ledger_settings()
