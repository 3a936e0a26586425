"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .validation import (
    ValidationException,
    InvalidAmountException,
    FutureDateException,
    AmountExceedsRequestedException,
)

__all__ = [
    "DomainException",
    "ValidationException",
    "InvalidAmountException",
    "FutureDateException",
    "AmountExceedsRequestedException",
]
