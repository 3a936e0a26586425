"""Input validation domain exceptions."""

from datetime import date

from .base import DomainException


class ValidationException(DomainException):
    """Raised when a caller-supplied value fails strict validation."""

    def __init__(self, message: str, field_name: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
        )
        self.field_name = field_name


class InvalidAmountException(ValidationException):
    """Raised when an amount that must be positive is not."""

    def __init__(self, field_name: str, amount, message: str | None = None):
        super().__init__(
            message=message or f"{field_name} must be greater than 0 (got {amount})",
            field_name=field_name,
        )
        self.amount = amount


class FutureDateException(ValidationException):
    """Raised when a date that must be in the past is in the future."""

    def __init__(self, field_name: str, value: date):
        super().__init__(
            message=f"{field_name} cannot be in the future ({value.isoformat()})",
            field_name=field_name,
        )
        self.value = value


class AmountExceedsRequestedException(ValidationException):
    """Raised when the disbursed amount is larger than the requested amount."""

    def __init__(self, requested_amount, amount_gived):
        super().__init__(
            message=(
                f"Amount given ({amount_gived}) cannot exceed "
                f"requested amount ({requested_amount})"
            ),
            field_name="amount_gived",
        )
        self.requested_amount = requested_amount
        self.amount_gived = amount_gived
