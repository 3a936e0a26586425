"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for all loan ledger domain errors.

    The engine calculators never raise these; they are raised by the
    strict validators that callers run on user-facing input.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the error payload a calling service returns."""
        return {
            "error": self.code,
            "message": self.message,
        }
