"""
Credits module exceptions.
"""

from shared.exceptions import CelestiaError, ValidationError


class CreditsError(CelestiaError):
    """Base exception for credit-related errors."""

    pass


class InvalidCreditAmountError(ValidationError):
    """Raised when a credit grant amount is not a positive integer."""

    def __init__(self, amount: int):
        super().__init__(
            f"Invalid credit amount: {amount}. Amount must be positive",
            code="INVALID_AMOUNT",
            details={"amount": amount},
        )
