# src/pnl_cards/core/exceptions.py

from .models import ValidationFailure


class CardError(Exception):
    """Base class for every failure raised by the card pipeline."""


class RequestValidationError(CardError):
    """Raised by the service layer when the raw request fails validation."""

    def __init__(self, failure: ValidationFailure):
        self.failure = failure
        super().__init__("Validation failed: " + "; ".join(failure.messages))


class DomainError(CardError):
    """A price pair the gain calculator cannot work with."""


class InvalidEntryPrice(DomainError):
    def __init__(self, message: str = "Entry price must be greater than zero"):
        super().__init__(message)


class InvalidCurrentPrice(DomainError):
    def __init__(self, message: str = "Current price cannot be negative"):
        super().__init__(message)


class RenderError(CardError):
    """The drawing backend failed (missing font, canvas or encoder error)."""
