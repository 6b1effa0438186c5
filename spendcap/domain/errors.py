"""Domain-specific exceptions raised by the spendcap core."""

from typing import Any


class SpendcapError(Exception):
    """Base exception for all spendcap errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(SpendcapError, ValueError):
    """Raised when input fails a field-level or cross-field rule."""


class BusinessRuleError(SpendcapError):
    """Raised when a domain policy rejects an otherwise well-formed input."""


class NotFoundError(SpendcapError, LookupError):
    """Raised when an expense id does not exist in the store."""


class StoreError(SpendcapError):
    """Raised when the store fails underneath a service operation."""
