"""Domain models and types for spendcap.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business rules separated from storage and presentation
"""

from spendcap.domain.errors import (
    BusinessRuleError,
    NotFoundError,
    SpendcapError,
    StoreError,
    ValidationError,
)
from spendcap.domain.models import (
    CategoryName,
    Description,
    Expense,
    ExpenseId,
    ExpenseUpdate,
    FilterSpec,
)

__all__ = [
    "BusinessRuleError",
    "CategoryName",
    "Description",
    "Expense",
    "ExpenseId",
    "ExpenseUpdate",
    "FilterSpec",
    "NotFoundError",
    "SpendcapError",
    "StoreError",
    "ValidationError",
]
