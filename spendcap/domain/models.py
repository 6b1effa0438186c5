"""Domain types and records for spendcap.

These NewTypes provide semantic clarity and help with type checking:
- ExpenseId: Identifier assigned by the store on creation
- CategoryName: Canonical category name (see spendcap.domain.normalize)
- Description: Cleaned expense description text

Amounts are Decimal values with two fractional digits.
"""

import datetime as dt
from dataclasses import dataclass, field, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, NewType

from spendcap.domain.errors import ValidationError

ExpenseId = NewType("ExpenseId", int)

CategoryName = NewType("CategoryName", str)

Description = NewType("Description", str)

UPDATABLE_FIELDS = frozenset({"amount", "description", "category", "date"})


@dataclass(frozen=True)
class Expense:
    """Immutable expense record.

    ``id`` is None until the store has persisted the record. ``created_at`` is
    set once on creation and never modified afterwards.
    """

    amount: Decimal
    description: Description
    category: CategoryName
    date: dt.date
    created_at: dt.date
    id: ExpenseId | None = None

    def with_id(self, expense_id: ExpenseId) -> "Expense":
        return replace(self, id=expense_id)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "amount": f"{self.amount:.2f}",
            "description": self.description,
            "category": self.category,
            "date": self.date.isoformat(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ExpenseUpdate:
    """Partial update for an expense.

    Only fields present in ``changes`` are applied; absent fields keep their
    stored value. Presence is the key being in the mapping, so a field can
    never be cleared through an update.
    """

    changes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown update fields: {', '.join(sorted(unknown))}")
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    @classmethod
    def of(cls, **changes: Any) -> "ExpenseUpdate":
        return cls(changes)

    def provides(self, name: str) -> bool:
        return name in self.changes

    def get(self, name: str) -> Any:
        return self.changes[name]

    def is_empty(self) -> bool:
        return not self.changes


@dataclass(frozen=True)
class FilterSpec:
    """Filters and ordering for an expense query.

    Every filter is optional; provided filters are combined with logical AND.
    """

    search_term: str | None = None
    category: str | None = None
    categories: tuple[str, ...] | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    sort_by: str = "date"
    sort_direction: str = "desc"
