"""Pure functions for filtering, searching, sorting and slicing expenses.

This module contains the functional core for read operations:
- No I/O operations
- Inputs are never mutated; new lists are returned
- Filters commute, so the final set does not depend on application order
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from spendcap.domain.models import Expense, FilterSpec
from spendcap.domain.normalize import normalize_category

DEFAULT_SORT_FIELD = "date"

SORT_KEYS: dict[str, Callable[[Expense], Any]] = {
    "date": lambda e: e.date,
    "amount": lambda e: e.amount,
    "description": lambda e: e.description.lower(),
    "category": lambda e: e.category.lower(),
    "createdat": lambda e: e.created_at,
    "created_at": lambda e: e.created_at,
}


@dataclass(frozen=True)
class ExpensePage:
    """Immutable slice of an ordered expense result."""

    items: list[Expense]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def first(self) -> bool:
        return self.page == 0

    @property
    def last(self) -> bool:
        return not self.has_next


def _build_predicates(spec: FilterSpec) -> list[Callable[[Expense], bool]]:
    """Turn each provided filter into an independent predicate."""
    predicates: list[Callable[[Expense], bool]] = []

    if spec.search_term is not None and spec.search_term.strip():
        term = spec.search_term.lower()
        predicates.append(lambda e: term in e.description.lower())

    if spec.category is not None and spec.category.strip():
        category = normalize_category(spec.category)
        predicates.append(lambda e: e.category == category)

    if spec.categories:
        allowed = {normalize_category(c) for c in spec.categories}
        predicates.append(lambda e: e.category in allowed)

    if spec.min_amount is not None:
        min_amount = spec.min_amount
        predicates.append(lambda e: e.amount >= min_amount)

    if spec.max_amount is not None:
        max_amount = spec.max_amount
        predicates.append(lambda e: e.amount <= max_amount)

    if spec.start_date is not None:
        start = spec.start_date
        predicates.append(lambda e: e.date >= start)

    if spec.end_date is not None:
        end = spec.end_date
        predicates.append(lambda e: e.date <= end)

    return predicates


def filter_expenses(expenses: Iterable[Expense], spec: FilterSpec) -> list[Expense]:
    """Keep expenses matching every filter provided in ``spec``.

    Args:
        expenses: Expenses to filter.
        spec: Filter specification; unset fields do not filter.

    Returns:
        Matching expenses in their original order.
    """
    predicates = _build_predicates(spec)
    return [e for e in expenses if all(p(e) for p in predicates)]


def sort_expenses(expenses: Iterable[Expense], sort_by: str | None, sort_direction: str | None) -> list[Expense]:
    """Sort expenses by one field.

    Args:
        expenses: Expenses to sort.
        sort_by: One of date, amount, description, category, createdAt.
            Unknown or missing values fall back to date.
        sort_direction: "asc" for ascending; anything else sorts descending.

    Returns:
        New sorted list. Text fields compare case-insensitively; ties keep
        their input order.
    """
    key = SORT_KEYS.get((sort_by or DEFAULT_SORT_FIELD).lower(), SORT_KEYS[DEFAULT_SORT_FIELD])
    ascending = (sort_direction or "").lower() == "asc"
    return sorted(expenses, key=key, reverse=not ascending)


def sort_by_business_rules(expenses: Iterable[Expense]) -> list[Expense]:
    """Default listing order: newest date first, larger amount first on ties."""
    return sorted(expenses, key=lambda e: (e.date, e.amount), reverse=True)


def query_expenses(expenses: Iterable[Expense], spec: FilterSpec) -> list[Expense]:
    """Filter then sort expenses according to ``spec``."""
    return sort_expenses(filter_expenses(expenses, spec), spec.sort_by, spec.sort_direction)


def search_descriptions(expenses: Iterable[Expense], term: str) -> list[Expense]:
    """Case-insensitive substring search on descriptions, keeping input order."""
    needle = term.strip().lower()
    return [e for e in expenses if needle in e.description.lower()]


def top_expensive(expenses: Iterable[Expense], limit: int) -> list[Expense]:
    """Return the ``limit`` largest expenses by amount, largest first."""
    return sorted(expenses, key=lambda e: e.amount, reverse=True)[:limit]


def paginate(items: Sequence[Expense], page: int, size: int) -> ExpensePage:
    """Slice an ordered result into one page.

    Args:
        items: Ordered expenses.
        page: Zero-based page number.
        size: Page size.

    Returns:
        ExpensePage with the slice and paging metadata. An empty result has a
        single empty page.
    """
    total = len(items)
    total_pages = max(1, math.ceil(total / size))
    start = page * size
    return ExpensePage(
        items=list(items[start : start + size]),
        page=page,
        size=size,
        total_elements=total,
        total_pages=total_pages,
    )
