"""Pure functions for spending aggregation and reports.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Exact Decimal arithmetic throughout

Percentages are the share of the grand total rounded half-up to four
decimal places, then scaled by 100 (0.5 -> 50.0000).
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from spendcap.dates import month_range
from spendcap.domain.models import CategoryName, Expense

_FOUR_PLACES = Decimal("0.0001")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class CategorySpending:
    """Immutable spending total for one category."""

    category: CategoryName
    amount: Decimal
    transaction_count: int
    percentage: Decimal | None = None


@dataclass(frozen=True)
class CategorySummary:
    """Immutable per-category spending summary.

    ``categories`` is ordered by total descending, then category name. The
    top category is the first row, so ties on the maximum total go to the
    alphabetically first category.
    """

    categories: list[CategorySpending]
    total_amount: Decimal
    category_count: int
    top_category: CategorySpending | None

    @property
    def per_category(self) -> dict[CategoryName, Decimal]:
        return {row.category: row.amount for row in self.categories}


@dataclass(frozen=True)
class Overview:
    """Immutable headline numbers for all expenses."""

    total_spending: Decimal
    total_expenses: int
    total_categories: int
    current_month_spending: Decimal


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), start=Decimal("0"))


def calculate_percentage(amount: Decimal, total: Decimal) -> Decimal:
    """Calculate a category's share of the total.

    Args:
        amount: Category total.
        total: Grand total; must be positive.

    Returns:
        Share rounded half-up to four decimal places, times 100.
    """
    return (amount / total).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP) * _HUNDRED


def group_by_category(expenses: Iterable[Expense]) -> dict[CategoryName, tuple[Decimal, int]]:
    """Group expenses by exact category string.

    Returns:
        Mapping of category to (total, count) in first-encountered order.
    """
    groups: dict[CategoryName, tuple[Decimal, int]] = {}
    for expense in expenses:
        amount, count = groups.get(expense.category, (Decimal("0"), 0))
        groups[expense.category] = (amount + expense.amount, count + 1)
    return groups


def summarize(expenses: Iterable[Expense]) -> CategorySummary:
    """Create the category spending summary.

    Args:
        expenses: Snapshot of expenses with canonical categories.

    Returns:
        CategorySummary. Percentages stay None when the total is zero.
    """
    groups = group_by_category(expenses)
    total = sum((amount for amount, _ in groups.values()), start=Decimal("0"))

    rows = [
        CategorySpending(
            category=category,
            amount=amount,
            transaction_count=count,
            percentage=calculate_percentage(amount, total) if total > 0 else None,
        )
        for category, (amount, count) in groups.items()
    ]
    rows.sort(key=lambda row: (-row.amount, row.category))

    return CategorySummary(
        categories=rows,
        total_amount=total,
        category_count=len(rows),
        top_category=rows[0] if rows else None,
    )


def monthly_total(expenses: Iterable[Expense], year: int, month: int) -> Decimal:
    """Sum amounts of expenses dated within a calendar month."""
    first, last, _ = month_range(year, month)
    return total_amount(e for e in expenses if first <= e.date <= last)


def create_overview(expenses: Iterable[Expense], today: date) -> Overview:
    """Build headline totals for all expenses and the month containing ``today``."""
    snapshot = list(expenses)
    return Overview(
        total_spending=total_amount(snapshot),
        total_expenses=len(snapshot),
        total_categories=len(group_by_category(snapshot)),
        current_month_spending=monthly_total(snapshot, today.year, today.month),
    )


def histogram_bar_length(amount: Decimal, max_amount: Decimal, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Largest amount in the dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int(amount / max_amount * bar_width)
