"""Pure spending-limit and retention policies.

The monthly cap check works on whatever snapshot of expenses the caller
passes in. It reserves nothing, so two concurrent writers can each pass the
check against a snapshot that does not include the other's write; the cap is
best-effort under concurrency.
"""

from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable

from spendcap.dates import month_of, shift_years
from spendcap.domain.errors import BusinessRuleError
from spendcap.domain.models import CategoryName, Expense

MONTHLY_LIMITS = MappingProxyType(
    {
        CategoryName("Food"): Decimal("1000"),
        CategoryName("Transportation"): Decimal("500"),
        CategoryName("Entertainment"): Decimal("300"),
        CategoryName("Shopping"): Decimal("800"),
    }
)

AUDIT_RETENTION_YEARS = 1


def monthly_limit_for(category: CategoryName) -> Decimal | None:
    """Return the monthly cap for a canonical category, or None if uncapped."""
    return MONTHLY_LIMITS.get(category)


def month_total_for_category(expenses: Iterable[Expense], category: CategoryName, day: date) -> Decimal:
    """Sum amounts for a category within the calendar month containing ``day``.

    Args:
        expenses: Snapshot of existing expenses.
        category: Canonical category to match exactly.
        day: Any date in the target month.

    Returns:
        Exact decimal total (0 if nothing matches).
    """
    first, last = month_of(day)
    return sum(
        (e.amount for e in expenses if e.category == category and first <= e.date <= last),
        start=Decimal("0"),
    )


def check_monthly_limit(
    category: CategoryName,
    new_amount: Decimal,
    expense_date: date,
    existing: Iterable[Expense],
) -> None:
    """Reject an amount that would push a category over its monthly cap.

    A total exactly equal to the cap is allowed.

    Raises:
        BusinessRuleError: If current total plus new amount exceeds the cap.
    """
    limit = monthly_limit_for(category)
    if limit is None:
        return

    current = month_total_for_category(existing, category, expense_date)
    if current + new_amount > limit:
        raise BusinessRuleError(
            f"Monthly spending limit exceeded for {category}. "
            f"Limit: ${limit}, Current: ${current}, New expense: ${new_amount}",
            details={
                "category": category,
                "limit": limit,
                "current_total": current,
                "new_amount": new_amount,
            },
        )


def check_delete_allowed(expense: Expense, today: date) -> None:
    """Reject deletion of expenses dated more than one year before today."""
    cutoff = shift_years(today, -AUDIT_RETENTION_YEARS)
    if expense.date < cutoff:
        raise BusinessRuleError(
            "Cannot delete expenses older than 1 year for audit purposes",
            details={"expense_id": expense.id, "date": expense.date, "cutoff": cutoff},
        )
