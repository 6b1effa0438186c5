"""Expense service - composes the domain rules around store operations.

The service is the imperative shell around spendcap.domain: it fetches a
snapshot from the store, hands it to pure functions and persists the result.
No lock is held between the monthly-cap check and the save, so the cap is
best-effort when several writers run at once.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Protocol

from spendcap.dates import month_of
from spendcap.domain.errors import BusinessRuleError, NotFoundError, SpendcapError, StoreError, ValidationError
from spendcap.domain.limits import check_delete_allowed, check_monthly_limit
from spendcap.domain.models import CategoryName, Expense, ExpenseId, ExpenseUpdate, FilterSpec
from spendcap.domain.normalize import clean_description, normalize_category
from spendcap.domain.query import (
    ExpensePage,
    paginate,
    query_expenses,
    search_descriptions,
    sort_by_business_rules,
    top_expensive,
)
from spendcap.domain.report import CategorySummary, Overview, create_overview, monthly_total, summarize, total_amount
from spendcap.domain.validation import (
    check_test_expense,
    validate_expense,
    validate_expense_id,
    validate_filter,
    validate_limit,
    validate_month,
    validate_page,
    validate_update,
)

logger = logging.getLogger(__name__)

FREQUENT_CATEGORY_THRESHOLD = 10

_CAP_FIELDS = ("category", "amount", "date")


class ExpenseStore(Protocol):
    """Durable holder of expense records."""

    def find_all(self) -> list[Expense]: ...

    def find_by_id(self, expense_id: ExpenseId) -> Expense | None: ...

    def find_by_date_range(self, start: date, end: date) -> list[Expense]: ...

    def find_by_category(self, category: CategoryName) -> list[Expense]: ...

    def save(self, expense: Expense) -> Expense: ...

    def delete_by_id(self, expense_id: ExpenseId) -> None: ...


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Label unexpected store failures as StoreError without retrying."""
    try:
        yield
    except SpendcapError:
        raise
    except Exception as exc:
        raise StoreError(f"Store failed to {action}: {exc}", details={"action": action}) from exc


class ExpenseService:
    """Create, update, delete and report on expenses."""

    def __init__(self, store: ExpenseStore, today: Callable[[], date] = date.today) -> None:
        self._store = store
        self._today = today

    # Mutations ------------------------------------------------------------
    def create_expense(self, amount: Any, description: Any, category: Any, expense_date: Any) -> Expense:
        """Validate, normalize, check the monthly cap and persist a new expense.

        Raises:
            ValidationError: If any field is invalid.
            BusinessRuleError: If the category's monthly cap would be exceeded.
            StoreError: If the store fails.
        """
        today = self._today()
        valid_amount, raw_description, raw_category, valid_date = validate_expense(
            amount, description, category, expense_date, today
        )
        canonical = normalize_category(raw_category)

        self._check_monthly_limit(canonical, valid_amount, valid_date, self._month_snapshot(valid_date))

        expense = Expense(
            amount=valid_amount,
            description=clean_description(raw_description),
            category=canonical,
            date=valid_date,
            created_at=today,
        )
        with _store_errors("save expense"):
            saved = self._store.save(expense)

        logger.info("Created expense %s: %s %s on %s", saved.id, saved.category, saved.amount, saved.date)
        return saved

    def update_expense(self, expense_id: Any, update: ExpenseUpdate | Mapping[str, Any]) -> Expense:
        """Apply a partial update.

        Only supplied fields are validated and applied. The monthly cap is
        re-checked when category, amount or date end up different; the
        expense being updated is left out of the month total.
        The "test" ceiling is checked on the merged record whenever the
        amount or description is supplied.

        Raises:
            ValidationError: If the id or any supplied field is invalid.
            NotFoundError: If the expense does not exist.
            BusinessRuleError: If the monthly cap would be exceeded.
            StoreError: If the store fails.
        """
        valid_id = validate_expense_id(expense_id)
        if not isinstance(update, ExpenseUpdate):
            update = ExpenseUpdate(update)
        validated = validate_update(update, self._today())
        existing = self._get_or_raise(valid_id)

        changes: dict[str, Any] = {}
        if "amount" in validated:
            changes["amount"] = validated["amount"]
        if "description" in validated:
            changes["description"] = clean_description(validated["description"])
        if "category" in validated:
            changes["category"] = normalize_category(validated["category"])
        if "date" in validated:
            changes["date"] = validated["date"]
        updated = replace(existing, **changes)
        if "amount" in changes or "description" in changes:
            check_test_expense(updated.description, updated.amount)

        if any(getattr(updated, name) != getattr(existing, name) for name in _CAP_FIELDS):
            others = [e for e in self._month_snapshot(updated.date) if e.id != existing.id]
            self._check_monthly_limit(updated.category, updated.amount, updated.date, others)

        with _store_errors("save expense"):
            saved = self._store.save(updated)

        logger.info("Updated expense %s (%s)", saved.id, ", ".join(sorted(changes)))
        return saved

    def delete_expense(self, expense_id: Any) -> None:
        """Delete an expense unless it is older than the audit retention period.

        Raises:
            ValidationError: If the id is invalid.
            NotFoundError: If the expense does not exist.
            BusinessRuleError: If the expense is dated more than a year ago.
        """
        valid_id = validate_expense_id(expense_id)
        expense = self._get_or_raise(valid_id)
        try:
            check_delete_allowed(expense, self._today())
        except BusinessRuleError as exc:
            logger.warning("Refused to delete expense %s: %s", valid_id, exc.message)
            raise

        with _store_errors("delete expense"):
            self._store.delete_by_id(valid_id)
        logger.info("Deleted expense %s", valid_id)

    # Reads ----------------------------------------------------------------
    def get_expense(self, expense_id: Any) -> Expense:
        """Return an expense or raise NotFoundError."""
        return self._get_or_raise(validate_expense_id(expense_id))

    def list_expenses(self, spec: FilterSpec | None = None) -> list[Expense]:
        """List expenses.

        Without a filter, expenses come newest date first with larger amounts
        first on the same date. With a filter, the filter's own sort applies.
        """
        if spec is None:
            return sort_by_business_rules(self._all())

        validate_filter(spec)
        results = query_expenses(self._all(), spec)
        logger.debug("Filter matched %d expenses", len(results))
        return results

    def list_expenses_page(self, spec: FilterSpec | None, page: int = 0, size: int = 20) -> ExpensePage:
        validate_page(page, size)
        return paginate(self.list_expenses(spec), page, size)

    def search_expenses(self, term: str | None) -> list[Expense]:
        """Case-insensitive description search.

        Raises:
            ValidationError: If the term is empty or blank.
        """
        if term is None or not term.strip():
            raise ValidationError("Search term cannot be empty")
        return search_descriptions(self._all(), term)

    def expenses_by_category(self, category: str) -> list[Expense]:
        """Return expenses in the normalized category, newest first."""
        canonical = normalize_category(category)
        with _store_errors("load category expenses"):
            expenses = self._store.find_by_category(canonical)

        if len(expenses) > FREQUENT_CATEGORY_THRESHOLD:
            logger.info("Category '%s' is frequently used (%d expenses)", canonical, len(expenses))
        return expenses

    def top_expensive(self, limit: int) -> list[Expense]:
        validate_limit(limit)
        return top_expensive(self._all(), limit)

    # Reports --------------------------------------------------------------
    def category_summary(self) -> CategorySummary:
        return summarize(self._all())

    def monthly_total(self, year: int, month: int) -> Decimal:
        validate_month(year, month)
        first, last = month_of(date(year, month, 1))
        with _store_errors("load monthly expenses"):
            expenses = self._store.find_by_date_range(first, last)
        return monthly_total(expenses, year, month)

    def current_month_total(self) -> Decimal:
        today = self._today()
        return self.monthly_total(today.year, today.month)

    def category_total(self, category: str) -> Decimal:
        return total_amount(self.expenses_by_category(category))

    def expense_count(self) -> int:
        return len(self._all())

    def overview(self) -> Overview:
        return create_overview(self._all(), self._today())

    # Internal helpers -----------------------------------------------------
    def _all(self) -> list[Expense]:
        with _store_errors("load expenses"):
            return self._store.find_all()

    def _month_snapshot(self, day: date) -> list[Expense]:
        first, last = month_of(day)
        with _store_errors("load monthly expenses"):
            return self._store.find_by_date_range(first, last)

    def _get_or_raise(self, expense_id: ExpenseId) -> Expense:
        with _store_errors("load expense"):
            expense = self._store.find_by_id(expense_id)
        if expense is None:
            raise NotFoundError(f"Expense not found with ID: {expense_id}", details={"expense_id": expense_id})
        return expense

    def _check_monthly_limit(
        self, category: CategoryName, amount: Decimal, expense_date: date, snapshot: list[Expense]
    ) -> None:
        try:
            check_monthly_limit(category, amount, expense_date, snapshot)
        except BusinessRuleError as exc:
            logger.warning("Rejected %s expense of %s: %s", category, amount, exc.message)
            raise
