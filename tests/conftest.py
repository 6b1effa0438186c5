"""Shared fixtures: an in-memory expense store and a service with a fixed clock."""

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest

from spendcap.domain.models import CategoryName, Description, Expense, ExpenseId
from spendcap.service import ExpenseService

TODAY = date(2026, 6, 15)


class InMemoryExpenseStore:
    """Dictionary-backed store with the same contract as SqliteExpenseStore."""

    def __init__(self) -> None:
        self._rows: dict[ExpenseId, Expense] = {}
        self._next_id = 1

    def find_all(self) -> list[Expense]:
        return list(self._rows.values())

    def find_by_id(self, expense_id: ExpenseId) -> Expense | None:
        return self._rows.get(expense_id)

    def find_by_date_range(self, start: date, end: date) -> list[Expense]:
        return [e for e in self._rows.values() if start <= e.date <= end]

    def find_by_category(self, category: CategoryName) -> list[Expense]:
        matches = [e for e in self._rows.values() if e.category == category]
        return sorted(matches, key=lambda e: (-e.date.toordinal(), e.id))

    def save(self, expense: Expense) -> Expense:
        if expense.id is None:
            expense = expense.with_id(ExpenseId(self._next_id))
            self._next_id += 1
        elif expense.id not in self._rows:
            raise LookupError(f"Expense {expense.id} is not in the database")
        self._rows[expense.id] = expense
        return expense

    def delete_by_id(self, expense_id: ExpenseId) -> None:
        self._rows.pop(expense_id, None)


class BrokenExpenseStore(InMemoryExpenseStore):
    """Store whose every read fails, as a lost database connection would."""

    def find_all(self) -> list[Expense]:
        raise OSError("disk I/O error")

    def find_by_id(self, expense_id: ExpenseId) -> Expense | None:
        raise OSError("disk I/O error")

    def find_by_date_range(self, start: date, end: date) -> list[Expense]:
        raise OSError("disk I/O error")


def make_expense(
    amount: str,
    category: str = "Food",
    on: date = TODAY,
    description: str = "Lunch",
    expense_id: int | None = None,
) -> Expense:
    """Build an already-normalized expense record."""
    return Expense(
        amount=Decimal(amount),
        description=Description(description),
        category=CategoryName(category),
        date=on,
        created_at=on,
        id=ExpenseId(expense_id) if expense_id is not None else None,
    )


@pytest.fixture
def store() -> InMemoryExpenseStore:
    return InMemoryExpenseStore()


@pytest.fixture
def service(store: InMemoryExpenseStore) -> ExpenseService:
    return ExpenseService(store, today=lambda: TODAY)


@pytest.fixture
def expense_factory() -> Callable[..., Expense]:
    return make_expense


@pytest.fixture
def today() -> date:
    return TODAY
