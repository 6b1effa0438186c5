"""SQLite-backed expense store."""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from spendcap.domain.models import CategoryName, Description, Expense, ExpenseId
from spendcap.store import queries
from spendcap.store.schema import get_db_path

_CENTS = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    """Convert a two-place decimal amount to integer cents."""
    return int((amount * 100).to_integral_value())


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place decimal amount."""
    return (Decimal(cents) / 100).quantize(_CENTS)


def row_to_expense(row: dict[str, Any]) -> Expense:
    return Expense(
        id=ExpenseId(row["id"]),
        amount=from_cents(row["amount"]),
        description=Description(row["description"]),
        category=CategoryName(row["category"]),
        date=date.fromisoformat(row["date"]),
        created_at=date.fromisoformat(row["created_at"]),
    )


class SqliteExpenseStore:
    """Expense store over a single SQLite file.

    Every call opens its own connection and returns copies, so callers never
    hold references into the database.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or get_db_path()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def find_all(self) -> list[Expense]:
        return [row_to_expense(row) for row in queries.get_all_expenses(self._db_path)]

    def find_by_id(self, expense_id: ExpenseId) -> Expense | None:
        row = queries.get_expense(expense_id, self._db_path)
        return row_to_expense(row) if row else None

    def find_by_date_range(self, start: date, end: date) -> list[Expense]:
        rows = queries.get_expenses_between(start.isoformat(), end.isoformat(), self._db_path)
        return [row_to_expense(row) for row in rows]

    def find_by_category(self, category: CategoryName) -> list[Expense]:
        return [row_to_expense(row) for row in queries.get_expenses_by_category(category, self._db_path)]

    def save(self, expense: Expense) -> Expense:
        """Insert a new expense or overwrite an existing one.

        Raises:
            LookupError: If updating an id that is not in the database.
            sqlite3.Error: If database operation fails.
        """
        if expense.id is None:
            new_id = queries.insert_expense(
                to_cents(expense.amount),
                expense.description,
                expense.category,
                expense.date.isoformat(),
                expense.created_at.isoformat(),
                self._db_path,
            )
            return expense.with_id(ExpenseId(new_id))

        updated = queries.update_expense(
            expense.id,
            to_cents(expense.amount),
            expense.description,
            expense.category,
            expense.date.isoformat(),
            self._db_path,
        )
        if not updated:
            raise LookupError(f"Expense {expense.id} is not in the database")
        return expense

    def delete_by_id(self, expense_id: ExpenseId) -> None:
        queries.delete_expense(expense_id, self._db_path)
