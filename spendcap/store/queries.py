"""Database query functions."""

import sqlite3
from pathlib import Path
from typing import Any

from spendcap.store.schema import get_db_path

_COLUMNS = "id, amount, description, category, date, created_at"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def insert_expense(
    amount_cents: int,
    description: str,
    category: str,
    date: str,
    created_at: str,
    db_path: Path | None = None,
) -> int:
    """Insert an expense row.

    Args:
        amount_cents: Amount in cents.
        description: Cleaned description.
        category: Canonical category.
        date: Expense date (YYYY-MM-DD).
        created_at: Creation date (YYYY-MM-DD).
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The id assigned to the new row.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO expenses (amount, description, category, date, created_at) VALUES (?, ?, ?, ?, ?)",
                (amount_cents, description, category, date, created_at),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def update_expense(
    expense_id: int,
    amount_cents: int,
    description: str,
    category: str,
    date: str,
    db_path: Path | None = None,
) -> int:
    """Overwrite the mutable fields of an expense row.

    ``created_at`` is never touched.

    Returns:
        Number of rows updated (0 if the id does not exist).

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE expenses SET amount = ?, description = ?, category = ?, date = ? WHERE id = ?",
                (amount_cents, description, category, date, expense_id),
            )
            count = cursor.rowcount
            conn.commit()
            return count
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_expense(expense_id: int, db_path: Path | None = None) -> int:
    """Delete an expense row.

    Returns:
        Number of rows deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            count = cursor.rowcount
            conn.commit()
            return count
        except sqlite3.Error:
            conn.rollback()
            raise


def get_expense(expense_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get one expense row by id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_COLUMNS} FROM expenses WHERE id = ?", (expense_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_all_expenses(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all expense rows in insertion (id) order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_COLUMNS} FROM expenses ORDER BY id")
        return [dict(row) for row in cursor.fetchall()]


def get_expenses_between(start_date: str, end_date: str, db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get expense rows dated between two dates, both inclusive.

    Args:
        start_date: First date (YYYY-MM-DD).
        end_date: Last date (YYYY-MM-DD).
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {_COLUMNS} FROM expenses WHERE date >= ? AND date <= ? ORDER BY id",
            (start_date, end_date),
        )
        return [dict(row) for row in cursor.fetchall()]


def get_expenses_by_category(category: str, db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get expense rows for one category, newest date first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {_COLUMNS} FROM expenses WHERE category = ? ORDER BY date DESC, id",
            (category,),
        )
        return [dict(row) for row in cursor.fetchall()]
