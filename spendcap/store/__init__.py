"""Database store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from spendcap.store.queries import (
    delete_expense,
    get_all_expenses,
    get_expense,
    get_expenses_between,
    get_expenses_by_category,
    insert_expense,
    update_expense,
)
from spendcap.store.schema import database_exists, get_db_path, init_database
from spendcap.store.sqlite import SqliteExpenseStore

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_expense",
    "get_all_expenses",
    "get_expense",
    "get_expenses_between",
    "get_expenses_by_category",
    "insert_expense",
    "update_expense",
    # Store
    "SqliteExpenseStore",
]
