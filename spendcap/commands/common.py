"""Shared helpers for CLI commands: service wiring, parsing and rendering."""

import sys
from datetime import date
from decimal import Decimal
from typing import Iterable, NoReturn

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spendcap.config import resolve_db_path
from spendcap.domain.errors import ValidationError
from spendcap.domain.models import Expense
from spendcap.service import ExpenseService
from spendcap.store.schema import database_exists
from spendcap.store.sqlite import SqliteExpenseStore

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error: {escape(message)}[/red]")
    sys.exit(1)


def get_service() -> ExpenseService:
    """Build the expense service over the configured database."""
    db_path = resolve_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendcap init' first.[/red]", style="bold")
        sys.exit(1)
    return ExpenseService(SqliteExpenseStore(db_path))


def parse_date(raw: str) -> date:
    """Parse a user-supplied date.

    ISO dates are taken as-is; anything else goes through pandas.to_datetime
    with day-first parsing (DD/MM/YYYY, 5 Oct 2026, ...).

    Raises:
        ValidationError: If the date cannot be parsed.
    """
    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValidationError(f"Could not parse date '{raw}'") from e
    if pd.isna(parsed):
        raise ValidationError(f"Could not parse date '{raw}'")
    return parsed.date()


def parse_optional_date(raw: str | None) -> date | None:
    return parse_date(raw) if raw else None


def parse_optional_amount(raw: str | None, field: str) -> Decimal | None:
    if raw is None:
        return None
    try:
        return Decimal(raw.strip())
    except ArithmeticError as e:
        raise ValidationError(f"{field} must be a numeric value") from e


def format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def render_expenses(expenses: Iterable[Expense], title: str) -> None:
    """Print expenses as a table."""
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for expense in expenses:
        table.add_row(
            str(expense.id),
            expense.date.isoformat(),
            expense.description,
            expense.category,
            f"[red]{format_amount(expense.amount)}[/red]",
        )

    console.print(table)


def render_expense(expense: Expense) -> None:
    """Print the fields of one expense."""
    console.print(f"  ID: {expense.id}")
    console.print(f"  Date: {expense.date.isoformat()}")
    console.print(f"  Description: {expense.description}")
    console.print(f"  Category: {expense.category}")
    console.print(f"  Amount: {format_amount(expense.amount)}")
    console.print(f"  [dim]Created: {expense.created_at.isoformat()}[/dim]")
