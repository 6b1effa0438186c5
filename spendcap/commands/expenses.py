"""Expense commands: add, edit, delete and show a single expense."""

from datetime import date

from spendcap.commands.common import (
    console,
    fail,
    format_amount,
    get_service,
    parse_date,
    parse_optional_date,
    render_expense,
)
from spendcap.domain.errors import SpendcapError


def add_command(amount: str, description: str, category: str, expense_date: str | None = None) -> None:
    """Record a new expense."""
    service = get_service()

    try:
        day = parse_date(expense_date) if expense_date else date.today()
        expense = service.create_expense(amount, description, category, day)
    except SpendcapError as e:
        fail(e.message)

    console.print(
        f"[green]✓[/green] Added expense #{expense.id}: {expense.description} "
        f"({expense.category}) {format_amount(expense.amount)} on {expense.date.isoformat()}"
    )


def edit_command(
    expense_id: int,
    amount: str | None = None,
    description: str | None = None,
    category: str | None = None,
    expense_date: str | None = None,
) -> None:
    """Change the given fields of an expense, leaving the rest untouched."""
    service = get_service()

    try:
        changes = {}
        if amount is not None:
            changes["amount"] = amount
        if description is not None:
            changes["description"] = description
        if category is not None:
            changes["category"] = category
        if expense_date is not None:
            changes["date"] = parse_optional_date(expense_date)

        expense = service.update_expense(expense_id, changes)
    except SpendcapError as e:
        fail(e.message)

    console.print(f"[green]✓[/green] Updated expense #{expense.id}")
    render_expense(expense)


def delete_command(expense_id: int) -> None:
    """Delete an expense."""
    service = get_service()

    try:
        service.delete_expense(expense_id)
    except SpendcapError as e:
        fail(e.message)

    console.print(f"[green]✓[/green] Deleted expense #{expense_id}")


def show_command(expense_id: int) -> None:
    """Show one expense."""
    service = get_service()

    try:
        expense = service.get_expense(expense_id)
    except SpendcapError as e:
        fail(e.message)

    console.print(f"\n[bold]Expense #{expense.id}[/bold]")
    render_expense(expense)
