"""Listing commands: list with filters, search, top and per-category views."""

from spendcap.commands.common import (
    console,
    fail,
    format_amount,
    get_service,
    parse_optional_amount,
    parse_optional_date,
    render_expenses,
)
from spendcap.config import get_setting
from spendcap.domain.errors import SpendcapError
from spendcap.domain.models import FilterSpec


def build_filter(
    search: str | None = None,
    categories: list[str] | None = None,
    min_amount: str | None = None,
    max_amount: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    sort_by: str | None = None,
    direction: str | None = None,
) -> FilterSpec | None:
    """Turn CLI options into a FilterSpec.

    Returns None when no option was given, so the default business
    ordering applies.
    """
    given = [search, min_amount, max_amount, start_date, end_date, sort_by, direction]
    if not categories and all(option is None for option in given):
        return None

    category = None
    category_set = None
    if categories and len(categories) == 1:
        category = categories[0]
    elif categories:
        category_set = tuple(categories)

    return FilterSpec(
        search_term=search,
        category=category,
        categories=category_set,
        min_amount=parse_optional_amount(min_amount, "Minimum amount"),
        max_amount=parse_optional_amount(max_amount, "Maximum amount"),
        start_date=parse_optional_date(start_date),
        end_date=parse_optional_date(end_date),
        sort_by=sort_by or "date",
        sort_direction=direction or "desc",
    )


def list_command(
    search: str | None = None,
    categories: list[str] | None = None,
    min_amount: str | None = None,
    max_amount: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    sort_by: str | None = None,
    direction: str | None = None,
    page: int | None = None,
    size: int | None = None,
    limit: int | None = None,
    all: bool = False,
) -> None:
    """List expenses, optionally filtered, sorted and paged."""
    service = get_service()

    try:
        spec = build_filter(search, categories, min_amount, max_amount, start_date, end_date, sort_by, direction)

        if page is not None or size is not None:
            result = service.list_expenses_page(spec, page or 0, size or 20)
            if not result.items:
                console.print("[yellow]No expenses found[/yellow]")
                return
            title = (
                f"Expenses (page {result.page + 1} of {result.total_pages}, "
                f"{result.total_elements} total)"
            )
            render_expenses(result.items, title)
            return

        expenses = service.list_expenses(spec)
    except SpendcapError as e:
        fail(e.message)

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    if not all:
        actual_limit = limit if limit is not None else get_setting("list_limit")
        shown = expenses[:actual_limit]
    else:
        shown = expenses

    title = (
        f"Expenses (showing all {len(shown)})"
        if len(shown) == len(expenses)
        else f"Expenses (showing {len(shown)} of {len(expenses)})"
    )
    render_expenses(shown, title)


def search_command(term: str) -> None:
    """Search expense descriptions."""
    service = get_service()

    try:
        expenses = service.search_expenses(term)
    except SpendcapError as e:
        fail(e.message)

    if not expenses:
        console.print(f"[yellow]No expenses matching '{term}'[/yellow]")
        return

    render_expenses(expenses, f"Expenses matching '{term}'")


def top_command(limit: int | None = None) -> None:
    """Show the most expensive expenses."""
    service = get_service()
    actual_limit = limit if limit is not None else get_setting("top_limit")

    try:
        expenses = service.top_expensive(actual_limit)
    except SpendcapError as e:
        fail(e.message)

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    render_expenses(expenses, f"Top {len(expenses)} expenses")


def category_command(category: str) -> None:
    """Show expenses and the total for one category."""
    service = get_service()

    try:
        expenses = service.expenses_by_category(category)
        total = service.category_total(category)
    except SpendcapError as e:
        fail(e.message)

    if not expenses:
        console.print(f"[yellow]No expenses in '{category}'[/yellow]")
        return

    render_expenses(expenses, f"{expenses[0].category} ({len(expenses)} expenses)")
    console.print(f"\n[bold]Total:[/bold] {format_amount(total)}")
