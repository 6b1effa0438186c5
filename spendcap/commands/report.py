"""Report commands: category summary, monthly total and overview."""

import sys
from datetime import date, datetime

from rich.table import Table

from spendcap.commands.common import console, fail, format_amount, get_service
from spendcap.dates import month_range
from spendcap.domain.errors import SpendcapError
from spendcap.domain.report import histogram_bar_length

BAR_WIDTH = 30


def parse_month(month: str | None) -> tuple[int, int]:
    """Parse a YYYY-MM string; None means the current month."""
    if month is None:
        today = date.today()
        return today.year, today.month
    try:
        parsed = datetime.strptime(month, "%Y-%m")
    except ValueError:
        console.print(f"[red]Error: Invalid month '{month}'. Use YYYY-MM[/red]")
        sys.exit(1)
    return parsed.year, parsed.month


def summary_command(histogram: bool = True) -> None:
    """Show spending per category with share of the total."""
    service = get_service()

    try:
        summary = service.category_summary()
    except SpendcapError as e:
        fail(e.message)

    if not summary.categories:
        console.print("[yellow]No expenses found[/yellow]")
        return

    table = Table(title="Spending by category")
    table.add_column("Category", style="magenta")
    table.add_column("Count", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    if histogram:
        table.add_column("", style="cyan")

    max_amount = summary.categories[0].amount
    for row in summary.categories:
        share = f"{row.percentage:.1f}%" if row.percentage is not None else "-"
        cells = [row.category, str(row.transaction_count), format_amount(row.amount), share]
        if histogram:
            cells.append("█" * histogram_bar_length(row.amount, max_amount, BAR_WIDTH))
        table.add_row(*cells)

    console.print(table)
    total = format_amount(summary.total_amount)
    console.print(f"\n[bold]Total:[/bold] {total} across {summary.category_count} categories")
    if summary.top_category is not None:
        console.print(f"[bold]Top category:[/bold] {summary.top_category.category}")


def month_command(month: str | None = None) -> None:
    """Show the total spent in a calendar month."""
    year, month_int = parse_month(month)
    service = get_service()

    try:
        total = service.monthly_total(year, month_int)
    except SpendcapError as e:
        fail(e.message)

    _, _, label = month_range(year, month_int)
    console.print(f"[bold]{label}:[/bold] {format_amount(total)}")


def overview_command() -> None:
    """Show headline totals."""
    service = get_service()

    try:
        overview = service.overview()
    except SpendcapError as e:
        fail(e.message)

    console.print("\n[bold]Overview[/bold]")
    console.print(f"  Total spending: {format_amount(overview.total_spending)}")
    console.print(f"  Expenses: {overview.total_expenses}")
    console.print(f"  Categories: {overview.total_categories}")
    console.print(f"  This month: {format_amount(overview.current_month_spending)}")
