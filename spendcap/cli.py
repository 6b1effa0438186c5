"""CLI entry point for spendcap."""

import typer

from spendcap.commands.admin import init_command
from spendcap.commands.common import fail
from spendcap.commands.expenses import add_command, delete_command, edit_command, show_command
from spendcap.commands.listing import category_command, list_command, search_command, top_command
from spendcap.commands.report import month_command, overview_command, summary_command
from spendcap.config import DEFAULT_CONFIG, ConfigError, load_settings
from spendcap.logs import configure_logging

app = typer.Typer(
    name="spendcap",
    help="Track expenses with per-category monthly spending caps",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Track expenses with per-category monthly spending caps."""
    try:
        settings = load_settings()
    except ConfigError as e:
        # init --force rewrites the broken file
        if ctx.invoked_subcommand != "init":
            fail(e.message)
        settings = dict(DEFAULT_CONFIG)

    level = log_level or settings["log_level"]
    try:
        configure_logging(level)
    except ValueError as e:
        fail(str(e))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize spendcap database and configuration."""
    init_command(force)


@app.command()
def add(
    amount: str,
    description: str,
    category: str,
    date: str = typer.Option(None, "--date", "-d", help="Expense date (default: today)"),
) -> None:
    """Record an expense."""
    add_command(amount, description, category, date)


@app.command()
def edit(
    expense_id: int,
    amount: str = typer.Option(None, "--amount", help="New amount"),
    description: str = typer.Option(None, "--description", help="New description"),
    category: str = typer.Option(None, "--category", help="New category"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Change fields of an expense."""
    edit_command(expense_id, amount, description, category, date)


@app.command()
def delete(expense_id: int) -> None:
    """Delete an expense (expenses older than a year are kept for audit)."""
    delete_command(expense_id)


@app.command()
def show(expense_id: int) -> None:
    """Show one expense."""
    show_command(expense_id)


@app.command(name="list")
def list_expenses(
    search: str = typer.Option(None, "--search", "-s", help="Description contains (case-insensitive)"),
    category: list[str] = typer.Option(None, "--category", "-c", help="Category (repeat for several)"),
    min_amount: str = typer.Option(None, "--min", help="Minimum amount"),
    max_amount: str = typer.Option(None, "--max", help="Maximum amount"),
    start_date: str = typer.Option(None, "--from", help="Earliest date"),
    end_date: str = typer.Option(None, "--to", help="Latest date"),
    sort_by: str = typer.Option(None, "--sort-by", help="date, amount, description, category or createdAt"),
    direction: str = typer.Option(None, "--direction", help="'asc' or 'desc'"),
    page: int = typer.Option(None, "--page", help="Page number (0-based)"),
    size: int = typer.Option(None, "--size", help="Page size (1-100)"),
    limit: int = typer.Option(None, "--limit", help="Maximum expenses to show (overrides config)"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching expenses"),
) -> None:
    """List your expenses."""
    list_command(
        search, category, min_amount, max_amount, start_date, end_date, sort_by, direction, page, size, limit, all
    )


@app.command()
def search(term: str) -> None:
    """Search expense descriptions."""
    search_command(term)


@app.command()
def top(
    limit: int = typer.Option(None, "--limit", "-n", help="How many to show (overrides config)"),
) -> None:
    """Show your most expensive expenses."""
    top_command(limit)


@app.command()
def category(name: str) -> None:
    """Show expenses and total for a category."""
    category_command(name)


@app.command()
def summary(
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show spending per category."""
    summary_command(histogram)


@app.command()
def month(
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: current)"),
) -> None:
    """Show the total for a month."""
    month_command(month)


@app.command()
def overview() -> None:
    """Show headline totals."""
    overview_command()


if __name__ == "__main__":
    app()
