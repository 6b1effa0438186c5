"""Admin commands: database and configuration setup."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from spendcap.config import ConfigError, create_default_config, get_config_path, resolve_db_path
from spendcap.store.schema import get_db_path, init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize spendcap database and configuration."""
    config_path = get_config_path()
    try:
        db_path = resolve_db_path(config_path)
    except ConfigError as e:
        if not force:
            console.print(f"[red]{escape(e.message)}[/red]", style="bold")
            console.print("\n[yellow]Use 'spendcap init --force' to overwrite[/yellow]")
            sys.exit(1)
        db_path = get_db_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'spendcap init --force' to overwrite[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
