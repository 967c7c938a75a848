# ruff: noqa: I001
"""CLI for the ``ledger`` package.

Typer-based console interface for database housekeeping: creating the schema,
seeding the category catalog and printing the provider catalog. Environment
variables (notably ``DATABASE_URL``) are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in the
service modules.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .logging_setup import configure_logging, get_logger
from .providers import ACCOUNT_PROVIDERS, ACCOUNT_TYPES, providers_for

logger = get_logger("ledger.cli")
console = Console()

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Housekeeping for the personal-finance ledger database.",
)


@app.command("init-db")
def init_db_cmd(
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    """Create every ledger table that does not exist yet."""

    from ledger_db.client import get_engine
    from ledger_db.schema import create_schema

    try:
        tables = create_schema(get_engine(database_url=database_url))
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    logger.info("Schema ready (%d tables)", len(tables))
    console.print(f"Schema ready: {', '.join(tables)}")


@app.command("seed-categories")
def seed_categories_cmd(
    tier: str = typer.Option("default", help="Seed tier: default, extended or all."),
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    """Insert the missing categories of a seed tier."""

    from .seed_categories import reseed_categories

    try:
        inserted = reseed_categories(database_url=database_url, tier=tier)
    except (RuntimeError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"Inserted {inserted} categories ({tier} tier)")


@app.command("providers")
def providers_cmd(
    account_type: str | None = typer.Option(
        None, "--type", help="Only show one account type (credit, bank, investment)."
    ),
) -> None:
    """Print the supported providers and their products."""

    if account_type is not None and account_type not in ACCOUNT_PROVIDERS:
        console.print(
            f"[red]Error:[/red] unknown account type {account_type!r}; "
            f"expected one of {', '.join(ACCOUNT_TYPES)}"
        )
        raise typer.Exit(1)

    table = Table(title="Account providers")
    table.add_column("Type")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Products")
    for t in [account_type] if account_type else ACCOUNT_TYPES:
        for p in providers_for(t):
            table.add_row(t, p.id, p.name, ", ".join(p.products))
    console.print(table)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover - `python -m ledger.cli`
    app()
