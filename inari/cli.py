"""CLI entry point for inari."""

import logging

import typer
from rich.logging import RichHandler

from inari.commands.admin import init_command
from inari.commands.calc import colors_command, period_command, spread_command
from inari.commands.check import check_command

app = typer.Typer(
    name="inari",
    help="inari - shared wallets, budgets and transactions",
    add_completion=False,
)


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(RichHandler(level=level, show_path=False))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """inari - shared wallets, budgets and transactions."""
    setup_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create your inari configuration file."""
    init_command(force)


@app.command()
def check(
    path: str,
    entity_type: str = typer.Option("transaction", "--type", "-t", help="wallet, category, budget, transaction or kind"),
    strict: bool = typer.Option(None, "--strict/--lenient", help="Fail on float precision loss (overrides config)"),
) -> None:
    """Validate a JSON file of wire-encoded entities."""
    check_command(path, entity_type, strict)


@app.command()
def spread(
    total: str,
    duration: int,
    unit: str = typer.Option("months", "--unit", "-u", help="days, weeks or months"),
    start: str = typer.Option(None, "--start", help="Start date (default: today)"),
) -> None:
    """Show daily and monthly amounts for a spread-out purchase."""
    spread_command(total, duration, unit, start)


@app.command()
def period(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show a budget period and its date range."""
    period_command(month)


@app.command()
def colors() -> None:
    """List the category colour palette."""
    colors_command()


if __name__ == "__main__":
    app()
