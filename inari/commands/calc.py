"""Calculator commands: spread-out amortization, budget periods, palette."""

import sys
from decimal import Decimal, InvalidOperation

import pandas as pd
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from inari.config import load_settings
from inari.dates import utc_now
from inari.domain import BudgetPeriod, CategoryColor, SpreadDuration, SpreadOutProperties
from inari.domain.currency import CurrencyCode
from inari.domain.errors import ContractViolation

console = Console()

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal | None:
    """Parse an amount string to a Decimal.

    Args:
        amount_str: String containing the amount (e.g. "600" or "42.50").

    Returns:
        Decimal amount, or None if invalid.
    """
    try:
        amount = Decimal(amount_str.strip().replace(",", ""))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def format_amount(amount: Decimal, currency: CurrencyCode) -> str:
    """Format an amount with its currency symbol, rounded to cents."""
    return f"{currency.symbol()}{amount.quantize(CENT):,}"


def spread_command(total: str, duration: int, unit: str, start: str | None = None) -> None:
    """Show how a purchase spreads over days, weeks or months."""
    amount = parse_amount(total)
    if amount is None:
        console.print(f"[red]Invalid amount: {total}[/red]")
        sys.exit(1)

    try:
        duration_type = SpreadDuration(unit)
    except ValueError:
        console.print(f"[red]Unknown unit '{unit}'. Use days, weeks or months.[/red]")
        sys.exit(1)

    if start:
        try:
            # pandas.to_datetime accepts ISO, European and American formats
            start_date = pd.to_datetime(start, dayfirst=True).to_pydatetime()
        except (ValueError, pd.errors.ParserError) as e:
            console.print(f"[red]Invalid start date: {e}[/red]")
            console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
            sys.exit(1)
    else:
        start_date = utc_now()

    try:
        properties = SpreadOutProperties(
            total_amount=amount,
            duration=duration,
            duration_type=duration_type,
            start_date=start_date,
        )
    except ContractViolation as e:
        console.print(f"[red]{e.message}[/red]")
        sys.exit(1)

    currency = load_settings().currency

    table = Table(title="Spread out")
    table.add_column("", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total", format_amount(properties.total_amount, currency))
    table.add_row("Start", properties.start_date.strftime("%Y-%m-%d"))
    table.add_row("End", properties.end_date.strftime("%Y-%m-%d"))
    table.add_row("Per day", format_amount(properties.daily_amount, currency))
    table.add_row("Per month", format_amount(properties.monthly_amount, currency))
    console.print(table)


def period_command(month: str | None = None) -> None:
    """Show a budget period and its date range."""
    if month:
        try:
            period = BudgetPeriod.parse(month)
        except ContractViolation as e:
            console.print(f"[red]{e.message}[/red]")
            sys.exit(1)
    else:
        period = BudgetPeriod.current()

    first, next_first = period.date_range()
    console.print(f"[bold]{period.label}[/bold] ({period})")
    console.print(f"[dim]{first.isoformat()} up to {next_first.isoformat()}[/dim]")


def colors_command() -> None:
    """List the category colour palette."""
    table = Table(title="Category colors")
    table.add_column("Name")
    table.add_column("Hex")
    table.add_column("Swatch")

    for color in CategoryColor:
        table.add_row(color.value, color.hex_value, Text("      ", style=Style(bgcolor=color.color)))

    console.print(table)
