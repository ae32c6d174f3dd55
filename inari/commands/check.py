"""Check command: validate wire data against the domain invariants."""

import json
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from inari.codec import DECODERS, decode, encode
from inari.config import load_settings
from inari.domain import Budget, Category, Transaction, Wallet
from inari.domain.errors import DecodeError, PrecisionLossError

console = Console()


def describe(value: Any) -> str:
    """One-line summary of a decoded value for display."""
    if isinstance(value, Wallet):
        return f"{value.name} ({value.wallet_type.value}, {value.currency})"
    if isinstance(value, Category):
        return f"{value.name} [{value.color.value}]"
    if isinstance(value, Budget):
        return f"{value.period.label}: {value.limit}"
    if isinstance(value, Transaction):
        return f"{value.description or '-'} {value.amount} ({value.kind.type_name})"
    type_name = getattr(value, "type_name", None)
    return type_name or str(value)


def check_item(entity_type: str, item: Any, strict: bool) -> tuple[Any, str | None]:
    """Decode one item and confirm it re-encodes to the same value.

    Args:
        entity_type: Entity type name understood by the codec.
        item: Wire value.
        strict: Treat float precision loss as an error.

    Returns:
        Tuple of (decoded_value, error_message).
    """
    try:
        value = decode(entity_type, item)
        round_tripped = decode(entity_type, encode(value, strict))
    except (DecodeError, PrecisionLossError) as e:
        return None, str(e)

    if round_tripped != value:
        return value, "value changes when re-encoded"
    return value, None


def check_command(path: str, entity_type: str, strict: bool | None = None) -> None:
    """Decode a JSON file of entities and report which ones are valid."""
    if entity_type not in DECODERS:
        console.print(f"[red]Unknown type '{entity_type}'[/red]")
        console.print(f"[dim]Choose from: {', '.join(sorted(DECODERS))}[/dim]")
        sys.exit(1)

    if strict is None:
        strict = load_settings().strict_precision

    try:
        data = json.loads(Path(path).read_text())
    except OSError as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        sys.exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}: {e.msg} (line {e.lineno})[/red]")
        sys.exit(1)

    items = data if isinstance(data, list) else [data]

    table = Table(title=f"{entity_type.capitalize()} check")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Value")
    table.add_column("Status")

    failures = 0
    for index, item in enumerate(items):
        value, error = check_item(entity_type, item, strict)
        if error:
            failures += 1
            summary = describe(value) if value is not None else "-"
            table.add_row(str(index), escape(summary), f"[red]{escape(error)}[/red]")
        else:
            table.add_row(str(index), escape(describe(value)), "[green]✓[/green]")

    console.print(table)

    if failures:
        console.print(f"\n[red]{failures} of {len(items)} invalid[/red]", style="bold")
        sys.exit(1)

    console.print(f"\n[green]All {len(items)} valid[/green]")
