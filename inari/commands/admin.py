"""Admin commands for setting up configuration."""

import sys
from pathlib import Path

from rich.console import Console

from inari.config import create_default_config, get_config_path

console = Console()


def init_command(force: bool = False, config_path: Path | None = None) -> None:
    """Create the inari configuration file."""
    if config_path is None:
        config_path = get_config_path()

    # Guard: refuse to overwrite without force flag
    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'inari init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        create_default_config(config_path)
    except OSError as e:
        console.print(f"[red]Could not write config: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Config file created at {config_path} (permissions: 600)")
