"""
CLI Output Utilities

Rich console formatting utilities for CLI output.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from lumina.api.core.types import CelestialReadout


# Create console with unicode detection
console = Console()

_use_unicode = console.is_terminal and not console.legacy_windows


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print info message in blue."""
    info_icon = "ℹ" if _use_unicode else "i"
    console.print(f"[blue]{info_icon}[/blue] {message}")


def print_json(data: dict[str, Any]) -> None:
    """Print data as JSON."""
    console.print_json(json.dumps(data, default=str))


def readout_table(readout: CelestialReadout, title: str = "Moon") -> Table:
    """Build a two-column table of the slow-tick readout."""
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Phase", readout.phase_label)
    table.add_row("Illumination", readout.illumination_display)
    table.add_row("Altitude", readout.altitude_display)
    table.add_row("Distance", readout.distance_display)
    table.add_row("Rise", readout.rise_display)
    table.add_row("Zenith", readout.zenith_display)
    table.add_row("Set", readout.set_display)
    return table
