"""
Settings Commands

Commands for viewing and changing engine settings.
"""

from __future__ import annotations

from dataclasses import asdict, replace

import typer
from rich.table import Table

from lumina.api.config import ENV_OVERRIDES, LuminaSettings, get_settings_path, load_settings, save_settings
from lumina.api.core.exceptions import ConfigurationError
from lumina.cli.utils.output import console, print_error, print_json, print_success


app = typer.Typer(help="Engine settings")


@app.command("show")
def show_settings(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show the effective settings (file values plus environment overrides).

    Example:
        lumina settings show
    """
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    if json_output:
        print_json({**asdict(settings), "config_file": str(get_settings_path())})
        return

    table = Table(title="Lumina Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Environment", style="dim")
    env_by_field = {field: env for env, field in ENV_OVERRIDES.items()}
    for name, value in asdict(settings).items():
        table.add_row(name, str(value), env_by_field.get(name, ""))
    console.print(table)
    console.print(f"[dim]Config file: {get_settings_path()}[/dim]")


@app.command("set")
def set_settings(
    lock_threshold: float | None = typer.Option(None, "--lock-threshold", help="Lock threshold in degrees"),
    slow_interval: float | None = typer.Option(None, "--slow-interval", help="Moon data refresh interval (s)"),
    fast_interval: float | None = typer.Option(None, "--fast-interval", help="Alignment refresh interval (s)"),
    top_margin: float | None = typer.Option(None, "--top-margin", help="Arc apex offset from the top edge"),
    ephemeris: str | None = typer.Option(None, "--ephemeris", help="Ephemeris file name"),
) -> None:
    """
    Change saved settings.

    Example:
        lumina settings set --lock-threshold 3 --fast-interval 0.1
    """
    changes = {
        name: value
        for name, value in {
            "lock_threshold": lock_threshold,
            "slow_interval": slow_interval,
            "fast_interval": fast_interval,
            "top_margin": top_margin,
            "ephemeris": ephemeris,
        }.items()
        if value is not None
    }
    if not changes:
        print_error("Nothing to change; pass at least one option")
        raise typer.Exit(code=1)

    try:
        current = load_settings(use_env=False)
        path = save_settings(replace(current, **changes))
    except ConfigurationError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Saved {', '.join(sorted(changes))} to {path}")


@app.command("reset")
def reset_settings() -> None:
    """Restore default settings."""
    path = save_settings(LuminaSettings())
    print_success(f"Default settings written to {path}")
