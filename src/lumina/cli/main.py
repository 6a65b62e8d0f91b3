"""
Lumina CLI - Main Application

This is the main entry point for the Lumina command-line interface.
"""

import logging

import typer
from dotenv import load_dotenv

from lumina.cli.commands import location, moon, settings, track
from lumina.cli.utils.groups import SortedCommandsGroup
from lumina.cli.utils.output import console


# Create main app
app = typer.Typer(
    name="lumina",
    help="Lumina Moon Finder",
    add_completion=True,
    rich_markup_mode="rich",
    cls=SortedCommandsGroup,
)

# Global state for CLI
state: dict[str, bool] = {
    "verbose": False,
}


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Lumina Moon Finder

    Point your device at the Moon: live heading guidance, lock detection and
    the Moon's rise-to-set arc.

    [bold green]Examples:[/bold green]

        lumina location set --lat 40.7128 --lon -74.0060
        lumina moon
        lumina track --heading 90 --sweep 15

    [bold blue]Environment Variables:[/bold blue]

        LUMINA_LOCK_THRESHOLD - Lock threshold in degrees
        LUMINA_SLOW_INTERVAL  - Moon data refresh interval in seconds
        LUMINA_FAST_INTERVAL  - Alignment refresh interval in seconds
        LUMINA_EPHEMERIS      - Ephemeris file name
        SKYFIELD_DIR          - Ephemeris cache directory
    """
    state["verbose"] = verbose

    load_dotenv()

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")


@app.command(rich_help_panel="Utilities")
def version() -> None:
    """Show the CLI version."""
    from lumina import __version__

    console.print(f"[bold]Lumina[/bold] version [cyan]{__version__}[/cyan]")


app.command("moon", rich_help_panel="Moon")(moon.moon)
app.command("track", rich_help_panel="Moon")(track.track)
app.add_typer(location.app, name="location", rich_help_panel="Configuration")
app.add_typer(settings.app, name="settings", rich_help_panel="Configuration")


if __name__ == "__main__":
    app()
