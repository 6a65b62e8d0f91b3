"""
Location Commands

Commands for managing the saved observer location.
"""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from lumina.api.core.exceptions import GeocodingError, LocationNotFoundError
from lumina.api.location.observer import (
    ObserverLocation,
    clear_observer_location,
    geocode_location,
    get_location_path,
    get_observer_location,
    set_observer_location,
)
from lumina.cli.utils.groups import SortedCommandsGroup
from lumina.cli.utils.output import console, print_error, print_info, print_json, print_success


app = typer.Typer(help="Observer location commands", cls=SortedCommandsGroup)


@app.command("set")
def set_location(
    latitude: float = typer.Option(..., "--lat", help="Latitude in degrees (-90 to +90, North is positive)"),
    longitude: float = typer.Option(..., "--lon", help="Longitude in degrees (-180 to +180, East is positive)"),
    name: str | None = typer.Option(None, "--name", help="Optional name for the location"),
) -> None:
    """
    Save the observer location.

    Example:
        lumina location set --lat 40.7128 --lon -74.0060 --name "New York"
    """
    if not -90 <= latitude <= 90:
        print_error("Latitude must be between -90 and +90 degrees")
        raise typer.Exit(code=1) from None
    if not -180 <= longitude <= 180:
        print_error("Longitude must be between -180 and +180 degrees")
        raise typer.Exit(code=1) from None

    location = ObserverLocation(latitude=latitude, longitude=longitude, name=name)
    set_observer_location(location)
    print_success(f"Location set to {location.position}" + (f" ({name})" if name else ""))


@app.command("search")
def search_location(
    query: str = typer.Argument(..., help="City, address or postal code"),
    save: bool = typer.Option(True, "--save/--no-save", help="Save the result as the observer location"),
) -> None:
    """
    Look up a place by name and use it as the observer location.

    Example:
        lumina location search "Reykjavik, Iceland"
    """
    if not query.strip():
        print_error("Query must not be empty")
        raise typer.Exit(code=1)

    print_info(f"Searching for '{query}'...")
    try:
        location = asyncio.run(geocode_location(query))
    except LocationNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except GeocodingError as e:
        print_error(f"Geocoding failed: {e}")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Found:[/green] {location.name}")
    console.print(f"[dim]Coordinates: {location.position}[/dim]")
    if save:
        set_observer_location(location)
        print_success("Location saved")


@app.command("show")
def show_location(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show the saved observer location.

    Example:
        lumina location show
    """
    location = get_observer_location()
    if location is None:
        print_info("No location saved. Use 'lumina location set' or 'lumina location search'.")
        raise typer.Exit(code=1)

    if json_output:
        print_json(
            {
                "name": location.name,
                "latitude": location.latitude,
                "longitude": location.longitude,
                "config_file": str(get_location_path()),
            }
        )
        return

    table = Table(title="Observer Location", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Name", location.name or "Unnamed")
    table.add_row("Position", str(location.position))
    table.add_row("Config file", str(get_location_path()))
    console.print(table)


@app.command("clear")
def clear_location() -> None:
    """Forget the saved observer location."""
    clear_observer_location(delete_file=True)
    print_success("Location cleared")
