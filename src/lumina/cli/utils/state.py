"""
CLI State Management

Resolves the observer position and engine settings shared by CLI commands.
"""

from __future__ import annotations

import typer

from lumina.api.config import LuminaSettings, load_settings
from lumina.api.core.exceptions import ConfigurationError, InvalidLocationError, LocationError, LocationNotSetError
from lumina.api.core.types import Position
from lumina.api.location.observer import get_observer_location
from lumina.cli.utils.output import print_error


def resolve_position(latitude: float | None, longitude: float | None) -> Position:
    """
    Use the given coordinates, or fall back to the saved observer location.

    Raises:
        LocationNotSetError: If neither is available
        InvalidLocationError: If the given coordinates are out of range
    """
    if latitude is not None and longitude is not None:
        if not -90.0 <= latitude <= 90.0:
            raise InvalidLocationError("Latitude must be between -90 and +90 degrees")
        if not -180.0 <= longitude <= 180.0:
            raise InvalidLocationError("Longitude must be between -180 and +180 degrees")
        return Position(latitude=latitude, longitude=longitude)
    if latitude is not None or longitude is not None:
        raise LocationNotSetError("Both --lat and --lon are required when giving coordinates")

    saved = get_observer_location()
    if saved is None:
        raise LocationNotSetError("No location set. Use --lat/--lon or 'lumina location set'.")
    return saved.position


def ensure_position(latitude: float | None, longitude: float | None) -> Position:
    """resolve_position, exiting with an error message on failure."""
    try:
        return resolve_position(latitude, longitude)
    except LocationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def ensure_settings() -> LuminaSettings:
    """load_settings, exiting with an error message on failure."""
    try:
        return load_settings()
    except ConfigurationError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e
