"""
Observer Location Management

Persists the observer's position between runs and looks up coordinates for
place names. A saved location seeds the telemetry session with its first
location fix.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import deal

from lumina.api.config import get_config_dir
from lumina.api.core.exceptions import GeocodingError, LocationNotFoundError
from lumina.api.core.types import Position


logger = logging.getLogger(__name__)


__all__ = [
    "ObserverLocation",
    "clear_observer_location",
    "geocode_location",
    "get_location_path",
    "get_observer_location",
    "load_location",
    "save_location",
    "set_observer_location",
]


@dataclass(frozen=True)
class ObserverLocation:
    """Observer's geographic location."""

    latitude: float  # Degrees north (negative for south)
    longitude: float  # Degrees east (negative for west)
    name: str | None = None  # Optional location name

    @property
    def position(self) -> Position:
        return Position(latitude=self.latitude, longitude=self.longitude)


# Cached current location
_current_location: ObserverLocation | None = None


def get_location_path() -> Path:
    """Get path to observer location config file."""
    return get_config_dir() / "observer_location.json"


@deal.pre(lambda location, path=None: -90 <= location.latitude <= 90, message="Latitude must be -90 to +90")  # type: ignore[misc]
@deal.pre(lambda location, path=None: -180 <= location.longitude <= 180, message="Longitude must be -180 to +180")  # type: ignore[misc]
def save_location(location: ObserverLocation, path: Path | None = None) -> None:
    """
    Save observer location to config file.

    Args:
        location: Observer location to save
        path: Destination file (default: get_location_path())
    """
    path = path or get_location_path()
    logger.info(
        f"Saving observer location: {location.name or 'Unnamed'} ({location.latitude:.4f}, {location.longitude:.4f})"
    )

    data = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "name": location.name,
    }

    with path.open("w") as f:
        json.dump(data, f, indent=2)

    logger.debug(f"Location saved to {path}")


def load_location(path: Path | None = None) -> ObserverLocation | None:
    """
    Load observer location from config file.

    Returns:
        Saved observer location, or None if none is saved or the file is invalid
    """
    path = path or get_location_path()

    if not path.exists():
        logger.debug(f"No saved location found at {path}")
        return None

    try:
        with path.open("r") as f:
            data = json.load(f)

        if "latitude" not in data or "longitude" not in data:
            raise KeyError("Missing required fields: latitude and/or longitude")

        latitude = float(data["latitude"])
        longitude = float(data["longitude"])

        if not -90 <= latitude <= 90:
            raise ValueError(f"Invalid latitude: {latitude} (must be -90 to 90)")
        if not -180 <= longitude <= 180:
            raise ValueError(f"Invalid longitude: {longitude} (must be -180 to 180)")

        location = ObserverLocation(latitude=latitude, longitude=longitude, name=data.get("name"))
        logger.info(
            f"Loaded observer location: {location.name or 'Unnamed'} ({location.latitude:.4f}, {location.longitude:.4f})"
        )
        return location
    except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
        logger.warning(f"Failed to load location from {path}: {e}")
        return None


def get_observer_location() -> ObserverLocation | None:
    """Get the cached observer location, loading it from config on first use."""
    global _current_location

    if _current_location is None:
        _current_location = load_location()

    return _current_location


def set_observer_location(location: ObserverLocation, save: bool = True) -> None:
    """
    Set current observer location.

    Args:
        location: New observer location
        save: Whether to save to config file (default: True)
    """
    global _current_location
    _current_location = location

    if save:
        save_location(location)


def clear_observer_location(delete_file: bool = False) -> None:
    """Clear the cached location, and optionally the saved file."""
    global _current_location
    _current_location = None

    if delete_file:
        path = get_location_path()
        if path.exists():
            path.unlink()
            logger.info(f"Removed saved location {path}")


@deal.pre(lambda query: bool(query and query.strip()), message="Query must be non-empty")  # type: ignore[misc]
async def geocode_location(query: str) -> ObserverLocation:
    """
    Geocode a location from city name, address, or ZIP code.

    Uses OpenStreetMap's Nominatim service via aiohttp.

    Args:
        query: Location query (e.g., "New York, NY", "90210", "London, UK")

    Returns:
        Observer location with coordinates from geocoding

    Raises:
        LocationNotFoundError: If the query matched nothing
        GeocodingError: If the service could not be reached or answered badly
    """
    import aiohttp

    url = "https://nominatim.openstreetmap.org/search"
    params: dict[str, str | int] = {"q": query, "format": "json", "limit": 1}
    headers = {"User-Agent": "lumina-moon-finder"}

    try:
        async with (
            aiohttp.ClientSession() as session,
            session.get(url, params=params, headers=headers, timeout=aiohttp.ClientTimeout(total=10)) as response,
        ):
            if response.status != 200:
                raise GeocodingError(f"Geocoding API returned HTTP {response.status}")
            data = await response.json()
    except aiohttp.ClientError as e:
        raise GeocodingError(f"Geocoding request failed: {e}") from e

    if not data:
        raise LocationNotFoundError(f"Could not find location: '{query}'")

    result = data[0]
    try:
        return ObserverLocation(
            latitude=float(result["lat"]),
            longitude=float(result["lon"]),
            name=result.get("display_name", query),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise GeocodingError(f"Unexpected geocoding response: {e}") from e
