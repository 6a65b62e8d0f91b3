"""
Custom exception classes for the Lumina tracking engine.

The alignment math itself never raises: missing or invalid input degrades to
a placeholder. These exceptions cover the collaborators around it (ephemeris
loading, the celestial provider, configuration files and locations).
"""

from __future__ import annotations


__all__ = [
    "CelestialProviderError",
    "ConfigurationError",
    "EphemerisError",
    "EphemerisFileNotFoundError",
    "GeocodingError",
    "InvalidConfigurationError",
    "InvalidLocationError",
    "LocationError",
    "LocationNotFoundError",
    "LocationNotSetError",
    "LuminaError",
]


class LuminaError(Exception):
    """
    Base exception for all Lumina errors.

    All custom exceptions in this library inherit from this base class,
    making it easy to catch every engine-related error.
    """

    pass


# Celestial provider exceptions


class CelestialProviderError(LuminaError):
    """
    Raised when the celestial position provider cannot produce data.

    The telemetry session logs this and keeps the last published snapshot.
    """

    pass


class EphemerisError(CelestialProviderError):
    """Base exception for ephemeris loading errors."""

    pass


class EphemerisFileNotFoundError(EphemerisError):
    """
    Raised when an ephemeris file cannot be found or downloaded.

    Ephemeris files are cached in the Skyfield directory
    (``SKYFIELD_DIR`` or ``~/.skyfield``).
    """

    pass


# Configuration exceptions


class ConfigurationError(LuminaError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """
    Raised when a configuration value is out of range.

    This occurs for settings such as:
    - Lock threshold outside 0-180 degrees
    - Non-positive tick intervals
    - Fast interval longer than the slow interval
    """

    pass


# Location exceptions


class LocationError(LuminaError):
    """Base exception for observer location errors."""

    pass


class LocationNotSetError(LocationError):
    """Raised when an operation needs an observer location and none is set."""

    pass


class InvalidLocationError(LocationError):
    """Raised when coordinates are outside the valid latitude or longitude range."""

    pass


class LocationNotFoundError(LocationError):
    """Raised when a location query returns no results."""

    pass


class GeocodingError(LocationError):
    """Raised when the geocoding service fails."""

    pass
