"""
Display formatting utilities for the Lumina tracking engine.

Every formatter accepts missing or NaN input and returns a placeholder
instead of raising, so a sensor glitch never breaks a render tick.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from timezonefinder import TimezoneFinder

from lumina.api.core.constants import NO_ANGLE, NO_TIME


logger = logging.getLogger(__name__)


__all__ = [
    "NO_DELTA",
    "format_clock_time",
    "format_degrees",
    "format_delta",
    "format_distance",
    "format_heading",
    "format_percent",
    "get_local_timezone",
    "is_missing",
    "round_half_up",
]

NO_DELTA = "--.-"

# Global timezone finder instance (cached for performance)
_tz_finder = TimezoneFinder()


def is_missing(value: float | None) -> bool:
    """True for None and NaN."""
    return value is None or math.isnan(value)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def format_degrees(degrees: float | None) -> str:
    """
    Format an angle as a rounded whole number of degrees.

    Examples:
        >>> format_degrees(42.4)
        '42°'
        >>> format_degrees(-12.6)
        '-13°'
    """
    if is_missing(degrees):
        return NO_ANGLE
    return f"{round_half_up(degrees)}°"  # type: ignore[arg-type]


def format_heading(degrees: float | None) -> str:
    """
    Format a compass bearing as three zero-padded digits.

    Examples:
        >>> format_heading(7.2)
        '007°'
        >>> format_heading(183.5)
        '184°'
    """
    if is_missing(degrees):
        return NO_ANGLE
    return f"{round_half_up(degrees):03d}°"  # type: ignore[arg-type]


def format_delta(delta: float | None) -> str:
    """Format an angular distance with one decimal place."""
    if is_missing(delta):
        return NO_DELTA
    return f"{delta:.1f}"


def format_percent(fraction: float | None) -> str:
    """Format a 0-1 fraction as a whole percentage."""
    if is_missing(fraction):
        return "--%"
    return f"{round_half_up(fraction * 100)}%"  # type: ignore[operator]


def format_distance(distance_km: float | None) -> str:
    """Format a distance in whole kilometers."""
    if is_missing(distance_km):
        return "-- km"
    return f"{round_half_up(distance_km)} km"  # type: ignore[arg-type]


def get_local_timezone(lat: float, lon: float) -> ZoneInfo | None:
    """
    Get timezone for a given latitude and longitude.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        ZoneInfo object for the timezone, or None if timezone cannot be determined
    """
    try:
        tz_name = _tz_finder.timezone_at(lat=lat, lng=lon)
        if tz_name:
            return ZoneInfo(tz_name)
    except Exception as e:
        logger.debug(f"Timezone lookup failed for ({lat:.4f}, {lon:.4f}): {e}")
    return None


def format_clock_time(dt: datetime | None, lat: float | None = None, lon: float | None = None) -> str:
    """
    Format a time of day as HH:MM in the observer's local timezone.

    Falls back to UTC when no position is given or the timezone cannot be
    determined.

    Args:
        dt: Datetime to format (assumed UTC if no timezone info)
        lat: Observer latitude in degrees
        lon: Observer longitude in degrees

    Returns:
        Formatted time (e.g. "20:30"), or "--:--" when dt is None
    """
    if dt is None:
        return NO_TIME

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    tz = get_local_timezone(lat, lon) if lat is not None and lon is not None else None
    local_dt = dt.astimezone(tz) if tz else dt.astimezone(UTC)
    return local_dt.strftime("%H:%M")
