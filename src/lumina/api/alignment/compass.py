"""
Compass Labels

Converts bearings to compass points and builds the short pointing hints shown
next to the heading readout.
"""

from __future__ import annotations

import math

from lumina.api.alignment.angles import signed_offset, turn_direction, wrap_degrees
from lumina.api.core.constants import LOCK_THRESHOLD_DEGREES
from lumina.api.core.enums import TurnDirection


__all__ = [
    "COMPASS_POINTS_16",
    "COMPASS_POINTS_8",
    "compass_point",
    "describe_altitude",
    "format_turn_instruction",
]


COMPASS_POINTS_8 = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

COMPASS_POINTS_16 = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)


def compass_point(azimuth_deg: float | None, points: int = 8) -> str:
    """
    Convert a bearing to an 8- or 16-point compass label.

    Each label covers an equal sector centered on its direction, so with
    8 points "N" spans 337.5-22.5 degrees.

    Args:
        azimuth_deg: Bearing in degrees (0 = North, 90 = East), any range
        points: 8 or 16

    Returns:
        Compass label, or "?" for a missing bearing

    Examples:
        >>> compass_point(45)
        'NE'
        >>> compass_point(22.5, points=16)
        'NNE'
    """
    if points not in (8, 16):
        raise ValueError(f"Unsupported compass resolution: {points} (use 8 or 16)")
    if azimuth_deg is None or math.isnan(azimuth_deg):
        return "?"

    labels = COMPASS_POINTS_8 if points == 8 else COMPASS_POINTS_16
    sector = 360.0 / points
    index = int((wrap_degrees(azimuth_deg) + sector / 2) // sector) % points
    return labels[index]


def describe_altitude(altitude_deg: float) -> str:
    """
    Convert an altitude to a short description of where to look.

    Examples:
        >>> describe_altitude(-3)
        'below the horizon'
        >>> describe_altitude(45)
        'halfway up the sky'
    """
    if altitude_deg < 0:
        return "below the horizon"
    elif altitude_deg < 10:
        return "just above the horizon"
    elif altitude_deg < 30:
        return "low in the sky"
    elif altitude_deg < 60:
        return "halfway up the sky"
    elif altitude_deg < 80:
        return "high in the sky"
    else:
        return "nearly overhead"


def format_turn_instruction(
    heading: float | None,
    target: float | None,
    tolerance: float = LOCK_THRESHOLD_DEGREES,
) -> str:
    """
    Describe the turn needed to face the target.

    Examples:
        >>> format_turn_instruction(100, 103)
        'On target, facing E'
        >>> format_turn_instruction(90, 180)
        'Turn right 90° to face S'
    """
    direction = turn_direction(heading, target, tolerance)
    if direction is TurnDirection.UNKNOWN:
        return "Waiting for heading"

    label = compass_point(target)
    if direction is TurnDirection.ON_TARGET:
        return f"On target, facing {label}"

    degrees = round(abs(signed_offset(heading, target)))  # type: ignore[arg-type]
    side = "right" if direction is TurnDirection.RIGHT else "left"
    return f"Turn {side} {degrees}° to face {label}"
