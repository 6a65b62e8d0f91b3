"""
Angle Math

Normalization and distance helpers for compass bearings. All functions are
pure and never raise; a NaN input propagates to a NaN (or UNKNOWN) result,
which callers treat as "not aligned".
"""

from __future__ import annotations

import math

import deal

from lumina.api.core.constants import DEGREES_PER_TURN, HALF_TURN_DEGREES
from lumina.api.core.enums import TurnDirection


__all__ = [
    "angular_delta",
    "normalize_azimuth",
    "signed_offset",
    "turn_direction",
    "wrap_degrees",
]


def _in_range_or_nan(result: float) -> bool:
    return math.isnan(result) or 0.0 <= result < DEGREES_PER_TURN


@deal.post(_in_range_or_nan, message="Wrapped angle must be in [0, 360)")
def wrap_degrees(degrees: float) -> float:
    """
    Wrap an angle into [0, 360).

    Examples:
        >>> wrap_degrees(370.0)
        10.0
        >>> wrap_degrees(-90.0)
        270.0
    """
    wrapped = degrees % DEGREES_PER_TURN
    # A tiny negative input wraps to exactly 360.0 in floating point
    if wrapped >= DEGREES_PER_TURN:
        return 0.0
    return wrapped


@deal.post(_in_range_or_nan, message="Azimuth must be in [0, 360)")
def normalize_azimuth(azimuth_rad_south_based: float) -> float:
    """
    Convert a south-based azimuth in radians to degrees from north.

    The celestial provider measures azimuth from south; compass headings are
    measured from north, so the converted value is shifted by half a turn.

    Args:
        azimuth_rad_south_based: Azimuth in radians, 0 = south, any range

    Returns:
        Azimuth in degrees, 0 = north, in [0, 360)

    Examples:
        >>> normalize_azimuth(0.0)
        180.0
        >>> normalize_azimuth(math.pi)
        0.0
    """
    return wrap_degrees(math.degrees(azimuth_rad_south_based) + HALF_TURN_DEGREES)


def angular_delta(a: float, b: float) -> float:
    """
    Shortest angular distance between two bearings.

    Symmetric in its arguments and always in [0, 180] for inputs in [0, 360).

    Examples:
        >>> angular_delta(10, 350)
        20.0
        >>> angular_delta(0, 180)
        180
    """
    delta = abs(a - b)
    if delta > HALF_TURN_DEGREES:
        delta = DEGREES_PER_TURN - delta
    return delta


def signed_offset(heading: float, target: float) -> float:
    """
    Clockwise turn from heading to target, in (-180, 180].

    Positive means turn right (clockwise), negative means turn left.

    Examples:
        >>> signed_offset(350, 10)
        20.0
        >>> signed_offset(10, 350)
        -20.0
    """
    offset = wrap_degrees(target - heading)
    if offset > HALF_TURN_DEGREES:
        offset -= DEGREES_PER_TURN
    return offset


def turn_direction(heading: float | None, target: float | None, tolerance: float) -> TurnDirection:
    """
    Tell the user which way to turn to face the target.

    Args:
        heading: Current heading in degrees, None if no sample yet
        target: Target azimuth in degrees, None if not computed yet
        tolerance: Distance below which the heading counts as on target

    Returns:
        LEFT, RIGHT, ON_TARGET, or UNKNOWN when either input is missing
    """
    if heading is None or target is None:
        return TurnDirection.UNKNOWN

    delta = angular_delta(heading, target)
    if math.isnan(delta):
        return TurnDirection.UNKNOWN
    if delta < tolerance:
        return TurnDirection.ON_TARGET
    return TurnDirection.RIGHT if signed_offset(heading, target) > 0 else TurnDirection.LEFT
