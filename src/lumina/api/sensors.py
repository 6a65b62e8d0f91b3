"""
Orientation Sensor Conversion

Turns raw device-orientation events into compass headings, and provides a
synthetic heading source for running the engine without a sensor.
"""

from __future__ import annotations

import math

from lumina.api.alignment.angles import wrap_degrees
from lumina.api.core.constants import DEGREES_PER_TURN
from lumina.api.core.enums import HeadingConvention


__all__ = [
    "SweepHeadingSource",
    "convert_heading",
    "heading_from_orientation",
]


def convert_heading(raw: float, convention: HeadingConvention) -> float:
    """
    Convert a raw compass angle to degrees clockwise from north.

    Counter-clockwise angles are mirrored with 360 - raw. This does not
    correct for magnetic declination; platforms that report an absolute
    clockwise heading should use that instead.

    Examples:
        >>> convert_heading(90.0, HeadingConvention.COUNTER_CLOCKWISE)
        270.0
        >>> convert_heading(90.0, HeadingConvention.CLOCKWISE)
        90.0
    """
    if convention is HeadingConvention.COUNTER_CLOCKWISE:
        raw = DEGREES_PER_TURN - raw
    return wrap_degrees(raw)


def heading_from_orientation(alpha: float | None, compass_heading: float | None = None) -> float | None:
    """
    Heading for one orientation event, or None if the event has no heading.

    Args:
        alpha: The event's rotation around the vertical axis (counter-clockwise)
        compass_heading: Clockwise compass heading, when the platform reports one

    Returns:
        Heading in [0, 360), or None for a missing, zero or NaN alpha
    """
    # Events without an alpha reading (or a zero placeholder) carry no heading
    if not alpha or math.isnan(alpha):
        return None

    if compass_heading is not None and not math.isnan(compass_heading) and compass_heading:
        return convert_heading(compass_heading, HeadingConvention.CLOCKWISE)
    return convert_heading(alpha, HeadingConvention.COUNTER_CLOCKWISE)


class SweepHeadingSource:
    """Heading that rotates at a constant rate, for demos without a compass."""

    def __init__(self, start: float = 0.0, degrees_per_second: float = 10.0) -> None:
        self.start = start
        self.degrees_per_second = degrees_per_second

    def heading_at(self, elapsed_seconds: float) -> float:
        """Heading after the given number of seconds."""
        return wrap_degrees(self.start + self.degrees_per_second * elapsed_seconds)
