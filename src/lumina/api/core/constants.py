"""
Engine Constants

Thresholds, cadences and display placeholders shared by the tracking engine.
"""

from typing import Final


__all__ = [
    "DEFAULT_CANVAS_HEIGHT",
    "DEFAULT_CANVAS_WIDTH",
    "DEGREES_PER_TURN",
    "FAST_INTERVAL_SECONDS",
    "HALF_TURN_DEGREES",
    "LOCK_HAPTIC_PATTERN_MS",
    "LOCK_THRESHOLD_DEGREES",
    "MOON_TIMES_WINDOW_HOURS",
    "NOT_AVAILABLE",
    "NO_ANGLE",
    "NO_TIME",
    "SLOW_INTERVAL_SECONDS",
    "TRAJECTORY_TOP_MARGIN",
]


# Angles
DEGREES_PER_TURN: Final[float] = 360.0
"""Degrees in a full circle."""

HALF_TURN_DEGREES: Final[float] = 180.0
"""Largest possible angular distance between two headings."""

LOCK_THRESHOLD_DEGREES: Final[float] = 5.0
"""Heading must be strictly closer than this to the target to lock."""

LOCK_HAPTIC_PATTERN_MS: Final[tuple[int, ...]] = (50, 50, 50)
"""Vibrate/pause/vibrate pattern requested when a lock engages."""

# Cadences
SLOW_INTERVAL_SECONDS: Final[float] = 1.0
"""Celestial data refresh interval."""

FAST_INTERVAL_SECONDS: Final[float] = 0.05
"""Alignment refresh interval (20 Hz)."""

# Trajectory arc
TRAJECTORY_TOP_MARGIN: Final[float] = 20.0
"""Distance of the arc's Bézier control point from the top edge."""

DEFAULT_CANVAS_WIDTH: Final[float] = 300.0
DEFAULT_CANVAS_HEIGHT: Final[float] = 120.0

MOON_TIMES_WINDOW_HOURS: Final[int] = 24
"""Rise/set lookup window, starting at midnight of the requested day."""

# Placeholders for values that are not known yet
NO_TIME: Final[str] = "--:--"
NO_ANGLE: Final[str] = "---°"
NOT_AVAILABLE: Final[str] = "N/A"
