"""
Common Enums

Enumerations used throughout the Lumina API.
"""

from enum import StrEnum


__all__ = [
    "HeadingConvention",
    "LockEffect",
    "LockState",
    "MoonPhase",
    "TurnDirection",
]


class MoonPhase(StrEnum):
    """Moon phase names."""

    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


class LockState(StrEnum):
    """Whether the device is pointed at the target."""

    UNLOCKED = "unlocked"
    LOCKED = "locked"


class LockEffect(StrEnum):
    """One-shot side effects requested on a lock state change."""

    ENGAGE = "engage"  # Haptic pulse, lock indicator on
    DISENGAGE = "disengage"  # Lock indicator off


class TurnDirection(StrEnum):
    """Which way the user should turn to face the target."""

    LEFT = "left"
    RIGHT = "right"
    ON_TARGET = "on-target"
    UNKNOWN = "unknown"  # No heading or target yet


class HeadingConvention(StrEnum):
    """How a platform reports the compass angle of an orientation event."""

    CLOCKWISE = "clockwise"  # 0-360 clockwise from north (iOS compass heading)
    COUNTER_CLOCKWISE = "counter-clockwise"  # Raw alpha, counter-clockwise (Android)
