"""
Lumina Moon Finder

Celestial alignment and tracking engine for pointing a handheld device at the
Moon. It combines a live compass heading with the Moon's computed azimuth to
tell the user which way to turn, detects when the device is locked on, and
projects the Moon's rise-to-set path onto a display arc.

Example:
    >>> from lumina import AlignmentTracker, LockEffect
    >>> tracker = AlignmentTracker()
    >>> tracker.update(heading=100.0, azimuth=103.0).effect
    <LockEffect.ENGAGE: 'engage'>
    >>> tracker.update(heading=100.0, azimuth=103.0).effect is None
    True
"""

from lumina.api.alignment.angles import angular_delta, normalize_azimuth, signed_offset, wrap_degrees
from lumina.api.alignment.tracker import AlignmentTracker
from lumina.api.astronomy.moon_phase import classify_moon_phase
from lumina.api.astronomy.provider import CelestialProvider, SkyfieldMoonProvider
from lumina.api.astronomy.trajectory import TrajectoryProjection, project_trajectory, trajectory_progress
from lumina.api.config import LuminaSettings, load_settings

# Exceptions
from lumina.api.core.exceptions import (
    CelestialProviderError,
    ConfigurationError,
    EphemerisError,
    InvalidConfigurationError,
    LocationNotSetError,
    LuminaError,
)

# Type definitions
from lumina.api.core.enums import LockEffect, LockState, MoonPhase, TurnDirection
from lumina.api.core.types import AlignmentReading, CelestialReadout, CelestialSnapshot, Position, TrajectoryPoint
from lumina.api.session import TelemetryPresenter, TelemetrySession


__version__ = "0.1.0"

__all__ = [
    "AlignmentReading",
    # Lock state machine
    "AlignmentTracker",
    "CelestialProvider",
    "CelestialProviderError",
    "CelestialReadout",
    "CelestialSnapshot",
    "ConfigurationError",
    "EphemerisError",
    "InvalidConfigurationError",
    "LocationNotSetError",
    "LockEffect",
    "LockState",
    # Exceptions
    "LuminaError",
    "LuminaSettings",
    "MoonPhase",
    "Position",
    "SkyfieldMoonProvider",
    "TelemetryPresenter",
    # Orchestration
    "TelemetrySession",
    "TrajectoryPoint",
    "TrajectoryProjection",
    "TurnDirection",
    # Angle math
    "angular_delta",
    "classify_moon_phase",
    "load_settings",
    "normalize_azimuth",
    "project_trajectory",
    "signed_offset",
    "trajectory_progress",
    "wrap_degrees",
]
