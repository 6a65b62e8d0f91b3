"""
Type definitions for the Lumina tracking engine.

This module contains the value objects passed between the engine's
components. All of them are immutable: shared state is updated by replacing
a whole object, never by editing its fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple

from lumina.api.core.enums import LockEffect, LockState, TurnDirection


__all__ = [
    "AlignmentReading",
    "CelestialReadout",
    "CelestialSnapshot",
    "HeadingSample",
    "Position",
    "TrajectoryPoint",
]


HeadingSample = float
"""Degrees in [0, 360), clockwise from true north."""


@dataclass(frozen=True)
class Position:
    """
    Observer position on Earth.

    Attributes:
        latitude: Degrees north (negative for south)
        longitude: Degrees east (negative for west)
    """

    latitude: float
    longitude: float

    def __str__(self) -> str:
        lat_dir = "N" if self.latitude >= 0 else "S"
        lon_dir = "E" if self.longitude >= 0 else "W"
        return f"{abs(self.latitude):.4f}°{lat_dir}, {abs(self.longitude):.4f}°{lon_dir}"


@dataclass(frozen=True)
class CelestialSnapshot:
    """
    Moon data computed for a single (timestamp, position) pair.

    A snapshot is built completely before it is published and is never
    modified afterwards, so a reader always sees fields from the same tick.

    Attributes:
        timestamp: Time the data was computed for
        position: Observer position the data was computed for
        azimuth_deg: Azimuth in degrees from north, [0, 360)
        altitude_deg: Altitude above the horizon, [-90, 90]
        illumination: Lit fraction of the disc, [0, 1]
        phase: Position in the lunar cycle, [0, 1) (0 = new, 0.5 = full)
        distance_km: Earth-Moon distance in kilometers
        rise_time: Moonrise within the lookup window, if any
        set_time: Moonset within the lookup window, if any
    """

    timestamp: datetime
    position: Position
    azimuth_deg: float
    altitude_deg: float
    illumination: float
    phase: float
    distance_km: float
    rise_time: datetime | None = None
    set_time: datetime | None = None

    @property
    def zenith_time(self) -> datetime | None:
        """Midpoint of rise and set, or None unless both are known."""
        if self.rise_time is None or self.set_time is None:
            return None
        return self.rise_time + (self.set_time - self.rise_time) / 2


class TrajectoryPoint(NamedTuple):
    """Point in canvas-local coordinates (y grows downward)."""

    x: float
    y: float


@dataclass(frozen=True)
class AlignmentReading:
    """
    Result of one alignment tick, ready for display.

    Attributes:
        heading_display: Rounded heading, e.g. "007°"
        azimuth_display: Rounded target azimuth, e.g. "183°"
        delta_display: Angular distance with one decimal, e.g. "3.0"
        delta: Raw angular distance in degrees (NaN when unknown)
        lock_state: Lock state after this tick
        effect: Effect emitted by this tick, if the state changed
        offset: Signed turn from heading to target (positive = right)
        turn: Which way to turn
        heading: Heading the reading was computed from
        azimuth: Target azimuth the reading was computed from
    """

    heading_display: str
    azimuth_display: str
    delta_display: str
    delta: float
    lock_state: LockState
    effect: LockEffect | None = None
    offset: float = float("nan")
    turn: TurnDirection = TurnDirection.UNKNOWN
    heading: float | None = None
    azimuth: float | None = None

    @property
    def is_locked(self) -> bool:
        return self.lock_state is LockState.LOCKED


@dataclass(frozen=True)
class CelestialReadout:
    """Slow-tick display strings derived from a CelestialSnapshot."""

    phase_label: str
    illumination_display: str
    altitude_display: str
    distance_display: str
    rise_display: str
    set_display: str
    zenith_display: str
