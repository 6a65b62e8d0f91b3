"""
Telemetry Session

Orchestrates the tracking engine on a single asyncio event loop with two
independent cadences:

- Slow tick (~1 Hz): ask the celestial provider for fresh Moon data, publish a
  new CelestialSnapshot, and push phase/illumination/rise/set readouts.
- Fast tick (~20 Hz): run the AlignmentTracker against the latest heading and
  the latest snapshot's azimuth, and push alignment and trajectory updates.

Sensor callbacks (on_heading, on_location) write into last-value-wins slots.
A snapshot is built completely before it replaces the previous one, so the
fast tick never reads a mix of two refreshes.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

import deal

from lumina.api.alignment.angles import normalize_azimuth
from lumina.api.alignment.tracker import AlignmentTracker
from lumina.api.astronomy.moon_phase import classify_moon_phase
from lumina.api.astronomy.provider import CelestialProvider
from lumina.api.astronomy.trajectory import TrajectoryProjection, project_trajectory
from lumina.api.config import LuminaSettings
from lumina.api.core.constants import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, NOT_AVAILABLE
from lumina.api.core.enums import LockEffect
from lumina.api.core.exceptions import CelestialProviderError
from lumina.api.core.types import AlignmentReading, CelestialReadout, CelestialSnapshot, Position
from lumina.api.core.utils import format_clock_time, format_degrees, format_distance, format_percent


logger = logging.getLogger(__name__)

__all__ = [
    "NullPresenter",
    "TelemetryPresenter",
    "TelemetrySession",
    "build_readout",
    "build_snapshot",
]


Clock = Callable[[], datetime]


class TelemetryPresenter(Protocol):
    """Receives display updates from a TelemetrySession."""

    def show_alignment(self, reading: AlignmentReading) -> None: ...

    def show_celestial(self, readout: CelestialReadout) -> None: ...

    def show_trajectory(self, projection: TrajectoryProjection) -> None: ...

    def show_lock_effect(self, effect: LockEffect) -> None: ...


class NullPresenter:
    """Presenter that discards every update."""

    def show_alignment(self, reading: AlignmentReading) -> None:
        pass

    def show_celestial(self, readout: CelestialReadout) -> None:
        pass

    def show_trajectory(self, projection: TrajectoryProjection) -> None:
        pass

    def show_lock_effect(self, effect: LockEffect) -> None:
        pass


def _utc_now() -> datetime:
    return datetime.now(UTC)


def build_snapshot(provider: CelestialProvider, when: datetime, position: Position) -> CelestialSnapshot:
    """
    Query the provider once and assemble a snapshot for (when, position).

    Raises:
        CelestialProviderError: If any provider call fails
    """
    moon = provider.position(when, position.latitude, position.longitude)
    illumination = provider.illumination(when)
    times = provider.times(when, position.latitude, position.longitude)

    return CelestialSnapshot(
        timestamp=when,
        position=position,
        azimuth_deg=normalize_azimuth(moon.azimuth_rad),
        altitude_deg=math.degrees(moon.altitude_rad),
        illumination=illumination.fraction,
        phase=illumination.phase,
        distance_km=moon.distance_km,
        rise_time=times.rise,
        set_time=times.set,
    )


def build_readout(snapshot: CelestialSnapshot) -> CelestialReadout:
    """Format the slow-tick display strings for a snapshot."""
    lat, lon = snapshot.position.latitude, snapshot.position.longitude
    zenith = snapshot.zenith_time

    return CelestialReadout(
        phase_label=str(classify_moon_phase(snapshot.phase)),
        illumination_display=format_percent(snapshot.illumination),
        altitude_display=format_degrees(snapshot.altitude_deg),
        distance_display=format_distance(snapshot.distance_km),
        rise_display=format_clock_time(snapshot.rise_time, lat, lon),
        set_display=format_clock_time(snapshot.set_time, lat, lon),
        zenith_display=format_clock_time(zenith, lat, lon) if zenith is not None else NOT_AVAILABLE,
    )


class TelemetrySession:
    """Owns the engine's shared state and drives the slow and fast ticks."""

    def __init__(
        self,
        provider: CelestialProvider,
        presenter: TelemetryPresenter | None = None,
        settings: LuminaSettings | None = None,
        clock: Clock | None = None,
        tracker: AlignmentTracker | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            provider: Source of Moon data
            presenter: Display sink (default: NullPresenter)
            settings: Engine settings (default: LuminaSettings())
            clock: Returns the current time (default: datetime.now(UTC))
            tracker: Lock state machine (default: built from settings)
        """
        self.provider = provider
        self.presenter: TelemetryPresenter = presenter or NullPresenter()
        self.settings = settings or LuminaSettings()
        self.clock: Clock = clock or _utc_now
        self.tracker = tracker or AlignmentTracker(lock_threshold=self.settings.lock_threshold)
        self.tracker.add_listener(self._on_lock_effect)

        self._position: Position | None = None
        self._heading: float | None = None
        self._snapshot: CelestialSnapshot | None = None
        self.canvas_width = DEFAULT_CANVAS_WIDTH
        self.canvas_height = DEFAULT_CANVAS_HEIGHT
        self.refresh_count = 0
        self.error_count = 0
        self.running = False

    @property
    def position(self) -> Position | None:
        return self._position

    @property
    def heading(self) -> float | None:
        return self._heading

    @property
    def snapshot(self) -> CelestialSnapshot | None:
        """Latest published snapshot."""
        return self._snapshot

    # Collaborator callbacks

    def on_heading(self, heading: float | None) -> None:
        """Record a heading sample; missing and NaN samples are ignored."""
        if heading is None or math.isnan(heading):
            return
        self._heading = heading

    @deal.pre(lambda self, latitude, longitude: -90 <= latitude <= 90, message="Latitude must be -90 to +90")  # type: ignore[misc]
    @deal.pre(lambda self, latitude, longitude: -180 <= longitude <= 180, message="Longitude must be -180 to +180")  # type: ignore[misc]
    def on_location(self, latitude: float, longitude: float) -> CelestialSnapshot | None:
        """Record a location fix and refresh immediately."""
        self._position = Position(latitude=latitude, longitude=longitude)
        logger.info(f"Location fix: {self._position}")
        snapshot = self.refresh()
        self.draw_trajectory()
        return snapshot

    @deal.pre(lambda self, width, height: width > 0 and height > 0, message="Canvas size must be positive")  # type: ignore[misc]
    def on_resize(self, width: float, height: float) -> TrajectoryProjection:
        """Record a new canvas size and redraw the trajectory."""
        self.canvas_width = width
        self.canvas_height = height
        return self.draw_trajectory()

    # Ticks

    def refresh(self) -> CelestialSnapshot | None:
        """Slow tick: publish a new snapshot and push the celestial readout.

        Returns:
            The newly published snapshot, or None if no location is known yet
            or the provider failed (the previous snapshot stays published)
        """
        position = self._position
        if position is None:
            logger.debug("Skipping celestial refresh: no location fix yet")
            return None

        now = self.clock()
        try:
            snapshot = build_snapshot(self.provider, now, position)
        except CelestialProviderError as e:
            self.error_count += 1
            logger.error(f"Celestial refresh failed: {e}")
            return None

        # Single reference swap publishes every field at once
        self._snapshot = snapshot
        self.refresh_count += 1
        logger.debug(
            f"Snapshot published: az={snapshot.azimuth_deg:.1f}° alt={snapshot.altitude_deg:.1f}° "
            f"phase={snapshot.phase:.3f}"
        )

        self.presenter.show_celestial(build_readout(snapshot))
        return snapshot

    def tick(self) -> AlignmentReading:
        """Fast tick: run the tracker and push the alignment reading."""
        snapshot = self._snapshot
        azimuth = snapshot.azimuth_deg if snapshot is not None else None
        reading = self.tracker.update(self._heading, azimuth)
        self.presenter.show_alignment(reading)
        return reading

    def draw_trajectory(self) -> TrajectoryProjection:
        """Project the latest snapshot's rise/set window for the current canvas."""
        snapshot = self._snapshot
        rise = snapshot.rise_time if snapshot is not None else None
        set_ = snapshot.set_time if snapshot is not None else None
        projection = project_trajectory(
            self.canvas_width,
            self.canvas_height,
            rise,
            set_,
            self.clock(),
            top_margin=self.settings.top_margin,
        )
        self.presenter.show_trajectory(projection)
        return projection

    def fast_tick(self) -> AlignmentReading:
        """Alignment tick followed by a trajectory redraw."""
        reading = self.tick()
        self.draw_trajectory()
        return reading

    def _on_lock_effect(self, effect: LockEffect) -> None:
        logger.info(f"Lock {effect}")
        self.presenter.show_lock_effect(effect)

    # Scheduling

    async def _every(self, interval: float, func: Callable[[], object], name: str) -> None:
        """Call func every interval seconds until cancelled."""
        loop = asyncio.get_running_loop()
        next_run = loop.time()
        while True:
            try:
                func()
            except Exception as e:
                self.error_count += 1
                logger.error(f"{name} tick failed: {e}", exc_info=True)

            next_run += interval
            delay = next_run - loop.time()
            if delay < 0:
                # Fell behind; skip missed ticks instead of bursting
                next_run = loop.time()
                delay = 0
            await asyncio.sleep(delay)

    async def run(self, duration: float | None = None) -> None:
        """Run both cadences.

        Args:
            duration: Seconds to run, or None to run until cancelled
        """
        logger.info(
            f"Telemetry session starting (slow={self.settings.slow_interval}s, fast={self.settings.fast_interval}s)"
        )
        self.running = True
        tasks = [
            asyncio.create_task(self._every(self.settings.slow_interval, self.refresh, "slow")),
            asyncio.create_task(self._every(self.settings.fast_interval, self.fast_tick, "fast")),
        ]
        try:
            if duration is None:
                await asyncio.gather(*tasks)
            else:
                await asyncio.sleep(duration)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self.running = False
            logger.info(f"Telemetry session stopped after {self.refresh_count} refreshes")
