"""
Track Command

Runs the live tracking dashboard: heading vs. Moon azimuth, lock state, Moon
data and the rise-to-set arc.
"""

from __future__ import annotations

import asyncio
import logging

import typer

from lumina.api.astronomy.provider import SkyfieldMoonProvider
from lumina.api.core.exceptions import LuminaError
from lumina.api.sensors import SweepHeadingSource
from lumina.api.session import TelemetrySession
from lumina.cli.presenter import RichPresenter
from lumina.cli.utils.output import console, print_error, print_info
from lumina.cli.utils.state import ensure_position, ensure_settings


logger = logging.getLogger(__name__)


async def _feed_heading(session: TelemetrySession, source: SweepHeadingSource, interval: float) -> None:
    """Push synthetic heading samples into the session until cancelled."""
    loop = asyncio.get_running_loop()
    started = loop.time()
    while True:
        session.on_heading(source.heading_at(loop.time() - started))
        await asyncio.sleep(interval)


async def run_tracking(
    session: TelemetrySession,
    source: SweepHeadingSource,
    latitude: float,
    longitude: float,
    duration: float | None,
) -> None:
    """Seed the session with a location fix and run it alongside the heading feed."""
    session.on_heading(source.heading_at(0.0))
    session.on_location(latitude, longitude)

    feeder = asyncio.create_task(_feed_heading(session, source, session.settings.fast_interval))
    try:
        await session.run(duration)
    finally:
        feeder.cancel()
        await asyncio.gather(feeder, return_exceptions=True)


def track(
    latitude: float | None = typer.Option(None, "--lat", help="Latitude in degrees (North is positive)"),
    longitude: float | None = typer.Option(None, "--lon", help="Longitude in degrees (East is positive)"),
    heading: float = typer.Option(0.0, "--heading", help="Starting device heading in degrees"),
    sweep: float = typer.Option(
        10.0, "--sweep", help="Simulated turn rate in degrees/second (0 holds the heading steady)"
    ),
    duration: float | None = typer.Option(None, "--duration", "-d", help="Stop after this many seconds"),
) -> None:
    """
    Track the Moon with a live dashboard.

    Without a compass sensor the heading is simulated: it starts at --heading
    and turns at --sweep degrees per second, so the lock engages each time
    the simulated device sweeps past the Moon.

    Example:
        lumina track --lat 40.7128 --lon -74.0060
        lumina track --heading 120 --sweep 0 --duration 10
    """
    position = ensure_position(latitude, longitude)
    settings = ensure_settings()

    provider = SkyfieldMoonProvider(ephemeris=settings.ephemeris)
    presenter = RichPresenter(console=console, lock_threshold=settings.lock_threshold)
    session = TelemetrySession(provider, presenter=presenter, settings=settings)
    source = SweepHeadingSource(start=heading, degrees_per_second=sweep)

    print_info(f"Tracking the Moon from {position} (Ctrl+C to stop)")
    try:
        with presenter:
            asyncio.run(run_tracking(session, source, position.latitude, position.longitude, duration))
    except KeyboardInterrupt:
        print_info("Tracking stopped")
    except LuminaError as e:
        print_error(f"Tracking failed: {e}")
        raise typer.Exit(code=1) from e

    if session.snapshot is None:
        print_error("No Moon data could be computed (see --verbose for details)")
        raise typer.Exit(code=1)
