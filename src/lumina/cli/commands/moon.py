"""
Moon Command

One-shot report of where the Moon is and how far it is through its
rise-to-set window.
"""

from __future__ import annotations

import typer
from rich.panel import Panel
from rich.text import Text

from lumina.api.alignment.compass import compass_point, describe_altitude
from lumina.api.astronomy.provider import SkyfieldMoonProvider
from lumina.api.astronomy.trajectory import render_ascii
from lumina.api.session import TelemetrySession, build_readout
from lumina.cli.utils.output import console, print_error, print_json, readout_table
from lumina.cli.utils.state import ensure_position, ensure_settings


def moon(
    latitude: float | None = typer.Option(None, "--lat", help="Latitude in degrees (North is positive)"),
    longitude: float | None = typer.Option(None, "--lon", help="Longitude in degrees (East is positive)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show the Moon's current position, phase and rise/set times.

    Example:
        lumina moon --lat 51.5074 --lon -0.1278
        lumina moon --json
    """
    position = ensure_position(latitude, longitude)
    settings = ensure_settings()

    session = TelemetrySession(SkyfieldMoonProvider(ephemeris=settings.ephemeris), settings=settings)
    snapshot = session.on_location(position.latitude, position.longitude)
    if snapshot is None:
        print_error("Could not compute Moon data (see --verbose for details)")
        raise typer.Exit(code=1)

    readout = build_readout(snapshot)
    projection = session.draw_trajectory()

    if json_output:
        print_json(
            {
                "timestamp": snapshot.timestamp.isoformat(),
                "latitude": position.latitude,
                "longitude": position.longitude,
                "azimuth_deg": round(snapshot.azimuth_deg, 2),
                "altitude_deg": round(snapshot.altitude_deg, 2),
                "illumination": round(snapshot.illumination, 4),
                "phase": round(snapshot.phase, 4),
                "phase_name": readout.phase_label,
                "distance_km": round(snapshot.distance_km),
                "rise_time": snapshot.rise_time.isoformat() if snapshot.rise_time else None,
                "set_time": snapshot.set_time.isoformat() if snapshot.set_time else None,
                "zenith_time": snapshot.zenith_time.isoformat() if snapshot.zenith_time else None,
                "progress": projection.progress,
            }
        )
        return

    direction = compass_point(snapshot.azimuth_deg, points=16)
    console.print(
        f"[bold]Look {direction}[/bold] at {snapshot.azimuth_deg:.0f}°, "
        f"{describe_altitude(snapshot.altitude_deg)} ({snapshot.altitude_deg:.0f}°)"
    )
    console.print(readout_table(readout, title=f"Moon from {position}"))
    console.print(Panel(Text(render_ascii(projection), style="cyan"), title="Rise → Set"))
