"""
Terminal Presenter

Renders TelemetrySession updates as a live rich dashboard: the heading and
Moon azimuth readouts, the lock reticle, the Moon data panel and an ASCII
rendering of the rise-to-set arc.
"""

from __future__ import annotations

import logging

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lumina.api.alignment.compass import compass_point, format_turn_instruction
from lumina.api.astronomy.trajectory import TrajectoryProjection, render_ascii
from lumina.api.core.constants import LOCK_THRESHOLD_DEGREES
from lumina.api.core.enums import LockEffect
from lumina.api.core.types import AlignmentReading, CelestialReadout
from lumina.cli.utils.output import readout_table


logger = logging.getLogger(__name__)


class RichPresenter:
    """TelemetryPresenter that draws into a rich Live display."""

    def __init__(
        self,
        console: Console | None = None,
        columns: int = 48,
        rows: int = 8,
        lock_threshold: float = LOCK_THRESHOLD_DEGREES,
    ) -> None:
        self.console = console or Console()
        self.columns = columns
        self.rows = rows
        self.lock_threshold = lock_threshold
        self.live: Live | None = None
        self.alignment: AlignmentReading | None = None
        self.readout: CelestialReadout | None = None
        self.projection: TrajectoryProjection | None = None
        self.effects: list[LockEffect] = []

    def __enter__(self) -> RichPresenter:
        self.live = Live(self.render(), console=self.console, refresh_per_second=20, transient=False)
        self.live.__enter__()
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self.live is not None:
            self.live.__exit__(None, None, None)
            self.live = None

    # TelemetryPresenter

    def show_alignment(self, reading: AlignmentReading) -> None:
        self.alignment = reading
        self._refresh()

    def show_celestial(self, readout: CelestialReadout) -> None:
        self.readout = readout
        self._refresh()

    def show_trajectory(self, projection: TrajectoryProjection) -> None:
        self.projection = projection
        self._refresh()

    def show_lock_effect(self, effect: LockEffect) -> None:
        self.effects.append(effect)
        logger.debug(f"Presenting lock effect {effect}")
        if effect is LockEffect.ENGAGE:
            # Terminal bell stands in for the haptic pulse
            self.console.bell()

    # Rendering

    def _alignment_panel(self) -> Panel:
        reading = self.alignment
        if reading is None:
            return Panel(Text("Waiting for sensors...", style="dim"), title="Alignment")

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Heading", f"{reading.heading_display} {compass_point(reading.heading)}")
        table.add_row("Moon azimuth", f"{reading.azimuth_display} {compass_point(reading.azimuth)}")
        table.add_row("Delta", f"{reading.delta_display}°")
        table.add_row("Guide", format_turn_instruction(reading.heading, reading.azimuth, self.lock_threshold))

        locked = reading.is_locked
        title = "[bold green]◎ TARGET LOCKED[/bold green]" if locked else "Alignment"
        border = "green" if locked else "blue"
        return Panel(table, title=title, border_style=border)

    def _trajectory_panel(self) -> Panel:
        if self.projection is None:
            return Panel(Text(""), title="Trajectory")
        art = render_ascii(self.projection, self.columns, self.rows)
        if self.projection.progress is None:
            subtitle = "no rise/set today"
        else:
            subtitle = f"{self.projection.progress:.0%} of the way to moonset"
        return Panel(Text(art, style="cyan"), title="Trajectory", subtitle=subtitle)

    def render(self) -> Group:
        panels: list[Panel] = [self._alignment_panel()]
        if self.readout is not None:
            panels.append(Panel(readout_table(self.readout), title="Moon"))
        panels.append(self._trajectory_panel())
        return Group(*panels)

    def _refresh(self) -> None:
        if self.live is not None:
            self.live.update(self.render())
