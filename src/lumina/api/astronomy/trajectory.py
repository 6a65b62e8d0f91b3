"""
Trajectory Projection

Projects the Moon's rise-to-set window onto a stylized arc for display.

The arc is a quadratic Bézier curve from the bottom-left corner of the canvas
(moonrise) through a control point near the top center (the visual apex) to
the bottom-right corner (moonset). The marker is placed along the curve at
the fraction of the rise-to-set window that has elapsed.

Everything here is a pure function of canvas size and times; nothing is
cached, so callers recompute on every resize and render tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import deal

from lumina.api.core.constants import TRAJECTORY_TOP_MARGIN
from lumina.api.core.types import TrajectoryPoint


__all__ = [
    "TrajectoryPath",
    "TrajectoryProjection",
    "project_trajectory",
    "quadratic_bezier",
    "render_ascii",
    "trajectory_progress",
]


def quadratic_bezier(
    p0: TrajectoryPoint,
    control: TrajectoryPoint,
    p2: TrajectoryPoint,
    t: float,
) -> TrajectoryPoint:
    """
    Evaluate q(t) = (1-t)²·P0 + 2(1-t)t·C + t²·P2.

    Args:
        p0: Start point
        control: Control point
        p2: End point
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return TrajectoryPoint(
        x=a * p0.x + b * control.x + c * p2.x,
        y=a * p0.y + b * control.y + c * p2.y,
    )


@dataclass(frozen=True)
class TrajectoryPath:
    """Rise-to-set arc in canvas coordinates."""

    start: TrajectoryPoint
    control: TrajectoryPoint
    end: TrajectoryPoint

    @classmethod
    def for_canvas(cls, width: float, height: float, top_margin: float = TRAJECTORY_TOP_MARGIN) -> TrajectoryPath:
        """Build the arc spanning a width x height canvas."""
        return cls(
            start=TrajectoryPoint(0.0, height),
            control=TrajectoryPoint(width / 2, top_margin),
            end=TrajectoryPoint(width, height),
        )

    def point_at(self, t: float) -> TrajectoryPoint:
        return quadratic_bezier(self.start, self.control, self.end, t)

    def sample(self, segments: int = 32) -> list[TrajectoryPoint]:
        """Return segments + 1 evenly spaced points from start to end."""
        if segments < 1:
            raise ValueError(f"segments must be at least 1, got {segments}")
        return [self.point_at(i / segments) for i in range(segments + 1)]

    def svg(self) -> str:
        """Closed SVG path description, suitable for a gradient fill."""
        return (
            f"M {self.start.x:g} {self.start.y:g} "
            f"Q {self.control.x:g} {self.control.y:g} {self.end.x:g} {self.end.y:g} Z"
        )


@dataclass(frozen=True)
class TrajectoryProjection:
    """
    Arc plus the optional current-position marker.

    Attributes:
        path: The arc; always present
        progress: Fraction of the rise-to-set window elapsed, None if unknown
        marker: Point on the arc for the current time, None if unknown
    """

    path: TrajectoryPath
    progress: float | None = None
    marker: TrajectoryPoint | None = None

    @property
    def has_marker(self) -> bool:
        return self.marker is not None


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def trajectory_progress(rise: datetime | None, set_: datetime | None, now: datetime) -> float | None:
    """
    Fraction of the rise-to-set window that has elapsed.

    Args:
        rise: Moonrise, None if the Moon does not rise in the lookup window
        set_: Moonset, None if the Moon does not set in the lookup window
        now: Current time (naive datetimes are treated as UTC)

    Returns:
        Progress clamped to [0, 1]; 1.0 for a zero-length window; None when
        rise or set is missing
    """
    if rise is None or set_ is None:
        return None

    rise, set_, now = _as_utc(rise), _as_utc(set_), _as_utc(now)
    duration = set_ - rise
    if not duration:
        # Zero-length window counts as already set
        return 1.0

    progress = (now - rise) / duration
    return min(1.0, max(0.0, progress))


@deal.pre(lambda width, height, rise, set_, now, top_margin=TRAJECTORY_TOP_MARGIN: width > 0, message="Width must be positive")  # type: ignore[misc]
@deal.pre(lambda width, height, rise, set_, now, top_margin=TRAJECTORY_TOP_MARGIN: height > 0, message="Height must be positive")  # type: ignore[misc]
def project_trajectory(
    width: float,
    height: float,
    rise: datetime | None,
    set_: datetime | None,
    now: datetime,
    top_margin: float = TRAJECTORY_TOP_MARGIN,
) -> TrajectoryProjection:
    """
    Project the rise-to-set window onto the arc.

    Args:
        width: Canvas width
        height: Canvas height
        rise: Moonrise time, if known
        set_: Moonset time, if known
        now: Current time
        top_margin: Distance of the arc's control point from the top edge

    Returns:
        Projection with the arc, and a marker when both rise and set are known

    Example:
        >>> from datetime import timedelta
        >>> t0 = datetime(2024, 1, 1, tzinfo=UTC)
        >>> p = project_trajectory(200, 100, t0, t0 + timedelta(hours=2), t0 + timedelta(hours=1))
        >>> p.marker.x
        100.0
    """
    path = TrajectoryPath.for_canvas(width, height, top_margin)
    progress = trajectory_progress(rise, set_, now)
    if progress is None:
        return TrajectoryProjection(path=path)
    return TrajectoryProjection(path=path, progress=progress, marker=path.point_at(progress))


def render_ascii(
    projection: TrajectoryProjection,
    columns: int = 40,
    rows: int = 8,
    arc_char: str = "·",
    marker_char: str = "●",
) -> str:
    """
    Draw the arc and marker on a character grid.

    Args:
        projection: Projection to draw
        columns: Width of the grid in characters
        rows: Height of the grid in characters
        arc_char: Character for the arc
        marker_char: Character for the current position

    Returns:
        Multi-line string, rows lines of columns characters
    """
    if columns < 2 or rows < 2:
        raise ValueError(f"Grid must be at least 2x2, got {columns}x{rows}")

    path = projection.path
    width = path.end.x or 1.0
    height = path.start.y or 1.0

    grid: list[list[str]] = [[" " for _ in range(columns)] for _ in range(rows)]

    def _cell(point: TrajectoryPoint) -> tuple[int, int]:
        col = round(point.x / width * (columns - 1))
        row = round(point.y / height * (rows - 1))
        return min(max(col, 0), columns - 1), min(max(row, 0), rows - 1)

    for point in path.sample(columns * 2):
        col, row = _cell(point)
        grid[row][col] = arc_char

    if projection.marker is not None:
        col, row = _cell(projection.marker)
        grid[row][col] = marker_char

    return "\n".join("".join(row) for row in grid)
