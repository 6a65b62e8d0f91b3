"""Astronomy subpackage: moon phase names, trajectory projection and the celestial provider."""

from lumina.api.astronomy.moon_phase import classify_moon_phase
from lumina.api.astronomy.provider import (
    CelestialProvider,
    MoonIllumination,
    MoonPosition,
    MoonTimes,
    SkyfieldMoonProvider,
)
from lumina.api.astronomy.trajectory import (
    TrajectoryPath,
    TrajectoryProjection,
    project_trajectory,
    render_ascii,
    trajectory_progress,
)


__all__ = [
    "CelestialProvider",
    "MoonIllumination",
    "MoonPosition",
    "MoonTimes",
    "SkyfieldMoonProvider",
    "TrajectoryPath",
    "TrajectoryProjection",
    "classify_moon_phase",
    "project_trajectory",
    "render_ascii",
    "trajectory_progress",
]
