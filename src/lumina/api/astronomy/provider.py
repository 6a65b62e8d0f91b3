"""
Celestial Position Provider

The tracking engine treats Moon ephemeris as a black box behind the
CelestialProvider protocol: given a time and an observer position it returns
the Moon's horizontal position, its illumination, and its rise/set times.

SkyfieldMoonProvider implements the protocol with Skyfield and the JPL DE421
ephemeris. Azimuth is reported south-based in radians, the convention the
engine's AngleMath converts from.
"""

from __future__ import annotations

import logging
import math
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol

from lumina.api.core.constants import MOON_TIMES_WINDOW_HOURS
from lumina.api.core.exceptions import CelestialProviderError, EphemerisFileNotFoundError
from lumina.api.core.utils import get_local_timezone


if TYPE_CHECKING:
    from skyfield.api import Loader


logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_EPHEMERIS",
    "CelestialProvider",
    "MoonIllumination",
    "MoonPosition",
    "MoonTimes",
    "SkyfieldMoonProvider",
    "get_skyfield_directory",
]


DEFAULT_EPHEMERIS = "de421.bsp"


class MoonPosition(NamedTuple):
    """Moon position as seen by the observer."""

    azimuth_rad: float  # Radians from south, positive toward west
    altitude_rad: float  # Radians above the horizon
    distance_km: float


class MoonIllumination(NamedTuple):
    """Moon illumination (observer independent)."""

    fraction: float  # Lit fraction of the disc, 0.0 to 1.0
    phase: float  # Position in the lunar cycle, [0, 1): 0 = new, 0.5 = full


class MoonTimes(NamedTuple):
    """Moonrise and moonset within the lookup window."""

    rise: datetime | None = None
    set: datetime | None = None


class CelestialProvider(Protocol):
    """Source of Moon data for a time and place."""

    def position(self, when: datetime, latitude: float, longitude: float) -> MoonPosition: ...

    def illumination(self, when: datetime) -> MoonIllumination: ...

    def times(self, when: datetime, latitude: float, longitude: float) -> MoonTimes: ...


def get_skyfield_directory() -> Path:
    """
    Get the Skyfield cache directory.

    Checks SKYFIELD_DIR environment variable first, then defaults to ~/.skyfield
    """
    env_dir = os.environ.get("SKYFIELD_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return Path.home() / ".skyfield"


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


class SkyfieldMoonProvider:
    """CelestialProvider backed by Skyfield."""

    def __init__(self, ephemeris: str = DEFAULT_EPHEMERIS, directory: Path | None = None) -> None:
        """Initialize the provider; the ephemeris is loaded on first use.

        Args:
            ephemeris: Ephemeris file name (must include the Moon)
            directory: Skyfield cache directory (default: get_skyfield_directory())
        """
        self.ephemeris = ephemeris
        self.directory = directory or get_skyfield_directory()
        self._loader: Loader | None = None
        self._ts: Any = None
        self._eph: Any = None

    def _load(self) -> tuple[Any, Any]:
        """Load the timescale and ephemeris once."""
        if self._eph is not None:
            return self._ts, self._eph

        from skyfield.api import Loader

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._loader = Loader(str(self.directory))
            self._ts = self._loader.timescale()
            self._eph = self._loader(self.ephemeris)
        except Exception as e:
            logger.error(f"Failed to load ephemeris {self.ephemeris} from {self.directory}: {e}")
            raise EphemerisFileNotFoundError(f"Could not load ephemeris {self.ephemeris}: {e}") from e

        logger.info(f"Loaded ephemeris {self.ephemeris} from {self.directory}")
        return self._ts, self._eph

    def _bodies(self) -> tuple[Any, Any, Any, Any]:
        ts, eph = self._load()
        try:
            return ts, eph["earth"], eph["sun"], eph["moon"]
        except KeyError as e:
            raise EphemerisFileNotFoundError(f"Ephemeris {self.ephemeris} does not include {e}") from e

    def position(self, when: datetime, latitude: float, longitude: float) -> MoonPosition:
        from skyfield.api import wgs84

        ts, earth, _sun, moon = self._bodies()
        try:
            t = ts.from_datetime(_as_utc(when))
            observer = earth + wgs84.latlon(latitude, longitude)
            alt, az, distance = observer.at(t).observe(moon).apparent().altaz()
        except Exception as e:
            raise CelestialProviderError(f"Moon position failed: {e}") from e

        return MoonPosition(
            azimuth_rad=math.radians(az.degrees - 180.0),
            altitude_rad=alt.radians,
            distance_km=float(distance.km),
        )

    def illumination(self, when: datetime) -> MoonIllumination:
        from skyfield import almanac

        ts, earth, sun, moon = self._bodies()
        try:
            t = ts.from_datetime(_as_utc(when))
            fraction = float(earth.at(t).observe(moon).apparent().fraction_illuminated(sun))
            phase_deg = float(almanac.moon_phase(self._eph, t).degrees)
        except Exception as e:
            raise CelestialProviderError(f"Moon illumination failed: {e}") from e

        phase = (phase_deg % 360.0) / 360.0
        if phase >= 1.0:
            phase = 0.0
        return MoonIllumination(fraction=fraction, phase=phase)

    def times(self, when: datetime, latitude: float, longitude: float) -> MoonTimes:
        """
        Find moonrise and moonset in the observer's local day containing `when`.

        The day runs from local midnight to the next local midnight in the
        timezone at (latitude, longitude), or UTC when none is found.
        """
        from skyfield import almanac
        from skyfield.api import wgs84

        ts, _earth, _sun, moon = self._bodies()
        # Wall-clock arithmetic: DST days span 23 or 25 hours
        tz = get_local_timezone(latitude, longitude) or UTC
        local_start = _as_utc(when).astimezone(tz).replace(hour=0, minute=0, second=0, microsecond=0)
        day_start = local_start.astimezone(UTC)
        day_end = (local_start + timedelta(hours=MOON_TIMES_WINDOW_HOURS)).astimezone(UTC)

        try:
            f = almanac.risings_and_settings(self._eph, moon, wgs84.latlon(latitude, longitude))
            times, events = almanac.find_discrete(ts.from_datetime(day_start), ts.from_datetime(day_end), f)
        except Exception as e:
            raise CelestialProviderError(f"Moon rise/set search failed: {e}") from e

        rise: datetime | None = None
        set_: datetime | None = None
        for t, is_rising in zip(times, events, strict=True):
            if is_rising and rise is None:
                rise = t.utc_datetime()
            elif not is_rising and set_ is None:
                set_ = t.utc_datetime()

        if rise is None or set_ is None:
            logger.debug(f"Moon does not both rise and set on {local_start:%Y-%m-%d} at ({latitude:.2f}, {longitude:.2f})")
        return MoonTimes(rise=rise, set=set_)
