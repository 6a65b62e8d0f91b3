"""
Engine Settings

Tuning values for the tracking engine, stored as JSON next to the observer
location and overridable from the environment (or a .env file loaded by the
CLI).

Environment overrides:
    LUMINA_LOCK_THRESHOLD   Lock threshold in degrees
    LUMINA_SLOW_INTERVAL    Celestial refresh interval in seconds
    LUMINA_FAST_INTERVAL    Alignment refresh interval in seconds
    LUMINA_EPHEMERIS        Ephemeris file name
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

import deal

from lumina.api.core.constants import (
    FAST_INTERVAL_SECONDS,
    HALF_TURN_DEGREES,
    LOCK_THRESHOLD_DEGREES,
    SLOW_INTERVAL_SECONDS,
    TRAJECTORY_TOP_MARGIN,
)
from lumina.api.core.exceptions import ConfigurationError, InvalidConfigurationError


logger = logging.getLogger(__name__)


__all__ = [
    "ENV_OVERRIDES",
    "LuminaSettings",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
]


@dataclass(frozen=True)
class LuminaSettings:
    """Tracking engine settings."""

    lock_threshold: float = LOCK_THRESHOLD_DEGREES  # Degrees
    slow_interval: float = SLOW_INTERVAL_SECONDS  # Seconds between celestial refreshes
    fast_interval: float = FAST_INTERVAL_SECONDS  # Seconds between alignment ticks
    top_margin: float = TRAJECTORY_TOP_MARGIN  # Arc apex offset from the top edge
    ephemeris: str = "de421.bsp"

    def validate(self) -> LuminaSettings:
        """
        Check value ranges.

        Returns:
            self, for chaining

        Raises:
            InvalidConfigurationError: If a value is out of range
        """
        if not 0 < self.lock_threshold <= HALF_TURN_DEGREES:
            raise InvalidConfigurationError(f"lock_threshold must be in (0, 180], got {self.lock_threshold}")
        if self.slow_interval <= 0:
            raise InvalidConfigurationError(f"slow_interval must be positive, got {self.slow_interval}")
        if self.fast_interval <= 0:
            raise InvalidConfigurationError(f"fast_interval must be positive, got {self.fast_interval}")
        if self.fast_interval > self.slow_interval:
            raise InvalidConfigurationError(
                f"fast_interval ({self.fast_interval}s) must not exceed slow_interval ({self.slow_interval}s)"
            )
        if self.top_margin < 0:
            raise InvalidConfigurationError(f"top_margin must be non-negative, got {self.top_margin}")
        if not self.ephemeris:
            raise InvalidConfigurationError("ephemeris must be a file name")
        return self


ENV_OVERRIDES: dict[str, str] = {
    "LUMINA_LOCK_THRESHOLD": "lock_threshold",
    "LUMINA_SLOW_INTERVAL": "slow_interval",
    "LUMINA_FAST_INTERVAL": "fast_interval",
    "LUMINA_EPHEMERIS": "ephemeris",
}


def get_config_dir() -> Path:
    """Get the Lumina config directory, creating it if needed."""
    config_dir = Path.home() / ".config" / "lumina"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_settings_path() -> Path:
    """Get path to the settings file."""
    return get_config_dir() / "settings.json"


def _coerce(name: str, raw: object) -> float | str:
    if name == "ephemeris":
        return str(raw)
    try:
        return float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _apply_env(settings: LuminaSettings) -> LuminaSettings:
    overrides: dict[str, float | str] = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw:
            overrides[field_name] = _coerce(field_name, raw)
            logger.debug(f"Setting {field_name} overridden by {env_name}={raw}")
    return replace(settings, **overrides) if overrides else settings


def load_settings(path: Path | None = None, use_env: bool = True) -> LuminaSettings:
    """
    Load settings from JSON, then apply environment overrides.

    A missing file yields the defaults. Unknown keys are ignored with a
    warning.

    Args:
        path: Settings file (default: get_settings_path())
        use_env: Apply LUMINA_* environment overrides

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file cannot be parsed
        InvalidConfigurationError: If a value is out of range
    """
    path = path or get_settings_path()
    settings = LuminaSettings()

    if path.exists():
        try:
            with path.open("r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read settings from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {path} must contain a JSON object")

        known = {f.name for f in fields(LuminaSettings)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown settings in {path}: {', '.join(unknown)}")

        values = {name: _coerce(name, value) for name, value in data.items() if name in known}
        settings = replace(settings, **values)
        logger.debug(f"Loaded settings from {path}")
    else:
        logger.debug(f"No settings file at {path}, using defaults")

    if use_env:
        settings = _apply_env(settings)

    return settings.validate()


@deal.pre(lambda settings, path=None: settings is not None, message="Settings must be provided")  # type: ignore[misc]
def save_settings(settings: LuminaSettings, path: Path | None = None) -> Path:
    """
    Validate and save settings as JSON.

    Returns:
        Path the settings were written to
    """
    settings.validate()
    path = path or get_settings_path()
    with path.open("w") as f:
        json.dump(asdict(settings), f, indent=2)
    logger.info(f"Settings saved to {path}")
    return path
