"""
Alignment Tracker

Edge-triggered lock state machine. Every fast tick compares the device
heading with the Moon's azimuth; side effects (haptic pulse, lock indicator)
are requested only when the lock state changes, never while it is steady.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

import deal

from lumina.api.alignment.angles import angular_delta, signed_offset, turn_direction
from lumina.api.core.constants import HALF_TURN_DEGREES, LOCK_HAPTIC_PATTERN_MS, LOCK_THRESHOLD_DEGREES
from lumina.api.core.enums import LockEffect, LockState
from lumina.api.core.types import AlignmentReading
from lumina.api.core.utils import format_delta, format_heading, is_missing


logger = logging.getLogger(__name__)

__all__ = [
    "AlignmentTracker",
    "EffectListener",
]


EffectListener = Callable[[LockEffect], None]


class AlignmentTracker:
    """Lock/unlock state machine driven by heading and target azimuth."""

    @deal.pre(
        lambda self, lock_threshold=LOCK_THRESHOLD_DEGREES, haptic_pattern=LOCK_HAPTIC_PATTERN_MS: (
            0 < lock_threshold <= HALF_TURN_DEGREES
        ),
        message="Lock threshold must be in (0, 180]",
    )
    def __init__(
        self,
        lock_threshold: float = LOCK_THRESHOLD_DEGREES,
        haptic_pattern: tuple[int, ...] = LOCK_HAPTIC_PATTERN_MS,
    ) -> None:
        """Initialize the tracker in the UNLOCKED state.

        Args:
            lock_threshold: Heading must be strictly closer than this to lock
            haptic_pattern: Vibration pattern (ms) requested on ENGAGE
        """
        self.lock_threshold = lock_threshold
        self.haptic_pattern = haptic_pattern
        self.state = LockState.UNLOCKED
        self.transitions = 0
        self._listeners: list[EffectListener] = []

    @property
    def is_locked(self) -> bool:
        return self.state is LockState.LOCKED

    def add_listener(self, listener: EffectListener) -> None:
        """Register a callback invoked once per lock state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EffectListener) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update(self, heading: float | None, azimuth: float | None) -> AlignmentReading:
        """Run one tick.

        Args:
            heading: Device heading in degrees, None before the first sample
            azimuth: Target azimuth in degrees, None before the first snapshot

        Returns:
            Display values for this tick and the effect emitted, if any
        """
        if is_missing(heading) or is_missing(azimuth):
            delta = math.nan
        else:
            delta = angular_delta(heading, azimuth)  # type: ignore[arg-type]

        # NaN compares false, so an unknown delta can only unlock
        aligned = delta < self.lock_threshold

        effect: LockEffect | None = None
        if aligned and self.state is LockState.UNLOCKED:
            self.state = LockState.LOCKED
            effect = LockEffect.ENGAGE
        elif not aligned and self.state is LockState.LOCKED:
            self.state = LockState.UNLOCKED
            effect = LockEffect.DISENGAGE

        if effect is not None:
            self.transitions += 1
            logger.debug(f"Lock {effect}: delta={delta:.1f}° threshold={self.lock_threshold:.1f}°")
            self._emit(effect)

        if math.isnan(delta):
            offset = math.nan
            turn = turn_direction(None, None, self.lock_threshold)
        else:
            offset = signed_offset(heading, azimuth)  # type: ignore[arg-type]
            turn = turn_direction(heading, azimuth, self.lock_threshold)

        return AlignmentReading(
            heading_display=format_heading(heading),
            azimuth_display=format_heading(azimuth),
            delta_display=format_delta(delta),
            delta=delta,
            lock_state=self.state,
            effect=effect,
            offset=offset,
            turn=turn,
            heading=heading,
            azimuth=azimuth,
        )

    def reset(self) -> None:
        """Return to UNLOCKED without emitting an effect."""
        self.state = LockState.UNLOCKED

    def _emit(self, effect: LockEffect) -> None:
        for listener in list(self._listeners):
            try:
                listener(effect)
            except Exception as e:
                logger.error(f"Lock effect listener failed on {effect}: {e}", exc_info=True)
