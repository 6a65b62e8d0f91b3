"""
Moon Phase Names

Maps the provider's continuous phase value to one of eight phase names.
"""

from __future__ import annotations

from lumina.api.core.enums import MoonPhase


__all__ = [
    "classify_moon_phase",
]


def classify_moon_phase(phase: float) -> MoonPhase:
    """
    Name the phase for a position in the lunar cycle.

    The quarter phases are matched by exact equality against the value the
    provider returned, so a phase of 0.2500000001 is Waxing Gibbous, not First
    Quarter. The value must not be re-derived or rounded before classifying.

    Args:
        phase: Position in the lunar cycle, [0, 1) (0 = new, 0.5 = full)

    Returns:
        MoonPhase for the value; NaN falls through to Waning Crescent

    Examples:
        >>> classify_moon_phase(0.5)
        <MoonPhase.FULL_MOON: 'Full Moon'>
        >>> classify_moon_phase(0.1)
        <MoonPhase.WAXING_CRESCENT: 'Waxing Crescent'>
    """
    if phase == 0:
        return MoonPhase.NEW_MOON
    if phase < 0.25:
        return MoonPhase.WAXING_CRESCENT
    if phase == 0.25:
        return MoonPhase.FIRST_QUARTER
    if phase < 0.5:
        return MoonPhase.WAXING_GIBBOUS
    if phase == 0.5:
        return MoonPhase.FULL_MOON
    if phase < 0.75:
        return MoonPhase.WANING_GIBBOUS
    if phase == 0.75:
        return MoonPhase.LAST_QUARTER
    return MoonPhase.WANING_CRESCENT
