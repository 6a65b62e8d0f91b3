"""Alignment subpackage: angle math, compass labels and the lock state machine."""

from lumina.api.alignment.angles import angular_delta, normalize_azimuth, signed_offset, turn_direction, wrap_degrees
from lumina.api.alignment.compass import compass_point, describe_altitude, format_turn_instruction
from lumina.api.alignment.tracker import AlignmentTracker


__all__ = [
    "AlignmentTracker",
    "angular_delta",
    "compass_point",
    "describe_altitude",
    "format_turn_instruction",
    "normalize_azimuth",
    "signed_offset",
    "turn_direction",
    "wrap_degrees",
]
