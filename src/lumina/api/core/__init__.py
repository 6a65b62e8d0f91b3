"""Core subpackage for shared types, utilities, and exceptions."""

from lumina.api.core.utils import (
    format_clock_time,
    format_degrees,
    format_delta,
    format_distance,
    format_heading,
    format_percent,
    get_local_timezone,
)


__all__ = [
    "format_clock_time",
    "format_degrees",
    "format_delta",
    "format_distance",
    "format_heading",
    "format_percent",
    "get_local_timezone",
]
