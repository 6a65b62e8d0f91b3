"""Location subpackage: observer location persistence and geocoding."""

from lumina.api.location.observer import (
    ObserverLocation,
    clear_observer_location,
    geocode_location,
    get_observer_location,
    load_location,
    save_location,
    set_observer_location,
)


__all__ = [
    "ObserverLocation",
    "clear_observer_location",
    "geocode_location",
    "get_observer_location",
    "load_location",
    "save_location",
    "set_observer_location",
]
