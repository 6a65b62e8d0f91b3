"""
Lumina API - Tracking Engine Layer

This package contains the computational core of the Lumina Moon finder,
separated from CLI presentation concerns.

The API is organized into logical subpackages:
- core: Shared types, enums, constants, exceptions and formatting
- alignment: Angle math, compass labels and the lock state machine
- astronomy: Moon phase names, trajectory projection and the celestial provider
- location: Observer location persistence and geocoding

Top-level modules:
- config: Engine settings
- sensors: Orientation event conversion
- session: Slow/fast tick orchestration
"""

# Activate deal contracts for runtime validation
import deal


deal.activate()

__all__ = [
    # Package is organized into subpackages - import directly from them:
    # from lumina.api.alignment import ...
    # from lumina.api.astronomy import ...
    # etc.
]
