"""Share motion fixtures across all test modules."""

from .fixtures.motion_fixtures import (  # noqa: F401
    recording_backend,
    recording_facade,
    registry,
    simulated_backend,
    simulated_facade,
)
