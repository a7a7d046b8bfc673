"""Define names of reference frames shared across the package."""

DEFAULT_FRAME = "map"
"""Global (map) frame used for pose get/set and path waypoints."""

ROBOT_FRAME = "base_footprint"
"""Robot-relative frame attached to the ground below the robot's torso."""

TORSO_FRAME = "torso"
"""Frame attached to the robot's torso."""
