"""Define the vocabulary of predefined postures the robot can take."""

PREDEFINED_POSTURES = frozenset(
    {"StandInit", "Stand", "StandZero", "LyingBack", "LyingBelly", "Crouch", "Sit", "SitRelax"},
)
"""Postures accepted by `take_predefined_posture`."""

SAFE_REST_POSTURES = frozenset({"Crouch", "Sit", "SitRelax", "LyingBelly", "LyingBack"})
"""Postures in which motor stiffness may safely be released."""
