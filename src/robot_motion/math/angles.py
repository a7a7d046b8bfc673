"""Define utility functions for computations involving angles."""

import numpy as np


def normalize_angle(angle_rad: float) -> float:
    """Normalize the given angle (in radians) into the range [-pi, pi]."""
    return float(np.arctan2(np.sin(angle_rad), np.cos(angle_rad)))
