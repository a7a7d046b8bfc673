"""Import definitions relating to general mathematical operations."""

from .angles import normalize_angle as normalize_angle
