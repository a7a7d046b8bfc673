"""Define the orientation types used by 3D poses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from pyquaternion import Quaternion as Q
from trimesh.transformations import (
    euler_from_quaternion,
    quaternion_from_euler,
    quaternion_from_matrix,
)

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass(frozen=True)
class EulerRPY:
    """Fixed-axis (sxyz) roll, pitch, and yaw angles in radians."""

    roll_rad: float
    pitch_rad: float
    yaw_rad: float

    def to_tuple(self) -> tuple[float, float, float]:
        return (float(self.roll_rad), float(self.pitch_rad), float(self.yaw_rad))

    def to_quaternion(self) -> Quaternion:
        """Find the unit quaternion describing the same orientation."""
        # trimesh orders quaternion components as (w, x, y, z)
        w, x, y, z = quaternion_from_euler(self.roll_rad, self.pitch_rad, self.yaw_rad, axes="sxyz")
        return Quaternion(float(x), float(y), float(z), float(w))


@dataclass(frozen=True)
class Quaternion:
    """An orientation stored as an (x,y,z,w) quaternion, normalized on construction."""

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        q = Q(float(self.w), float(self.x), float(self.y), float(self.z))
        if not np.isfinite(q.norm) or q.norm == 0:
            raise ValueError(f"Cannot normalize a zero-valued or non-finite quaternion: {self}")

        unit = q.normalised
        object.__setattr__(self, "x", float(unit.x))
        object.__setattr__(self, "y", float(unit.y))
        object.__setattr__(self, "z", float(unit.z))
        object.__setattr__(self, "w", float(unit.w))

    @classmethod
    def identity(cls) -> Quaternion:
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    def to_array(self) -> NDArray[np.float64]:
        """Return the components as an [x,y,z,w] array."""
        return np.array([self.x, self.y, self.z, self.w])

    def to_euler_rpy(self) -> EulerRPY:
        roll, pitch, yaw = euler_from_quaternion([self.w, self.x, self.y, self.z], axes="sxyz")
        return EulerRPY(float(roll), float(pitch), float(yaw))

    @classmethod
    def from_homogeneous_matrix(cls, matrix: NDArray[np.float64]) -> Quaternion:
        """Extract the rotation of a 4x4 homogeneous transform."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Quaternion expects a 4x4 homogeneous matrix, got {matrix.shape}")
        w, x, y, z = quaternion_from_matrix(matrix)
        return Quaternion(float(x), float(y), float(z), float(w))

    def to_homogeneous_matrix(self) -> NDArray[np.float64]:
        """Build the 4x4 homogeneous transform of this rotation (no translation)."""
        return Q(self.w, self.x, self.y, self.z).transformation_matrix

    def approx_equal(self, other: Quaternion, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Compare two orientations, treating q and -q as the same rotation."""
        ours = self.to_array()
        theirs = other.to_array()
        return bool(
            np.allclose(ours, theirs, rtol=rtol, atol=atol)
            or np.allclose(-ours, theirs, rtol=rtol, atol=atol),
        )
