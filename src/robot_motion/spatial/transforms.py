"""Define pure functions composing, inverting, and re-expressing homogeneous transforms."""

from __future__ import annotations

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from robot_motion.spatial.poses import Pose2D, Pose3D


class Space(IntEnum):
    """Well-known selectors for the space in which a chain transform is expressed.

    Selectors are forwarded to the motion backend unchanged; the backend decides which
    integers it supports, so values outside this enumeration may still be meaningful.
    """

    TORSO = 0
    """Frame attached to the robot's torso."""

    WORLD = 1
    """Fixed global frame (see `DEFAULT_FRAME`)."""

    ROBOT = 2
    """Frame on the ground below the torso, with the x-axis facing forward."""


def compose(pose: Pose2D, delta: Pose2D) -> Pose2D:
    """Compose a planar pose with a relative displacement expressed in that pose's frame.

    :param pose: Starting pose, expressed in some reference frame
    :param delta: Displacement (x, y, yaw) relative to the starting pose
    :return: Resulting pose, expressed in the reference frame of the starting pose
    """
    matrix = pose.to_homogeneous_matrix() @ delta.to_homogeneous_matrix()
    return Pose2D.from_homogeneous_matrix(matrix, ref_frame=pose.ref_frame)


def invert(transform: NDArray[np.float64]) -> NDArray[np.float64]:
    """Invert a rigid homogeneous transform (3x3 planar or 4x4 spatial) in closed form.

    For T = [R t; 0 1], the inverse is [R^T -R^T t; 0 1].

    :param transform: Homogeneous transformation matrix to be inverted
    :return: Inverse transformation matrix with the same shape
    :raises ValueError: If the matrix is not a 3x3 or 4x4 homogeneous transform
    """
    matrix = np.asarray(transform, dtype=np.float64)
    if matrix.shape not in {(3, 3), (4, 4)}:
        raise ValueError(f"Expected a 3x3 or 4x4 homogeneous matrix, got shape {matrix.shape}")

    n = matrix.shape[0] - 1  # Dimension of the rotation block
    rotation_t = matrix[:n, :n].T

    result = np.eye(n + 1)
    result[:n, :n] = rotation_t
    result[:n, n] = -rotation_t @ matrix[:n, n]
    return result


def chain_transform(chain_pose: Pose3D, space_origin: Pose3D) -> NDArray[np.float64]:
    """Express the pose of a chain's end-effector relative to the origin of a requested space.

    Both poses must be expressed in a common reference frame (e.g., the global frame).

    :param chain_pose: Pose of the chain's end-effector in the common frame
    :param space_origin: Pose of the requested space's origin in the common frame
    :return: 4x4 homogeneous matrix of the end-effector pose within the requested space
    :raises ValueError: If the two poses are expressed in different reference frames
    """
    if chain_pose.ref_frame != space_origin.ref_frame:
        raise ValueError(
            f"Cannot relate a chain pose in frame '{chain_pose.ref_frame}' "
            f"to a space origin in frame '{space_origin.ref_frame}'.",
        )

    return invert(space_origin.to_homogeneous_matrix()) @ chain_pose.to_homogeneous_matrix()


def as_transform_rows(matrix: NDArray[np.float64]) -> list[list[float]]:
    """Convert a 4x4 homogeneous matrix into nested lists of floats for callers.

    :raises ValueError: If the matrix is not 4x4 or contains non-finite values
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 homogeneous matrix, got shape {matrix.shape}")
    if not np.all(np.isfinite(matrix)):
        raise ValueError("Homogeneous matrix contains non-finite values.")

    return [[float(value) for value in row] for row in matrix]
