"""Unit tests for the EulerRPY and Quaternion classes."""

import numpy as np
import pytest
from hypothesis import given

from robot_motion.spatial import EulerRPY, Quaternion

from .strategies.spatial_strategies import euler_rpys, quaternions


@given(quaternions())
def test_quaternion_is_normalized(q: Quaternion) -> None:
    """Verify that every constructed Quaternion has unit norm."""
    # Act/Assert - Expect that the quaternion's components form a unit vector
    assert np.isclose(np.linalg.norm(q.to_array()), 1.0)


@given(quaternions())
def test_quaternion_to_euler_rpy_and_back(q: Quaternion) -> None:
    """Verify that any Quaternion is unchanged after converting to and from Euler angles."""
    # Arrange/Act - Convert the quaternion into Euler RPY angles and then convert back
    result_q = q.to_euler_rpy().to_quaternion()

    # Assert - Expect that the resulting quaternion represents the same rotation
    assert q.approx_equal(result_q, atol=1e-06)


@given(quaternions())
def test_quaternion_to_homogeneous_matrix_and_back(q: Quaternion) -> None:
    """Verify that any Quaternion is unchanged after converting to and from a rotation matrix."""
    # Arrange/Act - Convert the quaternion into a homogeneous matrix and then convert back
    matrix = q.to_homogeneous_matrix()
    result_q = Quaternion.from_homogeneous_matrix(matrix)

    # Assert - Expect a pure rotation that represents the same orientation
    assert matrix.shape == (4, 4)
    assert np.allclose(matrix[:3, 3], 0.0)
    assert q.approx_equal(result_q, atol=1e-06)


@given(euler_rpys())
def test_euler_rpy_yaw_survives_quaternion_conversion(rpy: EulerRPY) -> None:
    """Verify that a pure yaw rotation keeps its yaw angle through a Quaternion."""
    # Arrange - Keep only the yaw of the generated rotation
    yaw_only = EulerRPY(0.0, 0.0, rpy.yaw_rad)

    # Act - Convert to a quaternion and back into Euler angles
    result = yaw_only.to_quaternion().to_euler_rpy()

    # Assert - Expect the same heading (up to a full turn)
    assert np.isclose(np.cos(result.yaw_rad), np.cos(rpy.yaw_rad), atol=1e-06)
    assert np.isclose(np.sin(result.yaw_rad), np.sin(rpy.yaw_rad), atol=1e-06)


def test_quaternion_rejects_zero_vector() -> None:
    """Verify that a zero-valued quaternion cannot be constructed."""
    with pytest.raises(ValueError):
        Quaternion(0.0, 0.0, 0.0, 0.0)


def test_quaternion_equals_its_negation() -> None:
    """Verify that a quaternion and its negation are considered the same rotation."""
    # Arrange - Construct a quaternion and its negation
    q = Quaternion(0.1, 0.2, 0.3, 0.9)
    negated = Quaternion(-0.1, -0.2, -0.3, -0.9)

    # Act/Assert - Expect that the two are approximately equal
    assert q.approx_equal(negated)
