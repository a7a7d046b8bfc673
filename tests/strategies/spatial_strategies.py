"""Define strategies for generating 3D spatial data for property-based testing."""

import hypothesis.strategies as st

from robot_motion.spatial import DEFAULT_FRAME, EulerRPY, Point3D, Pose2D, Pose3D, Quaternion

from .common_strategies import angles_rad, finite_floats

frame_names = st.sampled_from([DEFAULT_FRAME, "base_footprint", "torso", "camera"])


@st.composite
def positions(draw: st.DrawFn) -> Point3D:
    """Generate random (x,y,z) points."""
    x = draw(finite_floats())
    y = draw(finite_floats())
    z = draw(finite_floats())
    return Point3D(x, y, z)


@st.composite
def quaternions(draw: st.DrawFn) -> Quaternion:
    """Generate random unit quaternions."""
    x = draw(st.floats(min_value=-10e3, max_value=10e3, allow_infinity=False, allow_nan=False))
    y = draw(st.floats(min_value=-10e3, max_value=10e3, allow_infinity=False, allow_nan=False))
    z = draw(st.floats(min_value=-10e3, max_value=10e3, allow_infinity=False, allow_nan=False))
    return Quaternion(x, y, z, w=1.0)


@st.composite
def euler_rpys(draw: st.DrawFn) -> EulerRPY:
    """Generate random 3D rotations represented as Euler RPY angles."""
    roll_rad = draw(angles_rad())
    pitch_rad = draw(angles_rad())
    yaw_rad = draw(angles_rad())
    return EulerRPY(roll_rad, pitch_rad, yaw_rad)


@st.composite
def poses_3d(draw: st.DrawFn) -> Pose3D:
    """Generate random relative poses in 3D space."""
    position = draw(positions())
    orientation = draw(quaternions())
    ref_frame = draw(frame_names)
    return Pose3D(position, orientation, ref_frame)


@st.composite
def poses_2d(draw: st.DrawFn) -> Pose2D:
    """Generate random relative poses on the 2D plane."""
    x = draw(finite_floats())
    y = draw(finite_floats())
    yaw_rad = draw(angles_rad())
    ref_frame = draw(frame_names)
    return Pose2D(x, y, yaw_rad, ref_frame)
