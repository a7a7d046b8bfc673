"""Define the command envelopes passed from the motion facade to the call dispatcher."""

from __future__ import annotations

from dataclasses import dataclass

from robot_motion.body.chains import Chain, JointCommand
from robot_motion.spatial import Point3D, Pose2D, Pose3D, PoseStamped


@dataclass(frozen=True)
class MotionRequest:
    """Base class of all motion commands; each is created per call and consumed immediately."""

    @property
    def name(self) -> str:
        """Retrieve a short human-readable name of the request type."""
        return type(self).__name__.removesuffix("Request")


@dataclass(frozen=True)
class PointArmRequest(MotionRequest):
    """Point the fingers of an arm at a point given in the global frame."""

    chain: Chain
    target: Point3D


@dataclass(frozen=True)
class MoveToRequest(MotionRequest):
    """Walk to a goal (x, y, theta) given relative to the robot's current frame."""

    goal: Pose2D


@dataclass(frozen=True)
class MoveVelocityRequest(MotionRequest):
    """Move with the given linear (x, y) and angular (theta) velocities."""

    x: float
    y: float
    theta: float
    holonomic: bool = True
    """False for robots that cannot translate sideways (e.g., differential drive)."""


@dataclass(frozen=True)
class StopRequest(MotionRequest):
    """Stop any movement initiated by move_to, move_vel, or move_along_path."""


@dataclass(frozen=True)
class JointAnglesRequest(MotionRequest):
    """Move joints to target angles; commands are already resolved against shared motors."""

    commands: tuple[JointCommand, ...]

    @property
    def joint_names(self) -> tuple[str, ...]:
        """Retrieve the names of the commanded joints, in order."""
        return tuple(command.joint for command in self.commands)


@dataclass(frozen=True)
class PostureRequest(MotionRequest):
    """Take a predefined posture at a fraction of the maximum speed."""

    posture: str
    speed: float


@dataclass(frozen=True)
class LookAtRequest(MotionRequest):
    """Point the robot's main camera at a point given in the global frame."""

    target: Point3D


@dataclass(frozen=True)
class StiffnessRequest(MotionRequest):
    """Enable or release the stiffness of every motor."""

    enabled: bool


@dataclass(frozen=True)
class RestRequest(MotionRequest):
    """Take a safe posture, then release motor stiffness once the posture is reached."""

    posture: str
    speed: float


@dataclass(frozen=True)
class PathSegmentRequest(MotionRequest):
    """Walk toward one waypoint of a path at the given velocity fraction."""

    target: Pose3D
    velocity: float
    index: int = 0
    """Index of the waypoint within its path."""


@dataclass(frozen=True)
class PathRequest(MotionRequest):
    """Walk along an ordered sequence of stamped waypoints given in the global frame."""

    waypoints: tuple[PoseStamped, ...]
    velocity: float

    def segments(self) -> tuple[PathSegmentRequest, ...]:
        """Split the path into one sub-motion per waypoint."""
        return tuple(
            PathSegmentRequest(target=waypoint.pose, velocity=self.velocity, index=idx)
            for idx, waypoint in enumerate(self.waypoints)
        )
