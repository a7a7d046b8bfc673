"""Implement an in-memory motion backend modeling a simulated NAO-class robot."""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable, Tuple

import numpy as np

from robot_motion.backends.backend import BackendStatus, MotionBackend, MotionTask
from robot_motion.body import Chain, JointRegistry
from robot_motion.errors import BackendRejectedError, BackendUnreachableError, UnsupportedSpaceError
from robot_motion.motion.postures import PREDEFINED_POSTURES
from robot_motion.motion.requests import (
    JointAnglesRequest,
    LookAtRequest,
    MotionRequest,
    MoveToRequest,
    MoveVelocityRequest,
    PathSegmentRequest,
    PointArmRequest,
    PostureRequest,
    StiffnessRequest,
)
from robot_motion.spatial import (
    DEFAULT_FRAME,
    ROBOT_FRAME,
    TORSO_FRAME,
    Point3D,
    Pose3D,
    PoseStamped,
    Space,
    chain_transform,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

TORSO_HEIGHT_M = 0.3329
"""Height (meters) of the torso frame above the ground while standing."""

NECK_OFFSET_Z_M = 0.1265
SHOULDER_OFFSET_Y_M = 0.098
SHOULDER_OFFSET_Z_M = 0.100
ARM_LENGTH_M = 0.2187  # Upper arm + lower arm + hand
HIP_OFFSET_Y_M = 0.050
HIP_OFFSET_Z_M = 0.085
LEG_LENGTH_M = 0.2481  # Thigh + tibia + foot height

Plan = Tuple[BackendStatus, str, Callable[[], None]]
"""Final status and message of a motion, plus a callback applying its effect on the state."""


def _no_effect() -> None:
    """Leave the simulated state unchanged."""


def _segment_distance_2d(start: np.ndarray, end: np.ndarray, point: np.ndarray) -> float:
    """Compute the distance between a 2D point and the line segment from start to end."""
    direction = end - start
    length_sq = float(direction @ direction)
    if length_sq == 0.0:
        return float(np.linalg.norm(point - start))

    t = float(np.clip((point - start) @ direction / length_sq, 0.0, 1.0))
    return float(np.linalg.norm(point - (start + t * direction)))


class SimulatedMotionBackend(MotionBackend):
    """A motion backend that executes commands against an in-memory robot model.

    Each accepted motion runs on a worker thread for `motion_duration_s` seconds before its
    effect is applied, which lets callers observe blocking and cancellation behavior.
    """

    def __init__(
        self,
        body_variant: str = "H25",
        *,
        registry: JointRegistry | None = None,
        motion_duration_s: float = 0.05,
        initial_pose: Pose3D | None = None,
    ) -> None:
        """Initialize the simulated robot standing at the given global pose.

        :param body_variant: Name of the simulated robot's body variant
        :param registry: Registry of joints and body variants (defaults to the packaged data)
        :param motion_duration_s: Duration (seconds) taken by each blocking motion
        :param initial_pose: Initial pose of the robot in the global frame (default: origin)
        """
        self._registry = registry or JointRegistry.default()
        self._registry.check_variant(body_variant)
        self._body_variant = body_variant
        self.motion_duration_s = motion_duration_s

        self._lock = threading.RLock()
        self._connected = True
        self._active_tasks: set[MotionTask] = set()

        self._base_pose = initial_pose or Pose3D.identity(DEFAULT_FRAME)
        self._pose_seq = 0
        self._joint_angles: dict[str, float] = {
            joint: 0.0
            for joint in self._registry.joint_names
            if self._registry.is_available(joint, body_variant)
        }
        self._velocity: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self._posture = "Stand"
        self._stiffness_enabled = True
        self._obstacles: list[tuple[Point3D, float]] = []

        self.interlock_engaged = False
        """While engaged, the simulated safety interlock rejects every motion command."""

        self.submitted: list[MotionRequest] = []
        """History of every request accepted for execution, in submission order."""

    @property
    def body_variant(self) -> str:
        """Retrieve the name of the simulated robot's body variant."""
        return self._body_variant

    @property
    def connected(self) -> bool:
        """Check whether the simulated robot is reachable."""
        return self._connected

    @property
    def posture(self) -> str:
        """Retrieve the name of the most recently reached predefined posture."""
        return self._posture

    @property
    def stiffness_enabled(self) -> bool:
        """Check whether the simulated motors are stiff."""
        return self._stiffness_enabled

    @property
    def velocity(self) -> tuple[float, float, float]:
        """Retrieve the commanded (x, y, theta) velocity of the robot base."""
        return self._velocity

    @property
    def joint_angles(self) -> Mapping[str, float]:
        """Retrieve a snapshot of the current joint angles (radians)."""
        with self._lock:
            return dict(self._joint_angles)

    @property
    def active_task_count(self) -> int:
        """Count the motions currently being executed."""
        with self._lock:
            return len(self._active_tasks)

    def add_obstacle(self, center: Point3D, radius_m: float) -> None:
        """Place a circular obstacle (in the global frame) that blocks walking motions."""
        with self._lock:
            self._obstacles.append((center, radius_m))

    def clear_obstacles(self) -> None:
        """Remove every obstacle from the simulated environment."""
        with self._lock:
            self._obstacles.clear()

    def disconnect(self) -> None:
        """Simulate losing the connection to the robot; pending motions fail as unreachable."""
        with self._lock:
            self._connected = False
            for task in self._active_tasks:
                task.finish(BackendStatus.UNREACHABLE, "Connection to the robot was lost.")
            self._active_tasks.clear()
        logger.warning("Simulated robot disconnected.")

    def reconnect(self) -> None:
        """Restore the connection to the simulated robot."""
        with self._lock:
            self._connected = True

    def _check_connected(self) -> None:
        """Verify that the simulated robot is reachable (caller must hold the lock).

        :raises BackendUnreachableError: If the robot is disconnected
        """
        if not self._connected:
            raise BackendUnreachableError("Simulated robot is not connected.")

    def submit(self, request: MotionRequest) -> MotionTask:
        """Accept a motion command and begin executing it on a worker thread.

        :raises BackendUnreachableError: If the robot is disconnected
        :raises BackendRejectedError: If a velocity command exceeds the normalized limits
        """
        with self._lock:
            self._check_connected()

            if isinstance(request, MoveVelocityRequest):
                return self._accept_velocity(request)

            self.submitted.append(request)
            task = MotionTask(request)
            if self.interlock_engaged and not isinstance(request, StiffnessRequest):
                task.finish(BackendStatus.REJECTED, "Safety interlock is engaged.")
                return task

            status, message, apply_effect = self._plan(request)
            self._active_tasks.add(task)

        worker = threading.Thread(
            target=self._execute,
            args=(task, status, message, apply_effect),
            daemon=True,
        )
        worker.start()
        return task

    def _accept_velocity(self, request: MoveVelocityRequest) -> MotionTask:
        """Apply a velocity command immediately; its task completes upon acceptance."""
        velocities = (request.x, request.y, request.theta)
        if any(abs(v) > 1.0 for v in velocities):
            raise BackendRejectedError(f"Velocity {velocities} exceeds normalized limits [-1, 1].")
        if not request.holonomic and request.y != 0.0:
            raise BackendRejectedError("Non-holonomic motion cannot include lateral velocity.")

        self.submitted.append(request)
        task = MotionTask(request)
        if self.interlock_engaged:
            task.finish(BackendStatus.REJECTED, "Safety interlock is engaged.")
        else:
            self._velocity = (float(request.x), float(request.y), float(request.theta))
            task.finish(BackendStatus.SUCCEEDED, f"Moving with velocity {self._velocity}.")
        return task

    def _execute(
        self,
        task: MotionTask,
        status: BackendStatus,
        message: str,
        apply_effect: Callable[[], None],
    ) -> None:
        """Simulate the motion's duration, then apply its effect unless it was interrupted."""
        if status is not BackendStatus.REJECTED and task.wait(self.motion_duration_s) is not None:
            return  # Cancelled or disconnected while in motion

        with self._lock:
            self._active_tasks.discard(task)
            if task.done:
                return
            apply_effect()
            task.finish(status, message)

    def stop(self) -> None:
        """Halt the robot's base and cancel every in-flight motion.

        :raises BackendUnreachableError: If the robot is disconnected
        """
        with self._lock:
            self._check_connected()
            self._velocity = (0.0, 0.0, 0.0)
            for task in self._active_tasks:
                task.cancel()
            self._active_tasks.clear()

    def _plan(self, request: MotionRequest) -> Plan:
        """Decide the outcome of a motion request given the current simulated state."""
        if isinstance(request, StiffnessRequest):
            return self._plan_stiffness(request)
        if not self._stiffness_enabled and not isinstance(request, PostureRequest):
            return (BackendStatus.REJECTED, "Motors are not stiff.", _no_effect)
        if isinstance(request, JointAnglesRequest):
            return self._plan_joint_angles(request)
        if isinstance(request, PostureRequest):
            return self._plan_posture(request)
        if isinstance(request, MoveToRequest):
            target = self._base_pose @ request.goal.to_3d()
            return self._plan_walk(target.to_2d().to_3d())
        if isinstance(request, PathSegmentRequest):
            if request.target.ref_frame != DEFAULT_FRAME:
                message = f"Waypoint {request.index} is not in the global frame '{DEFAULT_FRAME}'."
                return (BackendStatus.REJECTED, message, _no_effect)
            return self._plan_walk(request.target.to_2d().to_3d())
        if isinstance(request, PointArmRequest):
            return self._plan_point_arm(request)
        if isinstance(request, LookAtRequest):
            return self._plan_look_at(request)

        return (BackendStatus.REJECTED, f"Unsupported request: {request.name}.", _no_effect)

    def _plan_stiffness(self, request: StiffnessRequest) -> Plan:
        def apply() -> None:
            self._stiffness_enabled = request.enabled

        state = "enabled" if request.enabled else "released"
        return (BackendStatus.SUCCEEDED, f"Motor stiffness {state}.", apply)

    def _plan_joint_angles(self, request: JointAnglesRequest) -> Plan:
        for command in request.commands:
            if command.joint not in self._joint_angles:
                message = f"Joint '{command.joint}' does not exist on body '{self._body_variant}'."
                return (BackendStatus.REJECTED, message, _no_effect)

            limits = self._registry.joint_limits(command.joint)
            if limits is not None and not limits.contains(command.angle_rad):
                message = (
                    f"Angle {command.angle_rad:.3f} rad exceeds the mechanical limits of "
                    f"'{command.joint}' [{limits.lower_rad}, {limits.upper_rad}]."
                )
                return (BackendStatus.REJECTED, message, _no_effect)

        def apply() -> None:
            for command in request.commands:
                if command.speed > 0.0:  # Zero speed means no movement
                    self._joint_angles[command.joint] = command.angle_rad

        return (BackendStatus.SUCCEEDED, f"Moved joints {request.joint_names}.", apply)

    def _plan_posture(self, request: PostureRequest) -> Plan:
        if request.posture not in PREDEFINED_POSTURES:
            return (BackendStatus.REJECTED, f"Unknown posture '{request.posture}'.", _no_effect)

        def apply() -> None:
            self._posture = request.posture
            self._stiffness_enabled = True
            self._velocity = (0.0, 0.0, 0.0)

        return (BackendStatus.SUCCEEDED, f"Reached posture '{request.posture}'.", apply)

    def _plan_walk(self, target: Pose3D) -> Plan:
        start_xy = self._base_pose.position.to_array()[:2]
        target_xy = target.position.to_array()[:2]
        for center, radius_m in self._obstacles:
            if _segment_distance_2d(start_xy, target_xy, center.to_array()[:2]) < radius_m:
                message = f"Obstacle detected near ({center.x:.2f}, {center.y:.2f})."
                return (BackendStatus.OBSTACLE, message, _no_effect)

        def apply() -> None:
            self._base_pose = target

        return (BackendStatus.SUCCEEDED, f"Reached {target}.", apply)

    def _point_in_robot_frame(self, point: Point3D) -> Point3D:
        """Express a point given in the global frame relative to the robot's ground frame."""
        return self._base_pose.inverse(ROBOT_FRAME) @ point

    def _aim_angles(self, target: Point3D, origin: Point3D) -> tuple[float, float] | None:
        """Compute the (yaw, pitch) aiming from the origin at the target, both in robot frame."""
        dx, dy, dz = (target.to_array() - origin.to_array()).tolist()
        horizontal = float(np.hypot(dx, dy))
        if horizontal == 0.0 and dz == 0.0:
            return None
        return (float(np.arctan2(dy, dx)), float(-np.arctan2(dz, horizontal)))

    def _plan_aim(self, joints: dict[str, float], description: str) -> Plan:
        for joint, angle in joints.items():
            limits = self._registry.joint_limits(joint)
            if limits is not None and not limits.contains(angle):
                message = f"Cannot {description}: '{joint}' would exceed its limits."
                return (BackendStatus.REJECTED, message, _no_effect)

        def apply() -> None:
            self._joint_angles.update(joints)

        return (BackendStatus.SUCCEEDED, f"Finished: {description}.", apply)

    def _plan_point_arm(self, request: PointArmRequest) -> Plan:
        side = 1.0 if request.chain is Chain.LARM else -1.0
        prefix = request.chain.value[0]  # "L" or "R"
        shoulder = Point3D(0.0, side * SHOULDER_OFFSET_Y_M, TORSO_HEIGHT_M + SHOULDER_OFFSET_Z_M)
        angles = self._aim_angles(self._point_in_robot_frame(request.target), shoulder)
        if angles is None:
            return (BackendStatus.REJECTED, "Cannot point at the shoulder itself.", _no_effect)

        yaw, pitch = angles
        joints = {
            f"{prefix}ShoulderPitch": pitch,
            f"{prefix}ShoulderRoll": yaw,
            f"{prefix}ElbowRoll": -side * 0.0349,  # Nearly straight elbow
        }
        return self._plan_aim(joints, f"point {request.chain.value} at {request.target}")

    def _plan_look_at(self, request: LookAtRequest) -> Plan:
        head = Point3D(0.0, 0.0, TORSO_HEIGHT_M + NECK_OFFSET_Z_M)
        angles = self._aim_angles(self._point_in_robot_frame(request.target), head)
        if angles is None:
            return (BackendStatus.REJECTED, "Cannot look at the head itself.", _no_effect)

        yaw, pitch = angles
        joints = {"HeadYaw": yaw, "HeadPitch": pitch}
        return self._plan_aim(joints, f"look at {request.target}")

    def get_global_pose(self) -> PoseStamped:
        """Retrieve the robot's current pose in the global frame."""
        with self._lock:
            self._check_connected()
            self._pose_seq += 1
            return PoseStamped(pose=self._base_pose, stamp_s=time.time(), seq=self._pose_seq)

    def set_global_pose(self, pose: Pose3D) -> None:
        """Overwrite the robot's pose in the global frame.

        :raises BackendRejectedError: If the pose isn't expressed in the global frame
        """
        with self._lock:
            self._check_connected()
            if pose.ref_frame != DEFAULT_FRAME:
                raise BackendRejectedError(
                    f"Global pose must be given in frame '{DEFAULT_FRAME}', "
                    f"not '{pose.ref_frame}'.",
                )
            self._base_pose = pose

    def _chain_pose_in_torso(self, chain: Chain) -> Pose3D:
        """Compute a simplified end-effector pose of the chain relative to the torso."""
        angle = self._joint_angles.get
        if chain is Chain.HEAD:
            neck = Pose3D.from_xyz_rpy(z=NECK_OFFSET_Z_M, ref_frame=TORSO_FRAME)
            return neck @ Pose3D.from_xyz_rpy(
                pitch_rad=angle("HeadPitch", 0.0),
                yaw_rad=angle("HeadYaw", 0.0),
            )

        if chain in (Chain.LARM, Chain.RARM):
            side = 1.0 if chain is Chain.LARM else -1.0
            prefix = chain.value[0]
            shoulder = Pose3D.from_xyz_rpy(
                y=side * SHOULDER_OFFSET_Y_M,
                z=SHOULDER_OFFSET_Z_M,
                pitch_rad=angle(f"{prefix}ShoulderPitch", 0.0),
                yaw_rad=angle(f"{prefix}ShoulderRoll", 0.0),
                ref_frame=TORSO_FRAME,
            )
            return shoulder @ Pose3D.from_xyz_rpy(x=ARM_LENGTH_M)

        side = 1.0 if chain is Chain.LLEG else -1.0
        prefix = chain.value[0]
        hip = Pose3D.from_xyz_rpy(
            y=side * HIP_OFFSET_Y_M,
            z=-HIP_OFFSET_Z_M,
            roll_rad=angle(f"{prefix}HipRoll", 0.0),
            pitch_rad=angle(f"{prefix}HipPitch", 0.0),
            ref_frame=TORSO_FRAME,
        )
        return hip @ Pose3D.from_xyz_rpy(z=-LEG_LENGTH_M)

    def get_transform(self, chain: Chain, space: int) -> np.ndarray:
        """Compute the transform of a chain's end-effector in the torso, world, or robot space.

        :raises UnsupportedSpaceError: If the space is not one of `Space`'s selectors
        """
        try:
            selected = Space(space)
        except ValueError as error:
            raise UnsupportedSpaceError(space) from error

        with self._lock:
            self._check_connected()
            torso_in_robot = Pose3D.from_xyz_rpy(z=TORSO_HEIGHT_M, ref_frame=ROBOT_FRAME)
            torso_in_world = self._base_pose @ torso_in_robot
            chain_in_world = torso_in_world @ self._chain_pose_in_torso(chain)

            space_origins = {
                Space.WORLD: Pose3D.identity(DEFAULT_FRAME),
                Space.ROBOT: self._base_pose,
                Space.TORSO: torso_in_world,
            }
            return chain_transform(chain_in_world, space_origins[selected])

    def close(self) -> None:
        """Cancel any in-flight motions and disconnect from the simulated robot."""
        with self._lock:
            for task in self._active_tasks:
                task.cancel("Backend was closed.")
            self._active_tasks.clear()
            self._connected = False
