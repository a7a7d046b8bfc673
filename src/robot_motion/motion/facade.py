"""Define the motion facade: a stable, high-level interface for commanding a robot's motion."""

from __future__ import annotations

import logging
import math
import numbers
import threading
from typing import TYPE_CHECKING, Sequence, Union, overload

from robot_motion.body import Chain, JointCommand, JointRegistry, resolve_joint_commands
from robot_motion.errors import InvalidArgumentError, MotionError
from robot_motion.io.pydantic_schemata import MotionConfig
from robot_motion.motion.dispatcher import CallDispatcher
from robot_motion.motion.outcome import Outcome
from robot_motion.motion.postures import PREDEFINED_POSTURES, SAFE_REST_POSTURES
from robot_motion.motion.requests import (
    JointAnglesRequest,
    LookAtRequest,
    MotionRequest,
    MoveToRequest,
    MoveVelocityRequest,
    PathRequest,
    PointArmRequest,
    PostureRequest,
    RestRequest,
    StopRequest,
)
from robot_motion.spatial import (
    ROBOT_FRAME,
    Point3D,
    Pose2D,
    Pose3D,
    PoseStamped,
    as_transform_rows,
)

if TYPE_CHECKING:
    from types import TracebackType

    from robot_motion.backends.backend import MotionBackend

logger = logging.getLogger(__name__)

Waypoint = Union[PoseStamped, Pose3D]
"""A path waypoint; unstamped poses are stamped with their index in the path."""


def _check_finite(**values: float) -> None:
    """Verify that every named value is a finite real number.

    :raises InvalidArgumentError: If any value is non-numeric, infinite, or NaN
    """
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidArgumentError(f"Expected a real number for {name}, got {value!r}.")
        if not math.isfinite(value):
            raise InvalidArgumentError(f"Expected a finite value for {name}, got {value}.")


def _check_speed(speed: float) -> None:
    """Verify that a speed is a fraction of the maximum speed, within [0, 1]."""
    _check_finite(speed=speed)
    if not 0.0 <= speed <= 1.0:
        raise InvalidArgumentError(f"Speed must be a fraction within [0, 1], got {speed}.")


class MotionFacade:
    """A high-level interface turning motion intents into validated backend commands.

    The facade exclusively owns its backend: it validates every call against the joint
    registry, resolves conflicting joint commands, and delegates execution to a dispatcher.
    Command methods return True on success and False otherwise; the classified reason for
    the most recent result is available as `last_outcome`.
    """

    def __init__(
        self,
        backend: MotionBackend,
        config: MotionConfig | None = None,
        registry: JointRegistry | None = None,
    ) -> None:
        """Initialize the facade, taking ownership of the given backend.

        :param backend: Motion backend executing the commands (closed along with the facade)
        :param config: Configuration of the facade (defaults match the backend's body variant)
        :param registry: Registry of joints and body variants (defaults to the packaged data)
        :raises InvalidArgumentError: If the body variant is unknown or differs from the backend's
        """
        self.config = config or MotionConfig(body_variant=backend.body_variant)
        if self.config.body_variant != backend.body_variant:
            raise InvalidArgumentError(
                f"Configured body variant '{self.config.body_variant}' doesn't match the "
                f"backend's body variant '{backend.body_variant}'.",
            )

        self.registry = registry or JointRegistry.default()
        self.registry.check_variant(self.config.body_variant)

        self.backend = backend
        self._backend_lock = threading.Lock()
        self._dispatcher = CallDispatcher(
            backend,
            backend_lock=self._backend_lock,
            timeout_s=self.config.blocking_timeout_s,
        )

        self.last_outcome: Outcome | None = None
        """Outcome of the most recent command (None before the first command)."""

    def __enter__(self) -> MotionFacade:
        """Enter a context in which the facade and its backend are available."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the backend upon leaving the context."""
        self.close()

    @property
    def body_variant(self) -> str:
        """Retrieve the name of the active body variant."""
        return self.config.body_variant

    def close(self) -> None:
        """Release the backend owned by the facade."""
        with self._backend_lock:
            self.backend.close()

    def _record(self, outcome: Outcome) -> bool:
        """Remember the outcome of a command, log any failure, and report its success."""
        self.last_outcome = outcome
        if outcome.success:
            logger.debug(outcome.message)
        else:
            kind = outcome.error.name if outcome.error is not None else "UNKNOWN"
            logger.warning("Motion command failed (%s): %s", kind, outcome.message)
        return outcome.success

    def _execute(self, request: MotionRequest, *, blocking: bool) -> bool:
        """Dispatch a validated request and record its outcome."""
        return self._record(self._dispatcher.execute(request, blocking=blocking))

    def point_arm(self, x: float, y: float, z: float) -> bool:
        """Point the fingers of one arm at a point in the global frame.

        The left arm points at targets on the robot's left side (or straight ahead), and the
        right arm points at targets on its right side.

        :return: True once the arm is pointing at the target, otherwise False
        """
        try:
            _check_finite(x=x, y=y, z=z)
            target = Point3D(float(x), float(y), float(z))
            with self._backend_lock:
                robot_pose = self.backend.get_global_pose().pose
            target_in_robot = robot_pose.inverse(ROBOT_FRAME) @ target
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        chain = Chain.LARM if target_in_robot.y >= 0.0 else Chain.RARM
        return self._execute(PointArmRequest(chain=chain, target=target), blocking=True)

    def move_to(self, x: float, y: float, theta: float) -> bool:
        """Walk to a goal given relative to the robot's current frame.

        :param x: Distance (meters) along the robot's forward axis
        :param y: Distance (meters) along the robot's leftward axis
        :param theta: Rotation (radians) about the robot's vertical axis
        :return: True once the goal is reached, otherwise False
        """
        try:
            _check_finite(x=x, y=y, theta=theta)
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        goal = Pose2D(float(x), float(y), float(theta), ref_frame=ROBOT_FRAME)
        return self._execute(MoveToRequest(goal=goal), blocking=True)

    @overload
    def move_vel(self, x: float, y: float, theta: float) -> bool: ...

    @overload
    def move_vel(self, x: float, theta: float) -> bool: ...

    def move_vel(self, x: float, y_or_theta: float, theta: float | None = None) -> bool:
        """Move the base at normalized velocities, returning as soon as the command is accepted.

        Called with three arguments (x, y, theta), the robot moves holonomically. Called with two
        arguments (x, theta), the robot cannot move sideways.

        :return: True if the backend accepted the command, otherwise False
        """
        if theta is None:
            request = MoveVelocityRequest(x=x, y=0.0, theta=y_or_theta, holonomic=False)
        else:
            request = MoveVelocityRequest(x=x, y=y_or_theta, theta=theta)

        try:
            _check_finite(x=request.x, y=request.y, theta=request.theta)
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        return self._execute(request, blocking=False)

    def move_stop(self) -> bool:
        """Stop all base movement; pending blocking motions return promptly with a failure."""
        return self._execute(StopRequest(), blocking=False)

    def move_joint(
        self,
        joints: str | Sequence[str],
        angles: float | Sequence[float],
        speed: float | None = None,
    ) -> bool:
        """Move joints (or whole chains) to target angles and wait until they arrive.

        A chain name commands every joint of the chain available on the body variant, all to
        the same angle. If the commanded joints include both joints of a shared motor, the
        priority joint's command determines the motion of both.

        :param joints: Joint or chain names (a single name is treated as a one-item sequence)
        :param angles: Target angles (radians), one per name
        :param speed: Fraction of maximum joint speed (default: the configured joint speed)
        :return: True once the joints reach their targets, otherwise False
        """
        joint_names = [joints] if isinstance(joints, str) else list(joints)
        target_angles = [angles] if isinstance(angles, numbers.Real) else list(angles)
        speed = self.config.default_joint_speed if speed is None else speed

        try:
            if len(joint_names) != len(target_angles):
                raise InvalidArgumentError(
                    f"Received {len(joint_names)} joint names but {len(target_angles)} angles.",
                )
            if not joint_names:
                raise InvalidArgumentError("Cannot move an empty set of joints.")
            _check_speed(speed)

            commands = []
            for name, angle in zip(joint_names, target_angles):
                _check_finite(**{name: angle})
                for joint in self.registry.expand(name, self.body_variant):
                    commands.append(JointCommand(joint, float(angle), float(speed)))
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        resolved = resolve_joint_commands(commands, self.registry.couplings)
        return self._execute(JointAnglesRequest(commands=resolved), blocking=True)

    def take_predefined_posture(self, posture: str, speed: float) -> bool:
        """Take a predefined posture (e.g., "Stand" or "Crouch") and wait until it's reached.

        :param posture: Name of a predefined posture
        :param speed: Fraction of the maximum speed of the transition
        :return: True once the posture is reached, otherwise False
        """
        try:
            if posture not in PREDEFINED_POSTURES:
                raise InvalidArgumentError(
                    f"Unknown posture '{posture}'; expected one of {sorted(PREDEFINED_POSTURES)}.",
                )
            _check_speed(speed)
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        return self._execute(PostureRequest(posture=posture, speed=float(speed)), blocking=True)

    def look_at_point(self, x: float, y: float, z: float) -> bool:
        """Turn the head so the main camera looks at a point in the global frame."""
        try:
            _check_finite(x=x, y=y, z=z)
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        target = Point3D(float(x), float(y), float(z))
        return self._execute(LookAtRequest(target=target), blocking=True)

    def rest(self, posture: str = "Crouch") -> bool:
        """Take a safe posture and release motor stiffness once the posture is reached.

        :param posture: Crouch, Sit, SitRelax, LyingBelly, or LyingBack
        :return: True once the robot is resting, otherwise False
        """
        if posture not in SAFE_REST_POSTURES:
            safe = sorted(SAFE_REST_POSTURES)
            message = f"Posture '{posture}' is unsafe for rest; expected one of {safe}."
            return self._record(Outcome.from_error(InvalidArgumentError(message)))

        request = RestRequest(posture=posture, speed=self.config.default_posture_speed)
        return self._execute(request, blocking=True)

    def move_along_path(self, poses: Sequence[Waypoint]) -> bool:
        """Walk through an ordered sequence of waypoints in the global frame.

        The walk ends at the final waypoint, or early if the robot meets an obstacle or is
        stopped. The number of waypoints reached is available as `last_outcome.output`.

        :param poses: Ordered waypoints (stamped or not) along the path
        :return: True once the final waypoint is reached, otherwise False
        """
        waypoints = tuple(
            pose if isinstance(pose, PoseStamped) else PoseStamped(pose=pose, seq=seq)
            for seq, pose in enumerate(poses)
        )

        try:
            if not waypoints:
                raise InvalidArgumentError("Cannot follow a path without waypoints.")
            for waypoint in waypoints:
                if not waypoint.pose.is_finite():
                    raise InvalidArgumentError(f"Path waypoint {waypoint.seq} is not finite.")
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        request = PathRequest(waypoints=waypoints, velocity=self.config.path_velocity)
        return self._execute(request, blocking=True)

    def get_global_pose(self) -> PoseStamped:
        """Retrieve the robot's current pose in the global frame.

        :raises BackendUnreachableError: If the backend cannot be reached
        """
        with self._backend_lock:
            return self.backend.get_global_pose()

    def set_global_pose(self, pose: Pose3D | PoseStamped) -> bool:
        """Overwrite the robot's pose in the global frame (e.g., after relocalizing)."""
        target = pose.pose if isinstance(pose, PoseStamped) else pose
        try:
            if not target.is_finite():
                raise InvalidArgumentError(f"Cannot set a non-finite global pose: {target}.")
            with self._backend_lock:
                self.backend.set_global_pose(target)
        except MotionError as error:
            return self._record(Outcome.from_error(error))

        return self._record(Outcome.succeeded(f"Global pose set to {target}."))

    def get_transform(self, chain_name: str, space: int) -> list[list[float]]:
        """Compute the 4x4 transform of a chain's end-effector in the given space.

        :param chain_name: Name of the chain (e.g., "LArm")
        :param space: Space selector (see `Space` for the well-known values)
        :return: Homogeneous transformation matrix as a list of four rows
        :raises InvalidArgumentError: If the chain is unknown or the space is unsupported
        :raises BackendUnreachableError: If the backend cannot be reached
        """
        chain = Chain.from_name(chain_name)
        if chain is None:
            raise InvalidArgumentError(f"Unknown chain name: '{chain_name}'.")

        try:
            space_id = int(space)
        except (TypeError, ValueError) as error:
            message = f"Space selector must be an integer, got {space!r}."
            raise InvalidArgumentError(message) from error

        with self._backend_lock:
            matrix = self.backend.get_transform(chain, space_id)

        try:
            return as_transform_rows(matrix)
        except ValueError as error:
            raise InvalidArgumentError(f"Backend returned an invalid transform: {error}") from error
