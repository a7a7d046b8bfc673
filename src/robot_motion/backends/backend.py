"""Define the interface between the motion facade and the backend that executes motions."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

    from robot_motion.body.chains import Chain
    from robot_motion.motion.requests import MotionRequest
    from robot_motion.spatial import Pose3D, PoseStamped


class BackendStatus(Enum):
    """Final status of a motion command as reported by the backend."""

    SUCCEEDED = "succeeded"
    """The motion physically completed (e.g., the goal was reached)."""

    REJECTED = "rejected"
    """The controller refused the motion (mechanical limit, safety interlock, unsafe posture)."""

    OBSTACLE = "obstacle"
    """The motion terminated early because an obstacle was detected."""

    CANCELLED = "cancelled"
    """The motion was stopped before completion."""

    UNREACHABLE = "unreachable"
    """The connection to the robot was lost before the motion completed."""


class MotionTask:
    """A handle to one submitted motion command, completed exactly once by the backend."""

    def __init__(self, request: MotionRequest) -> None:
        """Initialize a pending task for the given request."""
        self.request = request
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._status: BackendStatus | None = None
        self._message = ""

    @property
    def done(self) -> bool:
        """Check whether the backend has reported a final status for the task."""
        return self._done.is_set()

    @property
    def status(self) -> BackendStatus | None:
        """Retrieve the task's final status (None while the task is pending)."""
        return self._status

    @property
    def message(self) -> str:
        """Retrieve the backend's explanation accompanying the final status."""
        return self._message

    def finish(self, status: BackendStatus, message: str = "") -> bool:
        """Report the final status of the task; only the first report takes effect.

        :return: True if this call completed the task, False if it was already complete
        """
        with self._lock:
            if self._done.is_set():
                return False
            self._status = status
            self._message = message
            self._done.set()
        return True

    def cancel(self, message: str = "Motion was stopped.") -> bool:
        """Complete the task as cancelled, unless it has already completed."""
        return self.finish(BackendStatus.CANCELLED, message)

    def wait(self, timeout_s: float | None = None) -> BackendStatus | None:
        """Block until the task completes or the timeout elapses.

        :param timeout_s: Maximum duration (seconds) to wait (None waits indefinitely)
        :return: Final status of the task, or None if the timeout elapsed first
        """
        if not self._done.wait(timeout=timeout_s):
            return None
        return self._status


class MotionBackend(ABC):
    """An interface for the robot or simulator that physically executes motion commands.

    Implementations may raise `BackendUnreachableError` from any method when the connection to
    the robot is lost, and `BackendRejectedError` from `submit()` to refuse a command outright.
    """

    @property
    @abstractmethod
    def body_variant(self) -> str:
        """Retrieve the name of the robot's body variant (e.g., "H25")."""
        ...

    @abstractmethod
    def submit(self, request: MotionRequest) -> MotionTask:
        """Accept a normalized motion command for execution and return its completion handle.

        Returns once the command is accepted; physical completion is reported through the task.
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Halt all movement and cancel every in-flight task."""
        ...

    @abstractmethod
    def get_global_pose(self) -> PoseStamped:
        """Retrieve the robot's current pose in the global frame."""
        ...

    @abstractmethod
    def set_global_pose(self, pose: Pose3D) -> None:
        """Overwrite the robot's pose estimate in the global frame (e.g., after relocalization)."""
        ...

    @abstractmethod
    def get_transform(self, chain: Chain, space: int) -> np.ndarray:
        """Compute the 4x4 homogeneous transform of a chain's end-effector in the given space.

        :raises UnsupportedSpaceError: If the backend doesn't support the space selector
        """
        ...

    def close(self) -> None:
        """Release any resources held by the backend (default: nothing to release)."""
