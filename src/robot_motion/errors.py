"""Define the taxonomy of errors that can cause a motion call to fail."""

from __future__ import annotations

from enum import Enum


class MotionErrorKind(Enum):
    """Classification of why a motion call did not succeed."""

    INVALID_ARGUMENT = "invalid_argument"
    """Unknown joint/chain name, unsupported space, malformed sequences, or unsafe posture."""

    UNAVAILABLE = "unavailable"
    """The joint does not exist on the active body variant."""

    BACKEND_REJECTED = "backend_rejected"
    """Mechanical limit, safety interlock, or controller-level refusal."""

    BACKEND_UNREACHABLE = "backend_unreachable"
    """The connection or session to the backend was lost during the call."""

    INTERRUPTED = "interrupted"
    """Motion ended early: an obstacle was met or the motion was stopped."""


class MotionError(Exception):
    """Base class of all errors raised while validating or executing a motion call."""

    kind: MotionErrorKind = MotionErrorKind.BACKEND_REJECTED


class InvalidArgumentError(MotionError, ValueError):
    """A motion call received an argument that can never be executed."""

    kind = MotionErrorKind.INVALID_ARGUMENT


class UnsupportedSpaceError(InvalidArgumentError):
    """The backend does not support the requested transform space."""

    def __init__(self, space: int) -> None:
        """Initialize the error with the unsupported space selector."""
        super().__init__(f"Space selector {space} is not supported by the motion backend.")
        self.space = space


class JointUnavailableError(MotionError):
    """A named joint exists, but not on the active body variant."""

    kind = MotionErrorKind.UNAVAILABLE

    def __init__(self, joint_name: str, body_variant: str) -> None:
        """Initialize the error with the unavailable joint and the active body variant."""
        super().__init__(f"Joint '{joint_name}' is not available on body variant '{body_variant}'.")
        self.joint_name = joint_name
        self.body_variant = body_variant


class BackendRejectedError(MotionError):
    """The motion backend refused to execute a command."""

    kind = MotionErrorKind.BACKEND_REJECTED


class BackendUnreachableError(MotionError, ConnectionError):
    """The motion backend could not be reached."""

    kind = MotionErrorKind.BACKEND_UNREACHABLE
