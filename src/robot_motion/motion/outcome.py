"""Define a minimal dataclass to represent the outcome of a motion call."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from robot_motion.errors import MotionError, MotionErrorKind

OutputT = TypeVar("OutputT")
"""Type variable representing output data associated with an outcome."""


@dataclass(frozen=True)
class Outcome(Iterable, Generic[OutputT]):
    """An outcome (and optional output value) from a motion call."""

    success: bool
    message: str
    error: MotionErrorKind | None = None
    """Classification of the failure (None if the call succeeded)."""

    output: OutputT | None = None
    """Optional output value resulting from the call (e.g., waypoints reached along a path)."""

    def __iter__(self) -> Iterator:
        """Return an iterator over the values of the outcome (skips its output if it's None)."""
        if self.output is not None:
            return iter((self.success, self.message, self.output))

        return iter((self.success, self.message))

    @classmethod
    def succeeded(cls, message: str, output: OutputT | None = None) -> Outcome[OutputT]:
        """Construct a successful outcome."""
        return Outcome(success=True, message=message, output=output)

    @classmethod
    def failed(
        cls,
        error: MotionErrorKind,
        message: str,
        output: OutputT | None = None,
    ) -> Outcome[OutputT]:
        """Construct a failed outcome classified by the given error kind."""
        return Outcome(success=False, message=message, error=error, output=output)

    @classmethod
    def from_error(cls, error: MotionError) -> Outcome:
        """Construct a failed outcome describing the given motion error."""
        return Outcome(success=False, message=str(error), error=error.kind)
