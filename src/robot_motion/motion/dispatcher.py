"""Define a dispatcher that issues motion requests to a backend and reports their outcomes."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING

from robot_motion.backends.backend import BackendStatus, MotionBackend, MotionTask
from robot_motion.errors import MotionError, MotionErrorKind
from robot_motion.motion.outcome import Outcome
from robot_motion.motion.requests import (
    MotionRequest,
    PathRequest,
    PostureRequest,
    RestRequest,
    StiffnessRequest,
    StopRequest,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

STATUS_ERROR_KINDS: Mapping[BackendStatus, MotionErrorKind] = {
    BackendStatus.REJECTED: MotionErrorKind.BACKEND_REJECTED,
    BackendStatus.OBSTACLE: MotionErrorKind.INTERRUPTED,
    BackendStatus.CANCELLED: MotionErrorKind.INTERRUPTED,
    BackendStatus.UNREACHABLE: MotionErrorKind.BACKEND_UNREACHABLE,
}
"""Classification of each unsuccessful backend status."""


class CallDispatcher:
    """Translates motion requests into backend calls with blocking or fire-and-forget semantics.

    Submissions to the backend are serialized by a lock shared with the dispatcher's owner,
    while waits for physical completion happen outside of it. A stop request therefore never
    queues behind a pending blocking motion.
    """

    def __init__(
        self,
        backend: MotionBackend,
        *,
        backend_lock: threading.Lock | None = None,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the dispatcher for the given backend.

        :param backend: Backend that physically executes the motions
        :param backend_lock: Lock serializing access to the backend (created if not given)
        :param timeout_s: Duration (seconds) after which a blocking call is considered
            unreachable (None waits indefinitely)
        """
        self.backend = backend
        self.timeout_s = timeout_s
        self._backend_lock = backend_lock or threading.Lock()
        self._stop_count = 0
        """Number of stop requests issued; paths compare it to detect a stop between segments."""

    def execute(self, request: MotionRequest, *, blocking: bool) -> Outcome:
        """Execute a motion request and classify the result.

        :param request: Motion request to be executed
        :param blocking: Whether to wait for the backend to report physical completion
        :return: Outcome of the request (a non-blocking call only reports its acceptance)
        """
        if isinstance(request, StopRequest):
            return self._stop()
        if isinstance(request, PathRequest):
            return self._follow_path(request)
        if isinstance(request, RestRequest):
            return self._rest(request)

        return self._run(request, blocking=blocking)

    def _submit(
        self,
        request: MotionRequest,
        stops_at_start: int | None = None,
    ) -> MotionTask | None:
        """Hand the request to the backend while holding the backend lock.

        :param request: Motion request to be submitted
        :param stops_at_start: Stop count observed when the enclosing motion began (if any)
        :return: Task tracking the request, or None if a stop was issued since `stops_at_start`
        """
        with self._backend_lock:
            if stops_at_start is not None and self._stop_count != stops_at_start:
                return None
            logger.debug("Submitting %s request: %s", request.name, request)
            return self.backend.submit(request)

    def _run(
        self,
        request: MotionRequest,
        *,
        blocking: bool,
        stops_at_start: int | None = None,
    ) -> Outcome:
        """Submit a single request and (if blocking) wait for its completion."""
        try:
            task = self._submit(request, stops_at_start)
        except MotionError as error:
            return Outcome.from_error(error)

        if task is None:
            message = f"{request.name} was not started because the robot was stopped."
            return Outcome.failed(MotionErrorKind.INTERRUPTED, message)

        if not blocking:
            if task.done and task.status is not BackendStatus.SUCCEEDED:
                return self._outcome_from_task(task)
            return Outcome.succeeded(f"{request.name} command was accepted.")

        if task.wait(self.timeout_s) is None:
            # The backend may report completion concurrently; whichever finish comes first wins
            task.finish(
                BackendStatus.UNREACHABLE,
                f"Backend reported no completion within {self.timeout_s} seconds.",
            )

        return self._outcome_from_task(task)

    @staticmethod
    def _outcome_from_task(task: MotionTask) -> Outcome:
        """Translate the final status of a completed task into an outcome."""
        status = task.status
        message = task.message or f"{task.request.name} finished with status '{status}'."
        if status is BackendStatus.SUCCEEDED:
            return Outcome.succeeded(message)

        error_kind = STATUS_ERROR_KINDS.get(status, MotionErrorKind.BACKEND_UNREACHABLE)
        return Outcome.failed(error_kind, message)

    def _stop(self) -> Outcome:
        """Halt the robot and cancel every in-flight motion."""
        try:
            with self._backend_lock:
                self._stop_count += 1
                self.backend.stop()
        except MotionError as error:
            return Outcome.from_error(error)

        return Outcome.succeeded("Stop command was accepted.")

    def _follow_path(self, request: PathRequest) -> Outcome[int]:
        """Walk toward each waypoint in order, stopping at the first unsuccessful segment.

        The output of the outcome is the number of waypoints reached before the path ended.
        """
        with self._backend_lock:
            stops_at_start = self._stop_count

        segments = request.segments()
        reached = 0
        for segment in segments:
            # A stop issued since the path began prevents any further segment from being submitted
            outcome = self._run(segment, blocking=True, stops_at_start=stops_at_start)
            if not outcome.success:
                logger.debug("Path ended at waypoint %d: %s", segment.index, outcome.message)
                return replace(outcome, output=reached)
            reached += 1

        return Outcome.succeeded(f"Reached the final waypoint of {len(segments)}.", output=reached)

    def _rest(self, request: RestRequest) -> Outcome:
        """Take the safe posture, then release stiffness only once the posture is reached."""
        posture_outcome = self._run(PostureRequest(request.posture, request.speed), blocking=True)
        if not posture_outcome.success:
            return posture_outcome

        stiffness_outcome = self._run(StiffnessRequest(enabled=False), blocking=True)
        if not stiffness_outcome.success:
            return stiffness_outcome

        return Outcome.succeeded(f"Resting in posture '{request.posture}' with stiffness released.")
