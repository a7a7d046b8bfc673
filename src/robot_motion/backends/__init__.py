"""Import the interface between the motion facade and its backends, and a simulated backend."""

from .backend import BackendStatus as BackendStatus
from .backend import MotionBackend as MotionBackend
from .backend import MotionTask as MotionTask
from .simulated_backend import SimulatedMotionBackend as SimulatedMotionBackend
