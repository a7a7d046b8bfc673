"""Import classes and definitions used to validate, dispatch, and report motion commands."""

from .dispatcher import CallDispatcher as CallDispatcher
from .facade import MotionFacade as MotionFacade
from .outcome import Outcome as Outcome
from .postures import PREDEFINED_POSTURES as PREDEFINED_POSTURES
from .postures import SAFE_REST_POSTURES as SAFE_REST_POSTURES
from .requests import JointAnglesRequest as JointAnglesRequest
from .requests import LookAtRequest as LookAtRequest
from .requests import MotionRequest as MotionRequest
from .requests import MoveToRequest as MoveToRequest
from .requests import MoveVelocityRequest as MoveVelocityRequest
from .requests import PathRequest as PathRequest
from .requests import PathSegmentRequest as PathSegmentRequest
from .requests import PointArmRequest as PointArmRequest
from .requests import PostureRequest as PostureRequest
from .requests import RestRequest as RestRequest
from .requests import StiffnessRequest as StiffnessRequest
from .requests import StopRequest as StopRequest
