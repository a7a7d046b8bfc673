"""Import classes describing the robot's joints, chains, and shared motors."""

from .chains import Chain as Chain
from .chains import JointCommand as JointCommand
from .chains import JointLimits as JointLimits
from .chains import MotorCoupling as MotorCoupling
from .coupling import DEFAULT_COUPLINGS as DEFAULT_COUPLINGS
from .coupling import deduplicate_commands as deduplicate_commands
from .coupling import resolve_joint_commands as resolve_joint_commands
from .registry import JointRegistry as JointRegistry
