"""Import classes and definitions representing 3D coordinate frames, poses, and rotations."""

from .frames import DEFAULT_FRAME as DEFAULT_FRAME
from .frames import ROBOT_FRAME as ROBOT_FRAME
from .frames import TORSO_FRAME as TORSO_FRAME
from .points import Point3D as Point3D
from .poses import XYZ_RPY as XYZ_RPY
from .poses import Pose2D as Pose2D
from .poses import Pose3D as Pose3D
from .poses import PoseStamped as PoseStamped
from .rotations import EulerRPY as EulerRPY
from .rotations import Quaternion as Quaternion
from .transforms import Space as Space
from .transforms import as_transform_rows as as_transform_rows
from .transforms import chain_transform as chain_transform
from .transforms import compose as compose
from .transforms import invert as invert
