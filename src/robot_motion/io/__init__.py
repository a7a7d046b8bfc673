"""Import classes and definitions used for input/output, configuration, and logging."""

from .logging import configure_logging as configure_logging
from .logging import console as console
from .logging import log_info as log_info
from .pydantic_schemata import BodyDataSchema as BodyDataSchema
from .pydantic_schemata import MotionConfig as MotionConfig
from .pydantic_schemata import load_body_data as load_body_data
from .pydantic_schemata import load_motion_config as load_motion_config
from .pydantic_schemata import load_path_waypoints as load_path_waypoints
from .yaml_utils import export_yaml_data as export_yaml_data
from .yaml_utils import load_yaml_data as load_yaml_data
