"""Define Pydantic models for validating motion configuration and body-variant YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from robot_motion.io.yaml_utils import load_yaml_data
from robot_motion.spatial import Pose3D, PoseStamped

# =============================================================================
# Pose Schemata
# =============================================================================

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""A six-tuple of floats representing an SE(3) pose."""


class Pose3DDictSchema(BaseModel):
    """Schema for specifying a Pose3D as a dictionary."""

    xyz_rpy: XYZ_RPY
    frame: str

    model_config = ConfigDict(extra="forbid")


Pose3DSchema = Union[XYZ_RPY, Pose3DDictSchema]
"""A Pose3D can be specified using a 6-tuple or a dictionary with `xyz_rpy` and `frame`."""


class PathSchema(BaseModel):
    """Schema for a path given as an ordered list of 3D waypoints."""

    default_frame: str = "map"
    waypoints: List[Pose3DSchema] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")


def load_path_waypoints(yaml_path: Path) -> list[PoseStamped]:
    """Load an ordered path of waypoints from the given YAML file.

    Each waypoint is stamped with its index in the path as its sequence number.

    :raises ValueError: If the YAML data doesn't match the expected schema
    """
    yaml_data = load_yaml_data(yaml_path, required_keys={"waypoints"})
    try:
        path = PathSchema.model_validate(yaml_data)
    except ValidationError as error:
        raise ValueError(f"Invalid path in {yaml_path}:\n{error}") from error

    waypoints = []
    for seq, waypoint in enumerate(path.waypoints):
        if isinstance(waypoint, Pose3DDictSchema):
            pose_data: dict | list = waypoint.model_dump()
        else:
            pose_data = list(waypoint)
        pose = Pose3D.from_yaml_data(pose_data, default_frame=path.default_frame)
        waypoints.append(PoseStamped(pose=pose, seq=seq))
    return waypoints


# =============================================================================
# Body Data Schemata
# =============================================================================

CHAIN_NAMES = ("Head", "LArm", "LLeg", "RLeg", "RArm")
"""Names of the kinematic chains every body description must define."""


class MotorCouplingSchema(BaseModel):
    """Schema for two joints driven by a single shared motor."""

    priority: str = Field(description="Joint whose command wins when the pair conflicts")
    follower: str = Field(description="Joint forced to follow the priority joint")

    model_config = ConfigDict(extra="forbid")


class BodyVariantSchema(BaseModel):
    """Schema for a robot body variant and the joints missing from its hardware."""

    excluded_joints: List[str] = Field(default_factory=list)
    description: str = ""

    model_config = ConfigDict(extra="forbid")


class BodyDataSchema(BaseModel):
    """Schema for the static table of chains, couplings, joint limits, and body variants."""

    chains: Dict[str, List[str]]
    couplings: List[MotorCouplingSchema] = Field(default_factory=list)
    joint_limits: Dict[str, Tuple[float, float]] = Field(default_factory=dict)
    variants: Dict[str, BodyVariantSchema] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_consistency(self) -> BodyDataSchema:
        """Validate that every name refers to a known chain or joint, each exactly once."""
        if set(self.chains) != set(CHAIN_NAMES):
            raise ValueError(f"Expected chains {CHAIN_NAMES}, got {tuple(self.chains)}.")

        all_joints: list[str] = [joint for joints in self.chains.values() for joint in joints]
        duplicates = {joint for joint in all_joints if all_joints.count(joint) > 1}
        if duplicates:
            raise ValueError(f"Joints must belong to exactly one chain: {sorted(duplicates)}.")

        known = set(all_joints)
        for coupling in self.couplings:
            unknown = {coupling.priority, coupling.follower} - known
            if unknown:
                raise ValueError(f"Motor coupling names unknown joints: {sorted(unknown)}.")
            if coupling.priority == coupling.follower:
                raise ValueError(f"Joint '{coupling.priority}' cannot be coupled to itself.")

        for joint, (lower, upper) in self.joint_limits.items():
            if joint not in known:
                raise ValueError(f"Joint limits given for unknown joint '{joint}'.")
            if lower > upper:
                raise ValueError(f"Joint '{joint}' has lower limit {lower} above upper {upper}.")

        for variant_name, variant in self.variants.items():
            unknown = set(variant.excluded_joints) - known
            if unknown:
                raise ValueError(f"Variant '{variant_name}' excludes unknown joints {unknown}.")

        return self


def load_body_data(yaml_path: Path) -> BodyDataSchema:
    """Load and validate body-variant data from the given YAML file.

    :raises ValueError: If the YAML data doesn't match the expected schema
    """
    yaml_data = load_yaml_data(yaml_path, required_keys={"chains", "variants"})
    try:
        return BodyDataSchema.model_validate(yaml_data)
    except ValidationError as error:
        raise ValueError(f"Invalid body data in {yaml_path}:\n{error}") from error


# =============================================================================
# Motion Configuration Schema
# =============================================================================


class MotionConfig(BaseModel):
    """Schema for the configuration of a motion facade."""

    body_variant: str = Field(default="H25", description="Active robot body variant")
    default_joint_speed: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Joint speed fraction used when `move_joint` is called without a speed",
    )
    default_posture_speed: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Speed fraction of the posture transition performed by `rest`",
    )
    path_velocity: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Standard velocity (fraction of maximum) used while following a path",
    )
    blocking_timeout_s: Optional[float] = Field(
        default=120.0,
        gt=0.0,
        description="Duration (seconds) after which a blocking call is considered unreachable",
    )
    pose_tolerance: float = Field(
        default=1e-6,
        gt=0.0,
        description="Absolute tolerance when comparing poses reported by the backend",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


def load_motion_config(yaml_path: Path) -> MotionConfig:
    """Load and validate a motion configuration from the given YAML file.

    An empty YAML file yields the default configuration.

    :raises ValueError: If the YAML data doesn't match the expected schema
    """
    yaml_data = load_yaml_data(yaml_path) or {}
    try:
        return MotionConfig.model_validate(yaml_data)
    except ValidationError as error:
        raise ValueError(f"Invalid motion configuration in {yaml_path}:\n{error}") from error
