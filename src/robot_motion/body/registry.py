"""Define a read-only registry mapping joints to chains for each robot body variant."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from robot_motion.body.chains import Chain, JointLimits, MotorCoupling
from robot_motion.errors import InvalidArgumentError, JointUnavailableError
from robot_motion.io.pydantic_schemata import load_body_data

if TYPE_CHECKING:
    from collections.abc import Mapping

    from robot_motion.io.pydantic_schemata import BodyDataSchema

BODY_DATA_PATH = Path(__file__).parent / "data" / "body_variants.yaml"
"""Path to the packaged description of the robot's chains and body variants."""


class JointRegistry:
    """A static table of joints, the chains they belong to, and their availability per variant.

    The registry never mutates after construction, so concurrent reads need no locking.
    """

    def __init__(self, body_data: BodyDataSchema) -> None:
        """Initialize the registry from validated body data."""
        chain_joints: dict[Chain, tuple[str, ...]] = {}
        joint_chains: dict[str, Chain] = {}
        for chain_name, joint_names in body_data.chains.items():
            chain = Chain(chain_name)
            chain_joints[chain] = tuple(joint_names)
            for joint in joint_names:
                joint_chains[joint] = chain

        self._chain_joints: Mapping[Chain, tuple[str, ...]] = MappingProxyType(chain_joints)
        self._joint_chains: Mapping[str, Chain] = MappingProxyType(joint_chains)

        self._excluded: Mapping[str, frozenset[str]] = MappingProxyType(
            {name: frozenset(v.excluded_joints) for name, v in body_data.variants.items()},
        )

        self._limits: Mapping[str, JointLimits] = MappingProxyType(
            {joint: JointLimits(lo, hi) for joint, (lo, hi) in body_data.joint_limits.items()},
        )

        self.couplings: tuple[MotorCoupling, ...] = tuple(
            MotorCoupling(priority=c.priority, follower=c.follower) for c in body_data.couplings
        )
        """Pairs of joints that share a single motor."""

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> JointRegistry:
        """Construct a JointRegistry from the body data in the given YAML file."""
        return JointRegistry(load_body_data(yaml_path))

    @classmethod
    def default(cls) -> JointRegistry:
        """Construct a JointRegistry from the body data packaged with `robot_motion`."""
        return cls.from_yaml(BODY_DATA_PATH)

    @property
    def body_variants(self) -> tuple[str, ...]:
        """Retrieve the names of all known body variants."""
        return tuple(self._excluded)

    @property
    def joint_names(self) -> tuple[str, ...]:
        """Retrieve the names of all joints on any body variant, in chain order."""
        return tuple(self._joint_chains)

    def check_variant(self, body_variant: str) -> None:
        """Verify that the given body variant is known to the registry.

        :raises InvalidArgumentError: If the body variant is unknown
        """
        if body_variant not in self._excluded:
            raise InvalidArgumentError(
                f"Unknown body variant '{body_variant}'; expected one of {self.body_variants}.",
            )

    def is_known(self, joint_name: str) -> bool:
        """Check whether the named joint exists on any body variant."""
        return joint_name in self._joint_chains

    def is_available(self, joint_name: str, body_variant: str) -> bool:
        """Check whether the named joint exists on the given body variant."""
        self.check_variant(body_variant)
        return self.is_known(joint_name) and joint_name not in self._excluded[body_variant]

    def resolve(self, joint_name: str, body_variant: str) -> Chain | None:
        """Find the chain containing the named joint on the given body variant.

        :param joint_name: Name of a joint (e.g., "LShoulderPitch")
        :param body_variant: Name of the active body variant (e.g., "H21")
        :return: Chain containing the joint, or None if the joint is absent on the variant
        """
        if not self.is_available(joint_name, body_variant):
            return None
        return self._joint_chains[joint_name]

    def chain_joints(self, chain: Chain, body_variant: str) -> tuple[str, ...]:
        """Retrieve the available joints of a chain, in canonical order."""
        return tuple(j for j in self._chain_joints[chain] if self.is_available(j, body_variant))

    def expand(self, name: str, body_variant: str) -> tuple[str, ...]:
        """Expand a joint or chain name into the joint names it commands.

        :param name: Name of a single joint or of a whole chain (e.g., "Head")
        :param body_variant: Name of the active body variant
        :return: The joint itself, or every available joint of the named chain
        :raises InvalidArgumentError: If the name matches no joint or chain
        :raises JointUnavailableError: If the joint doesn't exist on the body variant
        """
        chain = Chain.from_name(name)
        if chain is not None:
            return self.chain_joints(chain, body_variant)

        if not self.is_known(name):
            raise InvalidArgumentError(f"Unknown joint or chain name: '{name}'.")
        if not self.is_available(name, body_variant):
            raise JointUnavailableError(name, body_variant)

        return (name,)

    def joint_limits(self, joint_name: str) -> JointLimits | None:
        """Retrieve the mechanical limits of the named joint (None if no limits are recorded)."""
        return self._limits.get(joint_name)
