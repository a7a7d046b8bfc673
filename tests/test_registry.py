"""Unit tests for the JointRegistry, which maps joints to chains per body variant."""

from __future__ import annotations

from pathlib import Path

import pytest

from robot_motion.body import Chain, JointRegistry
from robot_motion.errors import InvalidArgumentError, JointUnavailableError
from robot_motion.io import export_yaml_data

H21_MISSING_JOINTS = ("LWristYaw", "LHand", "RWristYaw", "RHand")


def test_registry_resolves_joints_to_chains(registry: JointRegistry) -> None:
    """Verify that joints available on a body variant resolve to their chains."""
    # Act/Assert - Expect each joint to resolve to the chain containing it
    assert registry.resolve("HeadYaw", "H25") is Chain.HEAD
    assert registry.resolve("LAnkleRoll", "H25") is Chain.LLEG
    assert registry.resolve("RAnkleRoll", "H25") is Chain.RLEG
    assert registry.resolve("RHand", "H25") is Chain.RARM


def test_every_joint_belongs_to_exactly_one_chain(registry: JointRegistry) -> None:
    """Verify that the chains of the full body partition the set of joints."""
    # Arrange/Act - Collect the joints of every chain on the full-body variant
    chain_joints = [joint for chain in Chain for joint in registry.chain_joints(chain, "H25")]

    # Assert - Expect 26 distinct joints, matching the registry's vocabulary
    assert len(chain_joints) == 26
    assert sorted(chain_joints) == sorted(registry.joint_names)


@pytest.mark.parametrize("joint_name", H21_MISSING_JOINTS)
def test_h21_lacks_wrist_and_hand_joints(registry: JointRegistry, joint_name: str) -> None:
    """Verify that wrist and hand joints are unavailable on the H21 body variant."""
    # Act/Assert - Expect the joint to be known, yet absent on H21
    assert registry.is_known(joint_name)
    assert registry.is_available(joint_name, "H25")
    assert not registry.is_available(joint_name, "H21")
    assert registry.resolve(joint_name, "H21") is None


def test_resolve_unknown_joint_returns_none(registry: JointRegistry) -> None:
    """Verify that an unknown joint name resolves to no chain."""
    assert registry.resolve("LTailWag", "H25") is None
    assert not registry.is_known("LTailWag")


def test_expand_chain_uses_available_joints(registry: JointRegistry) -> None:
    """Verify that a chain name expands into the chain's joints available on the variant."""
    # Act - Expand the left arm on both body variants
    h25_joints = registry.expand("LArm", "H25")
    h21_joints = registry.expand("LArm", "H21")

    # Assert - Expect the wrist and hand to be omitted on H21, preserving canonical order
    assert h25_joints == (
        "LShoulderPitch",
        "LShoulderRoll",
        "LElbowYaw",
        "LElbowRoll",
        "LWristYaw",
        "LHand",
    )
    assert h21_joints == ("LShoulderPitch", "LShoulderRoll", "LElbowYaw", "LElbowRoll")


def test_expand_classifies_bad_names(registry: JointRegistry) -> None:
    """Verify that unknown names and unavailable joints raise different errors."""
    assert registry.expand("HeadPitch", "H21") == ("HeadPitch",)
    with pytest.raises(InvalidArgumentError):
        registry.expand("Tail", "H25")
    with pytest.raises(JointUnavailableError):
        registry.expand("RHand", "H21")


def test_unknown_body_variant_is_rejected(registry: JointRegistry) -> None:
    """Verify that queries about an unknown body variant raise an InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError):
        registry.is_available("HeadYaw", "H99")


def test_joint_limits_are_loaded(registry: JointRegistry) -> None:
    """Verify that joint limits are loaded from the packaged body data."""
    # Act - Retrieve the limits of the left elbow roll joint
    limits = registry.joint_limits("LElbowRoll")

    # Assert - Expect the elbow to bend in only one direction
    assert limits is not None
    assert limits.contains(-1.0)
    assert not limits.contains(0.5)


def test_registry_from_custom_yaml(tmp_path: Path) -> None:
    """Verify that a new body variant can be added purely through data."""
    # Arrange - Export body data with a head-only variant missing every limb joint
    chains = {
        "Head": ["HeadYaw", "HeadPitch"],
        "LArm": ["LShoulderPitch"],
        "LLeg": ["LHipYawPitch"],
        "RLeg": ["RHipYawPitch"],
        "RArm": ["RShoulderPitch"],
    }
    limbs = ["LShoulderPitch", "LHipYawPitch", "RHipYawPitch", "RShoulderPitch"]
    body_data = {
        "chains": chains,
        "couplings": [{"priority": "LHipYawPitch", "follower": "RHipYawPitch"}],
        "variants": {"Full": {}, "HeadOnly": {"excluded_joints": limbs}},
    }
    yaml_path = tmp_path / "body.yaml"
    export_yaml_data(body_data, yaml_path)

    # Act - Load a registry from the exported YAML file
    registry = JointRegistry.from_yaml(yaml_path)

    # Assert - Expect the custom variants and coupling to be available
    assert registry.body_variants == ("Full", "HeadOnly")
    assert registry.chain_joints(Chain.LARM, "HeadOnly") == ()
    assert registry.couplings[0].priority == "LHipYawPitch"


def test_registry_rejects_inconsistent_yaml(tmp_path: Path) -> None:
    """Verify that body data assigning one joint to two chains is rejected."""
    # Arrange - Export body data where "HeadYaw" appears in two chains
    chains = {"Head": ["HeadYaw"], "LArm": ["HeadYaw"], "LLeg": [], "RLeg": [], "RArm": []}
    yaml_path = tmp_path / "body.yaml"
    export_yaml_data({"chains": chains, "variants": {"Full": {}}}, yaml_path)

    # Act/Assert - Expect loading to fail validation
    with pytest.raises(ValueError):
        JointRegistry.from_yaml(yaml_path)
