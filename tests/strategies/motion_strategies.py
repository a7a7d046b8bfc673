"""Define strategies for generating joint commands for property-based testing."""

from __future__ import annotations

import hypothesis.strategies as st

from robot_motion.body import JointCommand, JointRegistry

from .common_strategies import angles_rad, speed_fractions

REGISTRY = JointRegistry.default()
"""Joint registry loaded from the packaged body data, shared by every strategy."""


@st.composite
def joint_commands(draw: st.DrawFn, body_variant: str = "H25") -> JointCommand:
    """Generate random commands for joints available on the given body variant."""
    available = [j for j in REGISTRY.joint_names if REGISTRY.is_available(j, body_variant)]
    joint = draw(st.sampled_from(available))
    return JointCommand(joint, angle_rad=draw(angles_rad()), speed=draw(speed_fractions()))


@st.composite
def hip_commands(draw: st.DrawFn) -> JointCommand:
    """Generate random commands for either joint driven by the shared hip yaw-pitch motor."""
    joint = draw(st.sampled_from(["LHipYawPitch", "RHipYawPitch"]))
    return JointCommand(joint, angle_rad=draw(angles_rad()), speed=draw(speed_fractions()))


@st.composite
def joint_command_lists(draw: st.DrawFn, max_size: int = 12) -> list[JointCommand]:
    """Generate random lists of joint commands, often including duplicates and hip joints."""
    commands = st.one_of(joint_commands(), hip_commands())
    return draw(st.lists(commands, min_size=0, max_size=max_size))
