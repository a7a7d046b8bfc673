"""Unit tests for resolving joint commands that conflict on a shared motor."""

from __future__ import annotations

from hypothesis import given

from robot_motion.body import DEFAULT_COUPLINGS, JointCommand, resolve_joint_commands

from .strategies.motion_strategies import joint_command_lists


def test_priority_hip_joint_overrides_follower() -> None:
    """Verify that the left hip yaw-pitch command wins over a conflicting right one."""
    # Arrange - Command both hip joints sharing one motor to different angles
    commands = [
        JointCommand("RHipYawPitch", angle_rad=-0.5, speed=0.2),
        JointCommand("LHipYawPitch", angle_rad=0.3, speed=0.9),
    ]

    # Act - Resolve the conflict
    resolved = resolve_joint_commands(commands)

    # Assert - Expect both joints to move to the left joint's angle at its speed
    assert resolved == (
        JointCommand("RHipYawPitch", angle_rad=0.3, speed=0.9),
        JointCommand("LHipYawPitch", angle_rad=0.3, speed=0.9),
    )


def test_single_coupled_joint_is_left_alone() -> None:
    """Verify that commanding one joint of a coupled pair leaves the other unspecified."""
    # Arrange/Act - Command only the follower joint
    resolved = resolve_joint_commands([JointCommand("RHipYawPitch", angle_rad=-0.2)])

    # Assert - Expect the command unchanged, without adding the priority joint
    assert resolved == (JointCommand("RHipYawPitch", angle_rad=-0.2),)


def test_duplicate_joints_use_last_write() -> None:
    """Verify that repeated commands for one joint resolve to the last one given."""
    # Arrange - Command the head yaw twice, with another joint in between
    commands = [
        JointCommand("HeadYaw", angle_rad=0.1, speed=0.5),
        JointCommand("HeadPitch", angle_rad=0.2),
        JointCommand("HeadYaw", angle_rad=-0.4, speed=0.7),
    ]

    # Act - Resolve the duplicates
    resolved = resolve_joint_commands(commands)

    # Assert - Expect the last value, at the position of the first occurrence
    assert resolved == (
        JointCommand("HeadYaw", angle_rad=-0.4, speed=0.7),
        JointCommand("HeadPitch", angle_rad=0.2),
    )


@given(joint_command_lists())
def test_resolution_is_idempotent(commands: list[JointCommand]) -> None:
    """Verify that resolving an already-resolved set of joint commands changes nothing."""
    # Act - Resolve the commands once, then again
    resolved_once = resolve_joint_commands(commands)
    resolved_twice = resolve_joint_commands(resolved_once)

    # Assert - Expect identical results
    assert resolved_once == resolved_twice


@given(joint_command_lists())
def test_resolution_leaves_no_conflicts(commands: list[JointCommand]) -> None:
    """Verify that resolved commands never contain duplicates or conflicting coupled joints."""
    # Act - Resolve the commands
    resolved = resolve_joint_commands(commands)
    by_joint = {command.joint: command for command in resolved}

    # Assert - Expect unique joints, and coupled joints sharing the priority joint's command
    assert len(by_joint) == len(resolved)
    assert set(by_joint) == {command.joint for command in commands}
    for coupling in DEFAULT_COUPLINGS:
        if coupling.priority in by_joint and coupling.follower in by_joint:
            priority = by_joint[coupling.priority]
            follower = by_joint[coupling.follower]
            assert (follower.angle_rad, follower.speed) == (priority.angle_rad, priority.speed)
