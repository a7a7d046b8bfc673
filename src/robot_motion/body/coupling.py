"""Resolve conflicting joint commands into a single command consistent with shared motors."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from robot_motion.body.chains import JointCommand, MotorCoupling

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

HIP_YAW_PITCH_COUPLING = MotorCoupling(priority="LHipYawPitch", follower="RHipYawPitch")
"""Both hip yaw-pitch joints are driven by one motor; the left joint's command wins."""

DEFAULT_COUPLINGS: tuple[MotorCoupling, ...] = (HIP_YAW_PITCH_COUPLING,)


def deduplicate_commands(commands: Iterable[JointCommand]) -> tuple[JointCommand, ...]:
    """Collapse repeated commands for the same joint using a last-write-wins policy.

    The last command given for a joint (in input order) supplies its angle and speed, while
    the joint keeps the output position of its first occurrence.
    """
    latest: dict[str, JointCommand] = {}  # Dicts keep first-insertion order on reassignment
    for command in commands:
        latest[command.joint] = command
    return tuple(latest.values())


def resolve_joint_commands(
    commands: Sequence[JointCommand],
    couplings: Iterable[MotorCoupling] = DEFAULT_COUPLINGS,
) -> tuple[JointCommand, ...]:
    """Normalize a requested set of joint commands so that coupled joints never conflict.

    If both joints of a coupled pair are commanded with different angles, the follower takes
    the angle and speed of the priority joint. If only one joint of a pair is commanded, the
    other stays unspecified. The result is deterministic and resolving it again changes nothing.

    :param commands: Ordered sequence of requested joint commands
    :param couplings: Pairs of joints sharing a motor
    :return: Normalized ordered sequence of joint commands
    """
    resolved = list(deduplicate_commands(commands))
    index_of = {command.joint: idx for idx, command in enumerate(resolved)}

    for coupling in couplings:
        priority_idx = index_of.get(coupling.priority)
        follower_idx = index_of.get(coupling.follower)
        if priority_idx is None or follower_idx is None:
            continue

        priority_cmd = resolved[priority_idx]
        follower_cmd = resolved[follower_idx]
        priority_target = (priority_cmd.angle_rad, priority_cmd.speed)
        if (follower_cmd.angle_rad, follower_cmd.speed) != priority_target:
            resolved[follower_idx] = replace(
                follower_cmd,
                angle_rad=priority_cmd.angle_rad,
                speed=priority_cmd.speed,
            )

    return tuple(resolved)
