"""Define the kinematic chains of the robot and their joint-command representation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Chain(str, Enum):
    """A named group of mechanically related joints."""

    HEAD = "Head"
    LARM = "LArm"
    LLEG = "LLeg"
    RLEG = "RLeg"
    RARM = "RArm"

    @classmethod
    def from_name(cls, name: str) -> Chain | None:
        """Look up the chain with the given name (e.g., "LArm"), or None if no chain matches."""
        for chain in cls:
            if chain.value == name:
                return chain
        return None


@dataclass(frozen=True)
class JointLimits:
    """Mechanical limits (in radians) of a single joint."""

    lower_rad: float
    upper_rad: float

    def contains(self, angle_rad: float) -> bool:
        """Check whether the given angle lies within the joint's limits."""
        return self.lower_rad <= angle_rad <= self.upper_rad


@dataclass(frozen=True)
class JointCommand:
    """A request to move one joint to a target angle at a fraction of its maximum speed."""

    joint: str
    angle_rad: float
    speed: float = 1.0
    """Fraction of the joint's maximum speed (1 = maximum speed, 0 = no movement)."""


@dataclass(frozen=True)
class MotorCoupling:
    """Two joints that physically share one motor and therefore move together."""

    priority: str
    """Joint whose command overrides the follower's when the two conflict."""

    follower: str
    """Joint forced to take the priority joint's command."""
