"""
Kinematics for the lab's scenarios.

Pure functions from parameters and elapsed time to physical state.
"""

from physai.physics.kinematics import (
    MagneticState,
    OpticsState,
    PendulumState,
    PhysicalState,
    ProjectileState,
    Vector2,
    VerticalState,
    trajectory_height,
)

__all__ = [
    "trajectory_height",
    "Vector2",
    "PhysicalState",
    "ProjectileState",
    "VerticalState",
    "PendulumState",
    "OpticsState",
    "MagneticState",
]
