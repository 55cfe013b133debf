"""
Closed-form kinematics for every scenario.

Each scenario maps (parameters, elapsed time) to a frozen state value:
- Projectile: constant horizontal velocity, uniform vertical deceleration
- Vertical: straight-up launch under gravity
- Pendulum: fixed decorative oscillation
- Optics: static diagram
- Magnetic: breathing field lines around fixed poles

Nothing here clips to the canvas. Positions far off screen are still
returned; deciding not to draw them is the renderer's job.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

from physai.models.scenario import Parameters

FIELD_LINE_COUNT = 12
FIELD_BASE_RADIUS = 100.0
FIELD_RADIUS_SWING = 10.0


@dataclass(frozen=True)
class Vector2:
    """2D vector for position and velocity (metres, m/s)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class ProjectileState:
    """Projectile position and velocity at time t."""

    t: float
    position: Vector2
    velocity: Vector2

    @property
    def speed(self) -> float:
        return self.velocity.magnitude()


@dataclass(frozen=True)
class VerticalState:
    """Height and signed vertical velocity at time t."""

    t: float
    height: float
    velocity: float


@dataclass(frozen=True)
class PendulumState:
    """Angular displacement of the bob from vertical (radians)."""

    t: float
    angular_displacement: float


@dataclass(frozen=True)
class OpticsState:
    """The optics diagram has no time-dependent state."""


@dataclass(frozen=True)
class MagneticState:
    """Per field line radius (px) and stroke opacity."""

    t: float
    radii: tuple[float, ...]
    opacities: tuple[float, ...]


PhysicalState = Union[ProjectileState, VerticalState, PendulumState, OpticsState, MagneticState]


def projectile_state(parameters: Parameters, t: float) -> ProjectileState:
    theta = math.radians(parameters.angle)
    vx = parameters.velocity * math.cos(theta)
    vy0 = parameters.velocity * math.sin(theta)
    g = parameters.gravity

    return ProjectileState(
        t=t,
        position=Vector2(vx * t, vy0 * t - 0.5 * g * t * t),
        velocity=Vector2(vx, vy0 - g * t),
    )


def vertical_state(parameters: Parameters, t: float) -> VerticalState:
    v0 = parameters.velocity
    g = parameters.gravity
    return VerticalState(
        t=t,
        height=v0 * t - 0.5 * g * t * t,
        velocity=v0 - g * t,
    )


def pendulum_state(parameters: Parameters, t: float) -> PendulumState:
    # Decorative: length and gravity do not drive the swing
    return PendulumState(t=t, angular_displacement=0.5 * math.sin(2 * t))


def optics_state(parameters: Parameters, t: float) -> OpticsState:
    return OpticsState()


def magnetic_state(parameters: Parameters, t: float) -> MagneticState:
    phases = [math.sin(t + i) for i in range(FIELD_LINE_COUNT)]
    return MagneticState(
        t=t,
        radii=tuple(FIELD_BASE_RADIUS + FIELD_RADIUS_SWING * p for p in phases),
        opacities=tuple(0.3 + 0.2 * p for p in phases),
    )


StateFunction = Callable[[Parameters, float], PhysicalState]
HeightFunction = Callable[[Parameters, float], float]


def projectile_height(parameters: Parameters, t: float) -> float:
    """Height y(t) of a projectile, for the position-vs-time graph."""
    return projectile_state(parameters, t).position.y


def vertical_height(parameters: Parameters, t: float) -> float:
    return vertical_state(parameters, t).height


def trajectory_height(parameters: Parameters, x: float) -> Optional[float]:
    """
    Height of the projectile path at horizontal distance x.

    Returns None where the path never reaches x (a straight-up launch
    only ever occupies x = 0).
    """
    theta = math.radians(parameters.angle)
    cos_theta = math.cos(theta)
    if cos_theta < 1e-9:
        return 0.0 if x == 0 else None

    v = parameters.velocity
    return x * math.tan(theta) - (parameters.gravity * x * x) / (2 * v * v * cos_theta * cos_theta)
