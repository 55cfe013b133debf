"""
Scenario variant table.

Each ScenarioType gets one variant bundling the parameters a user may
adjust for it with its paired state, draw and height functions. Every
per-scenario dispatch (kinematics, frame drawing, the graph) goes
through this table. It is checked for completeness at import, so adding
a ScenarioType without a variant fails loudly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from physai.models.scenario import Parameters, ScenarioType
from physai.physics.kinematics import (
    HeightFunction,
    PhysicalState,
    StateFunction,
    magnetic_state,
    optics_state,
    pendulum_state,
    projectile_height,
    projectile_state,
    vertical_height,
    vertical_state,
)
from physai.rendering.frames import (
    Drawer,
    draw_magnetic,
    draw_optics,
    draw_pendulum,
    draw_projectile,
    draw_vertical,
)


@dataclass(frozen=True)
class SliderRange:
    """Bounds of a parameter slider."""

    name: str
    minimum: float
    maximum: float
    step: float


VELOCITY_SLIDER = SliderRange("velocity", 5.0, 50.0, 0.5)
ANGLE_SLIDER = SliderRange("angle", 0.0, 90.0, 1.0)
GRAVITY_SLIDER = SliderRange("gravity", 1.6, 24.8, 0.1)

_COMMON_SLIDERS = (VELOCITY_SLIDER, GRAVITY_SLIDER)


@dataclass(frozen=True)
class ScenarioVariant:
    """Everything scenario-specific, in one place."""

    scenario_type: ScenarioType
    sliders: tuple[SliderRange, ...]
    state: StateFunction
    draw: Drawer
    # Only scenarios with a closed-form y(t) are plotted
    height: Optional[HeightFunction] = None

    @property
    def has_height_curve(self) -> bool:
        return self.height is not None

    def slider(self, name: str) -> SliderRange | None:
        for slider in self.sliders:
            if slider.name == name:
                return slider
        return None


VARIANTS: dict[ScenarioType, ScenarioVariant] = {
    ScenarioType.PROJECTILE: ScenarioVariant(
        scenario_type=ScenarioType.PROJECTILE,
        sliders=(VELOCITY_SLIDER, ANGLE_SLIDER, GRAVITY_SLIDER),
        state=projectile_state,
        draw=draw_projectile,
        height=projectile_height,
    ),
    ScenarioType.VERTICAL: ScenarioVariant(
        scenario_type=ScenarioType.VERTICAL,
        sliders=_COMMON_SLIDERS,
        state=vertical_state,
        draw=draw_vertical,
        height=vertical_height,
    ),
    ScenarioType.PENDULUM: ScenarioVariant(
        scenario_type=ScenarioType.PENDULUM,
        sliders=_COMMON_SLIDERS,
        state=pendulum_state,
        draw=draw_pendulum,
    ),
    ScenarioType.OPTICS: ScenarioVariant(
        scenario_type=ScenarioType.OPTICS,
        sliders=_COMMON_SLIDERS,
        state=optics_state,
        draw=draw_optics,
    ),
    ScenarioType.MAGNETIC: ScenarioVariant(
        scenario_type=ScenarioType.MAGNETIC,
        sliders=_COMMON_SLIDERS,
        state=magnetic_state,
        draw=draw_magnetic,
    ),
}

_missing = set(ScenarioType) - set(VARIANTS)
if _missing:
    raise RuntimeError(f"No scenario variant for: {sorted(m.value for m in _missing)}")


def variant_for(scenario_type: ScenarioType) -> ScenarioVariant:
    return VARIANTS[scenario_type]


def state(scenario_type: ScenarioType, parameters: Parameters, t: float) -> PhysicalState:
    """
    Physical state of a scenario at elapsed time t.

    Args:
        scenario_type: Which scenario to evaluate
        parameters: Current parameters (read, never modified)
        t: Elapsed simulation time in seconds

    Returns:
        The scenario's state value
    """
    return VARIANTS[scenario_type].state(parameters, t)


def height_at(scenario_type: ScenarioType, parameters: Parameters, t: float) -> Optional[float]:
    """
    Height y(t) used by the position-vs-time graph.

    Only projectile and vertical motion have a height curve; other
    scenarios return None.
    """
    variant = VARIANTS[scenario_type]
    if variant.height is None:
        return None
    return variant.height(parameters, t)
