"""Position-vs-time graph for the 400x300 graph view."""

from __future__ import annotations

from typing import Optional

from physai.models.scenario import Parameters, ScenarioType
from physai.rendering.surface import Color, DrawingSurface, Point

# Plot area (px)
ORIGIN_X, ORIGIN_Y = 40, 260
AXIS_RIGHT, AXIS_TOP = 360, 40
PX_PER_SECOND = 30
PX_PER_METRE = 5

# Sampled domain (s)
T_MAX = 10.0
T_STEP = 0.1

AXIS_COLOR = Color(255, 255, 255, 0.3)
CURVE_COLOR = Color.from_hex("#64C8FF")
LABEL_COLOR = Color(255, 255, 255)


def sample_curve(scenario_type: ScenarioType, parameters: Parameters) -> list[Point]:
    """
    Screen points of y(t) over [0, T_MAX] that fall inside the plot area.

    Scenarios without a height curve yield no points.
    """
    # The variant table imports the rendering package
    from physai.scenarios import variant_for

    height = variant_for(scenario_type).height
    if height is None:
        return []

    points: list[Point] = []
    steps = int(round(T_MAX / T_STEP))
    for i in range(steps + 1):
        # Index-based stepping avoids float drift at the domain end
        t = i * T_STEP
        y = height(parameters, t)
        plot_y = ORIGIN_Y - y * PX_PER_METRE
        if AXIS_TOP <= plot_y <= ORIGIN_Y:
            points.append((ORIGIN_X + t * PX_PER_SECOND, plot_y))
    return points


def render_graph(
    surface: Optional[DrawingSurface],
    scenario_type: ScenarioType,
    parameters: Parameters,
) -> None:
    """Draw axes and, for projectile/vertical motion, the height curve."""
    if surface is None:
        return

    surface.clear()

    surface.stroke_polyline(
        [(ORIGIN_X, AXIS_TOP), (ORIGIN_X, ORIGIN_Y), (AXIS_RIGHT, ORIGIN_Y)],
        AXIS_COLOR,
        2,
    )

    points = sample_curve(scenario_type, parameters)
    if len(points) > 1:
        surface.stroke_polyline(points, CURVE_COLOR, 3)

    surface.draw_text("Time (s)", (340, 280), LABEL_COLOR, 12)
    surface.draw_text("Height (m)", (10, 30), LABEL_COLOR, 12)
