"""
Per-scenario frame rendering for the 800x400 simulation view.

Screen mapping: 10 px per metre, ground line at y = 350, origin at the
left edge. Every drawer is a pure function of (parameters, state), so
rendering the same inputs twice issues the same draw commands.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Optional

from physai.models.scenario import Parameters, ScenarioType
from physai.physics.kinematics import (
    FIELD_LINE_COUNT,
    MagneticState,
    OpticsState,
    PendulumState,
    PhysicalState,
    ProjectileState,
    VerticalState,
    trajectory_height,
)
from physai.rendering.surface import Color, DrawingSurface, Point

if TYPE_CHECKING:
    from physai.simulation.clock import SimulationClock

PX_PER_METRE = 10
GROUND_Y = 350

PRIMARY = Color.from_hex("#64C8FF")
ACCENT = Color.from_hex("#FF6B6B")
HIGHLIGHT = Color.from_hex("#FFD93D")
WHITE = Color(255, 255, 255)
PIVOT_GREY = Color.from_hex("#888888")

# Pendulum geometry (px)
PIVOT = (400.0, 50.0)
ROD_LENGTH = 150.0

# Optics geometry (px)
LENS_X = 400.0
LENS_TOP, LENS_BOTTOM = 100.0, 300.0
RAY_SOURCE_X = 100.0
RAY_TARGET_X = 600.0
OPTICAL_AXIS_Y = 200.0
RAY_BEND = 0.3
RAYS = ((150.0, ACCENT), (200.0, PRIMARY), (250.0, HIGHLIGHT))

# Magnet geometry (px)
MAGNET_CENTER = (400.0, 200.0)
ARC_HALF_SPAN = 0.3

ARROW_HEAD_LENGTH = 10.0
# Longer shafts are shortened to this length along the same heading
MAX_ARROW_LENGTH = 2000.0


def _draw_glow_ball(surface: DrawingSurface, center: Point, radius: float) -> None:
    surface.fill_circle(center, radius * 1.8, PRIMARY.with_alpha(0.2))
    surface.fill_circle(center, radius, PRIMARY)


def _draw_arrow(surface: DrawingSurface, start: Point, end: Point, color: Color) -> None:
    """Shaft plus a triangular head pointing from start to end."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if dx == 0 and dy == 0:
        surface.stroke_line(start, end, color, 3)
        return

    length = math.hypot(dx, dy)
    if length > MAX_ARROW_LENGTH:
        dx *= MAX_ARROW_LENGTH / length
        dy *= MAX_ARROW_LENGTH / length
        end = (start[0] + dx, start[1] + dy)
    surface.stroke_line(start, end, color, 3)

    # Heading in screen space; equals atan2(-vy, vx) for physics velocities
    heading = math.atan2(dy, dx)
    left = (
        end[0] - ARROW_HEAD_LENGTH * math.cos(heading - math.pi / 6),
        end[1] - ARROW_HEAD_LENGTH * math.sin(heading - math.pi / 6),
    )
    right = (
        end[0] - ARROW_HEAD_LENGTH * math.cos(heading + math.pi / 6),
        end[1] - ARROW_HEAD_LENGTH * math.sin(heading + math.pi / 6),
    )
    surface.fill_polygon([end, left, right], color)


def draw_projectile(surface: DrawingSurface, parameters: Parameters, state: ProjectileState) -> None:
    surface.clear()

    surface.fill_rect(0, GROUND_Y, surface.width, surface.height - GROUND_Y, PRIMARY.with_alpha(0.1))

    # Full analytic path for the current velocity and angle
    path: list[Point] = []
    for x_px in range(0, surface.width, 5):
        y = trajectory_height(parameters, x_px / PX_PER_METRE)
        if y is None:
            continue
        canvas_y = GROUND_Y - y * PX_PER_METRE
        if 0 <= canvas_y <= GROUND_Y:
            path.append((float(x_px), canvas_y))
    if len(path) > 1:
        surface.stroke_polyline(path, PRIMARY.with_alpha(0.3), 2)

    x = state.position.x * PX_PER_METRE
    canvas_y = GROUND_Y - state.position.y * PX_PER_METRE
    if canvas_y > GROUND_Y or x > surface.width:
        return

    _draw_glow_ball(surface, (x, canvas_y), 8)

    vx, vy = state.velocity.x, state.velocity.y
    tip = (x + vx * 5, canvas_y - vy * 5)
    _draw_arrow(surface, (x, canvas_y), tip, ACCENT)

    surface.draw_text(f"v = {state.speed:.1f} m/s", (x + 20, canvas_y - 20), WHITE)
    surface.draw_text(f"t = {state.t:.2f} s", (20, 30), WHITE)


def draw_vertical(surface: DrawingSurface, parameters: Parameters, state: VerticalState) -> None:
    surface.clear()

    center_x = surface.width / 2
    canvas_y = GROUND_Y - state.height * PX_PER_METRE
    if not 0 <= canvas_y <= GROUND_Y:
        return

    _draw_glow_ball(surface, (center_x, canvas_y), 10)
    _draw_arrow(surface, (center_x, canvas_y), (center_x, canvas_y - state.velocity * 3), ACCENT)

    surface.draw_text(f"v = {state.velocity:.1f} m/s", (center_x + 20, canvas_y), WHITE)
    surface.draw_text(f"h = {state.height:.1f} m", (center_x + 20, canvas_y + 20), WHITE)


def draw_pendulum(surface: DrawingSurface, parameters: Parameters, state: PendulumState) -> None:
    surface.clear()

    angle = state.angular_displacement
    bob = (
        PIVOT[0] + ROD_LENGTH * math.sin(angle),
        PIVOT[1] + ROD_LENGTH * math.cos(angle),
    )

    surface.stroke_line(PIVOT, bob, WHITE.with_alpha(0.3), 2)
    surface.fill_circle(PIVOT, 5, PIVOT_GREY)
    _draw_glow_ball(surface, bob, 15)


def draw_optics(surface: DrawingSurface, parameters: Parameters, state: OpticsState) -> None:
    surface.clear()

    surface.stroke_line((LENS_X, LENS_TOP), (LENS_X, LENS_BOTTOM), PRIMARY.with_alpha(0.8), 4)

    # Illustrative only: rays bend toward the axis, no ray trace
    for ray_y, color in RAYS:
        surface.stroke_polyline(
            [
                (RAY_SOURCE_X, ray_y),
                (LENS_X, ray_y),
                (RAY_TARGET_X, ray_y + (OPTICAL_AXIS_Y - ray_y) * RAY_BEND),
            ],
            color,
            2,
        )

    surface.draw_text("Converging Lens", (350, 320), WHITE)


def draw_magnetic(surface: DrawingSurface, parameters: Parameters, state: MagneticState) -> None:
    surface.clear()

    surface.fill_rect(350, 150, 50, 100, ACCENT)
    surface.fill_rect(400, 150, 50, 100, PRIMARY)

    for i in range(FIELD_LINE_COUNT):
        angle = i / FIELD_LINE_COUNT * 2 * math.pi
        surface.stroke_arc(
            MAGNET_CENTER,
            state.radii[i],
            angle - ARC_HALF_SPAN,
            angle + ARC_HALF_SPAN,
            PRIMARY.with_alpha(state.opacities[i]),
            2,
        )

    surface.draw_text("N", (365, 205), WHITE, 20)
    surface.draw_text("S", (415, 205), WHITE, 20)


Drawer = Callable[[DrawingSurface, Parameters, PhysicalState], None]


def render_frame(
    surface: Optional[DrawingSurface],
    scenario_type: ScenarioType,
    parameters: Parameters,
    t: float,
) -> None:
    """
    Draw exactly one frame of a scenario at elapsed time t.

    A missing surface (None) is a no-op, not an error.
    """
    if surface is None:
        return

    # The variant table imports the drawers above
    from physai.scenarios import variant_for

    variant = variant_for(scenario_type)
    variant.draw(surface, parameters, variant.state(parameters, t))


class FrameRenderer:
    """Renders frames at the clock's current time and owns the reset control."""

    def __init__(self, clock: "SimulationClock"):
        self.clock = clock

    def render(
        self,
        surface: Optional[DrawingSurface],
        scenario_type: ScenarioType,
        parameters: Parameters,
    ) -> None:
        render_frame(surface, scenario_type, parameters, self.clock.elapsed_time)

    def reset(self) -> None:
        """Restart the animation from t = 0, parameters untouched."""
        self.clock.reset()
